"""Plugin manager -- discovery, loading, and lifecycle management.

This module contains :class:`PluginManager`, the central coordinator for the
plugin system. It discovers plugins registered as Python entry points,
applies enable/disable filtering from the export configuration, and provides
a lazily-cached :class:`~routedoc.plugins.hooks.HookRunner`.

Third-party packages register plugins by declaring an entry point under the
``routedoc.plugins`` group in their ``pyproject.toml``::

    [project.entry-points."routedoc.plugins"]
    my-plugin = "my_package.plugin:MyPlugin"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Optional

from routedoc.exceptions import PluginError
from routedoc.models import ExportConfig
from routedoc.plugins.base import Plugin
from routedoc.plugins.hooks import HookRunner

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "routedoc.plugins"
"""The entry-point group name used for plugin discovery."""


class PluginManager:
    """Discovers, loads, and manages the lifecycle of routedoc plugins.

    The *enabled* and *disabled* lists in
    :class:`~routedoc.models.PluginsConfig` act as an explicit
    allowlist/blocklist. When *enabled* is non-empty only those plugins are
    loaded; otherwise all discovered plugins not in *disabled* are loaded.

    Example::

        manager = PluginManager()
        loaded = manager.discover(config)
        runner = manager.get_hook_runner()
    """

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._hook_runner: Optional[HookRunner] = None

    def discover(self, config: ExportConfig) -> list[str]:
        """Discover and load plugins via Python entry points.

        Returns:
            Names of the plugins that were loaded. Plugins that fail to
            load are logged as warnings and skipped.
        """
        loaded_names: list[str] = []
        enabled_set = set(config.plugins.enabled)
        disabled_set = set(config.plugins.disabled)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name

            if enabled_set and name not in enabled_set:
                logger.debug("Plugin '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Plugin '%s' is disabled, skipping", name)
                continue

            try:
                plugin_cls = ep.load()
                plugin: Plugin = plugin_cls()
                self.load_plugin(name, plugin, config)
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load plugin '%s': %s", name, exc)

        return loaded_names

    def load_plugin(self, name: str, plugin: Plugin, config: ExportConfig) -> None:
        """Initialise and register a single plugin instance.

        Raises:
            PluginError: If a plugin with the same *name* is already loaded.
        """
        if name in self._plugins:
            raise PluginError(f"Plugin '{name}' is already loaded")

        plugin.on_init(config)
        self._plugins[name] = plugin
        self._hook_runner = None
        logger.info("Loaded plugin '%s' v%s", name, plugin.version)

    def list_plugins(self) -> list[dict[str, str]]:
        """List loaded plugins as ``name`` / ``version`` / ``description`` dicts."""
        return [
            {
                "name": plugin.name,
                "version": plugin.version,
                "description": plugin.description,
            }
            for plugin in self._plugins.values()
        ]

    def get_hook_runner(self) -> HookRunner:
        """Return the (cached) :class:`~routedoc.plugins.hooks.HookRunner`."""
        if self._hook_runner is None:
            self._hook_runner = HookRunner(list(self._plugins.values()))
        return self._hook_runner

    def cleanup(self) -> None:
        """Call every plugin's ``cleanup`` and reset internal state.

        A failing plugin is logged and does not stop the others.
        """
        for name, plugin in self._plugins.items():
            try:
                plugin.cleanup()
            except Exception as exc:
                logger.warning("Error cleaning up plugin '%s': %s", name, exc)
        self._plugins.clear()
        self._hook_runner = None
