"""Tests for the plugin system -- base class defaults, hook runner, manager."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from routedoc.exceptions import PluginError
from routedoc.generator import initialize_document, make_request
from routedoc.models import ExportConfig, HeaderEntry, HTTPMethod, PluginsConfig
from routedoc.plugins import HookRunner, Plugin, PluginManager


class TaggingPlugin(Plugin):
    """Adds a header to every request and records calls."""

    def __init__(self, plugin_name: str = "tagging", header: str = "X-Tag") -> None:
        self._name = plugin_name
        self._header = header
        self.config = None
        self.errors: list[Exception] = []
        self.cleaned_up = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return "1.2.3"

    def on_init(self, config: ExportConfig) -> None:
        self.config = config

    def on_request_item(self, route, method, item):
        item.request.header.append(HeaderEntry(key=self._header, value=self._name))
        return item

    def on_document(self, document):
        document.info.name = f"{document.info.name} ({self._name})"
        return document

    def on_error(self, error: Exception) -> None:
        self.errors.append(error)

    def cleanup(self) -> None:
        self.cleaned_up = True


class MinimalPlugin(Plugin):
    @property
    def name(self) -> str:
        return "minimal"


class ExplodingPlugin(MinimalPlugin):
    def on_error(self, error: Exception) -> None:
        raise RuntimeError("plugin bug")

    def cleanup(self) -> None:
        raise RuntimeError("cleanup bug")


@pytest.fixture
def config() -> ExportConfig:
    return ExportConfig()


@pytest.fixture
def manager() -> PluginManager:
    return PluginManager()


@pytest.fixture
def item(make_route):
    return make_request(make_route("users", name="users.index"), "GET", {})


# ------------------------------------------------------------------ #
# Plugin base class
# ------------------------------------------------------------------ #


class TestPluginDefaults:
    def test_cannot_instantiate_without_name(self) -> None:
        with pytest.raises(TypeError):
            Plugin()  # type: ignore[abstract]

    def test_default_metadata(self) -> None:
        plugin = MinimalPlugin()
        assert plugin.version == "0.1.0"
        assert plugin.description == ""

    def test_default_hooks_pass_through(self, make_route, item, config) -> None:
        plugin = MinimalPlugin()
        plugin.on_init(config)
        assert plugin.on_request_item(make_route("users"), HTTPMethod.GET, item) is item
        document = initialize_document(config)
        assert plugin.on_document(document) is document
        plugin.on_error(RuntimeError("x"))
        plugin.cleanup()


# ------------------------------------------------------------------ #
# HookRunner
# ------------------------------------------------------------------ #


class TestHookRunner:
    def test_request_item_chain_order(self, make_route, item) -> None:
        runner = HookRunner([TaggingPlugin("first"), TaggingPlugin("second")])
        result = runner.run_request_item(make_route("users"), HTTPMethod.GET, item)
        assert [h.value for h in result.request.header] == ["first", "second"]

    def test_non_item_result_is_ignored(self, make_route, item) -> None:
        class NonePlugin(MinimalPlugin):
            def on_request_item(self, route, method, item):
                return None

        result = HookRunner([NonePlugin()]).run_request_item(make_route("users"), HTTPMethod.GET, item)
        assert result is item

    def test_document_chain(self, config) -> None:
        runner = HookRunner([TaggingPlugin("a"), TaggingPlugin("b")])
        document = runner.run_document(initialize_document(config))
        assert document.info.name == "API (a) (b)"

    def test_error_hooks_do_not_cascade(self) -> None:
        tagging = TaggingPlugin()
        error = ValueError("boom")
        HookRunner([ExplodingPlugin(), tagging]).run_error(error)
        assert tagging.errors == [error]

    def test_empty_runner(self, make_route, item) -> None:
        runner = HookRunner([])
        assert len(runner) == 0
        assert runner.run_request_item(make_route("users"), HTTPMethod.GET, item) is item


# ------------------------------------------------------------------ #
# PluginManager
# ------------------------------------------------------------------ #


class TestPluginManager:
    def test_load_plugin_calls_on_init(self, manager, config) -> None:
        plugin = TaggingPlugin()
        manager.load_plugin("tagging", plugin, config)
        assert plugin.config is config
        document = manager.get_hook_runner().run_document(initialize_document(config))
        assert document.info.name == "API (tagging)"

    def test_duplicate_raises(self, manager, config) -> None:
        manager.load_plugin("tagging", TaggingPlugin(), config)
        with pytest.raises(PluginError, match="already loaded"):
            manager.load_plugin("tagging", TaggingPlugin(), config)

    def test_list_plugins(self, manager, config) -> None:
        manager.load_plugin("tagging", TaggingPlugin(), config)
        assert manager.list_plugins() == [
            {"name": "tagging", "version": "1.2.3", "description": ""}
        ]

    def test_hook_runner_cached_and_invalidated(self, manager, config) -> None:
        first = manager.get_hook_runner()
        assert manager.get_hook_runner() is first
        manager.load_plugin("tagging", TaggingPlugin(), config)
        second = manager.get_hook_runner()
        assert second is not first
        assert len(second) == 1

    def test_cleanup_resilient(self, manager, config) -> None:
        tagging = TaggingPlugin()
        manager.load_plugin("exploding", ExplodingPlugin(), config)
        manager.load_plugin("tagging", tagging, config)
        manager.cleanup()
        assert tagging.cleaned_up
        assert manager.list_plugins() == []


def _entry_point(name: str, cls) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = cls
    return ep


class TestDiscover:
    def _discover(self, config: ExportConfig, eps: list) -> tuple[PluginManager, list[str]]:
        manager = PluginManager()
        with patch("routedoc.plugins.manager.importlib.metadata.entry_points", return_value=eps) as mocked:
            loaded = manager.discover(config)
        mocked.assert_called_once_with(group="routedoc.plugins")
        return manager, loaded

    def test_loads_all(self) -> None:
        eps = [_entry_point("tagging", TaggingPlugin), _entry_point("minimal", MinimalPlugin)]
        _, loaded = self._discover(ExportConfig(), eps)
        assert loaded == ["tagging", "minimal"]

    def test_respects_disabled(self) -> None:
        eps = [_entry_point("tagging", TaggingPlugin), _entry_point("minimal", MinimalPlugin)]
        config = ExportConfig(plugins=PluginsConfig(disabled=["tagging"]))
        _, loaded = self._discover(config, eps)
        assert loaded == ["minimal"]

    def test_respects_enabled_allowlist(self) -> None:
        eps = [_entry_point("tagging", TaggingPlugin), _entry_point("minimal", MinimalPlugin)]
        config = ExportConfig(plugins=PluginsConfig(enabled=["minimal"]))
        _, loaded = self._discover(config, eps)
        assert loaded == ["minimal"]

    def test_failed_load_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        broken = MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("no module")
        eps = [broken, _entry_point("minimal", MinimalPlugin)]
        with caplog.at_level("WARNING", logger="routedoc.plugins.manager"):
            _, loaded = self._discover(ExportConfig(), eps)
        assert loaded == ["minimal"]
        assert "Failed to load plugin 'broken'" in caplog.text
