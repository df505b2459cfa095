"""Hook runner for the plugin lifecycle.

:class:`HookRunner` executes ``on_request_item``, ``on_document`` and
``on_error`` across all loaded plugins in registration order. The chain
is a pipeline: each plugin receives the output of the previous one.
"""

from __future__ import annotations

import logging

from routedoc.models import HTTPMethod, RequestItem, RootDocument, RouteDescriptor
from routedoc.plugins.base import Plugin

logger = logging.getLogger(__name__)


class HookRunner:
    """Executes plugin hooks across all loaded plugins in registration order.

    The runner holds an immutable snapshot of the plugin list at creation
    time. If new plugins are loaded, a new runner must be obtained from
    the manager.
    """

    def __init__(self, plugins: list[Plugin]) -> None:
        self._plugins = list(plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def run_request_item(
        self, route: RouteDescriptor, method: HTTPMethod, item: RequestItem
    ) -> RequestItem:
        """Pass *item* through every plugin's ``on_request_item``.

        A plugin returning something other than a
        :class:`~routedoc.models.RequestItem` leaves the item unchanged.
        """
        for plugin in self._plugins:
            result = plugin.on_request_item(route, method, item)
            if isinstance(result, RequestItem):
                item = result
        return item

    def run_document(self, document: RootDocument) -> RootDocument:
        """Pass *document* through every plugin's ``on_document``."""
        for plugin in self._plugins:
            result = plugin.on_document(document)
            if isinstance(result, RootDocument):
                document = result
        return document

    def run_error(self, error: Exception) -> None:
        """Execute ``on_error`` across all plugins.

        A plugin's own failure is logged and swallowed so that it cannot
        mask the original error.
        """
        for plugin in self._plugins:
            try:
                plugin.on_error(error)
            except Exception as exc:
                logger.warning("Plugin '%s' failed in on_error: %s", plugin.name, exc)
