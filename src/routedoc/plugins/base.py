"""Abstract base class for routedoc plugins.

Every plugin must subclass :class:`Plugin` and implement the :attr:`name`
property. The lifecycle hooks (``on_init``, ``on_request_item``,
``on_document``, ``on_error``, ``cleanup``) are optional -- default
implementations are no-ops so plugins only override what they need.

Plugins are registered as entry points in the ``routedoc.plugins`` group
and discovered at runtime by :class:`~routedoc.plugins.manager.PluginManager`.

Example:
    A plugin adding a saved example response placeholder to every item::

        class ResponsesPlugin(Plugin):
            @property
            def name(self) -> str:
                return "responses"

            def on_request_item(self, route, method, item):
                item.request.header.append(HeaderEntry(key="X-Doc", value="1"))
                return item
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from routedoc.models import ExportConfig, HTTPMethod, RequestItem, RootDocument, RouteDescriptor


class Plugin(ABC):
    """Base class for all routedoc plugins.

    The plugin lifecycle is:

    1. Instantiation -- the :class:`PluginManager` calls the no-arg constructor.
    2. :meth:`on_init` -- called once with the export configuration.
    3. :meth:`on_request_item` -- once per synthesized request item.
    4. :meth:`on_document` -- once per compiled document.
    5. :meth:`cleanup` -- called once during shutdown.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique plugin name used for discovery and logging."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    def on_init(self, config: ExportConfig) -> None:
        """Called once when the plugin is loaded by the :class:`PluginManager`."""

    def on_request_item(
        self, route: RouteDescriptor, method: HTTPMethod, item: RequestItem
    ) -> RequestItem:
        """Called after a request item is synthesized, before it is filed.

        Returns:
            The (possibly modified or replaced) request item.
        """
        return item

    def on_document(self, document: RootDocument) -> RootDocument:
        """Called once the whole tree is built, before the document is written."""
        return document

    def on_error(self, error: Exception) -> None:
        """Called when compilation raises.

        Exceptions raised here are swallowed by the
        :class:`~routedoc.plugins.hooks.HookRunner` so they cannot mask
        the original failure.
        """

    def cleanup(self) -> None:
        """Called once during shutdown to release plugin resources."""
