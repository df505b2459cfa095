"""Plugin system for routedoc -- discovery, loading, and lifecycle hooks.

Third-party packages register plugins in the ``routedoc.plugins``
entry-point group. :class:`PluginManager` discovers and loads them, and
:class:`HookRunner` passes request items and the compiled document through
every active plugin.
"""

from routedoc.plugins.base import Plugin
from routedoc.plugins.hooks import HookRunner
from routedoc.plugins.manager import PluginManager

__all__ = ["Plugin", "HookRunner", "PluginManager"]
