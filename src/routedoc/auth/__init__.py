"""Postman auth blocks for exported requests.

The main entry points are:

- :class:`AuthBlockBuilder` -- abstract base class for one auth type.
- :class:`AuthManager` -- registry mapping auth type strings to builders.
- :func:`create_default_manager` -- factory returning an :class:`AuthManager`
  pre-loaded with all built-in builders.

Typical usage::

    from routedoc.auth import create_default_manager

    manager = create_default_manager()
    block = manager.structure(route.auth_rule(config.auth_middleware))
"""

from routedoc.auth.base import AuthBlockBuilder
from routedoc.auth.manager import AuthManager, create_default_manager

__all__ = ["AuthBlockBuilder", "AuthManager", "create_default_manager"]
