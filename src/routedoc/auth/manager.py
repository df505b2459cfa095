"""Auth manager -- registry and dispatcher for auth block builders.

The :class:`AuthManager` maps auth-type strings (``"bearer"``,
``"oauth2"``, ...) to :class:`~routedoc.auth.base.AuthBlockBuilder`
instances and exposes :meth:`~AuthManager.structure`, which the request
item synthesizer calls once per request.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with every built-in builder.
"""

from __future__ import annotations

from typing import Any, Optional

from routedoc.auth.base import AuthBlockBuilder
from routedoc.exceptions import AuthError
from routedoc.models import AuthRule


class AuthManager:
    """Registry and dispatcher for auth block builders.

    Example::

        from routedoc.auth import AuthManager
        from routedoc.auth.builders import BearerBuilder

        manager = AuthManager()
        manager.register(BearerBuilder())
        block = manager.structure(AuthRule(type="bearer"))
    """

    def __init__(self) -> None:
        self._builders: dict[str, AuthBlockBuilder] = {}

    def register(self, builder: AuthBlockBuilder) -> None:
        """Register a builder, keyed by its :attr:`~AuthBlockBuilder.auth_type`.

        A builder already registered for the same type is replaced.
        """
        self._builders[builder.auth_type] = builder

    def get_builder(self, auth_type: str) -> AuthBlockBuilder:
        """Retrieve a registered builder by its auth type identifier.

        Raises:
            AuthError: If no builder is registered for *auth_type*.
        """
        builder = self._builders.get(auth_type)
        if builder is None:
            available = ", ".join(self.list_types()) or "(none)"
            raise AuthError(
                f"No auth builder registered for type '{auth_type}'. "
                f"Available types: {available}"
            )
        return builder

    def structure(
        self, rule: Optional[AuthRule], bearer: Optional[str] = None
    ) -> dict[str, Any]:
        """Return the Postman ``auth`` block for a route.

        Args:
            rule: The route's resolved auth rule. ``None`` means the route
                is public and yields a ``noauth`` block.
            bearer: Optional personal bearer token. When given, every
                authenticated route is exported with a bearer block
                carrying this token, whatever its declared type.

        Returns:
            A JSON-ready auth block.

        Raises:
            AuthError: If the rule's type has no registered builder.
        """
        if rule is None:
            return {"type": "noauth"}
        if bearer and rule.type != "noauth":
            return self.get_builder("bearer").build(rule, bearer)
        return self.get_builder(rule.type).build(rule, bearer)

    def list_types(self) -> list[str]:
        """Return the identifiers of all registered auth types, sorted."""
        return sorted(self._builders.keys())


def create_default_manager() -> AuthManager:
    """Create an :class:`AuthManager` pre-loaded with all built-in builders.

    Registered types: ``apikey``, ``basic``, ``bearer``, ``noauth``,
    ``oauth2``.
    """
    from routedoc.auth.builders import (
        APIKeyBuilder,
        BasicBuilder,
        BearerBuilder,
        NoAuthBuilder,
        OAuth2Builder,
    )

    manager = AuthManager()
    manager.register(NoAuthBuilder())
    manager.register(BearerBuilder())
    manager.register(BasicBuilder())
    manager.register(APIKeyBuilder())
    manager.register(OAuth2Builder())
    return manager
