"""Abstract base class for Postman auth block builders.

Every route that requires credentials is exported with an ``auth`` block
telling Postman how to authenticate the request. Each supported auth type
(``bearer``, ``basic``, ``apikey``, ``oauth2``, ``noauth``) has one
:class:`AuthBlockBuilder` that turns an :class:`~routedoc.models.AuthRule`
into that block.

To support a new auth type, subclass :class:`AuthBlockBuilder`, set the
:attr:`~AuthBlockBuilder.auth_type` property, implement
:meth:`~AuthBlockBuilder.build`, and register an instance with
:class:`~routedoc.auth.manager.AuthManager`.

See Also:
    :mod:`routedoc.auth.manager` for registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from routedoc.models import AuthRule


def auth_attribute(key: str, value: Any) -> dict[str, Any]:
    """Return one ``{key, value, type}`` entry of a Postman auth block."""
    return {"key": key, "value": value, "type": "string"}


class AuthBlockBuilder(ABC):
    """Abstract base class for auth block builders.

    Builders are registered with :class:`~routedoc.auth.manager.AuthManager`
    and looked up by their ``auth_type`` at export time.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the auth type identifier this builder handles.

        Returns:
            A lowercase string such as ``"bearer"`` or ``"oauth2"``.
        """
        ...

    @abstractmethod
    def build(self, rule: AuthRule, bearer: Optional[str] = None) -> dict[str, Any]:
        """Return the Postman ``auth`` block for *rule*.

        Args:
            rule: The route's auth rule.
            bearer: Optional personal bearer token to embed instead of a
                collection variable placeholder.

        Returns:
            A JSON-ready dict with a ``type`` key and, for every type but
            ``noauth``, a list of attributes under the same key.
        """
        ...
