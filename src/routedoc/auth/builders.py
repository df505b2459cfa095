"""Built-in auth block builders.

Credentials are never written into the collection; builders reference
collection variables (``{{bearer_token}}``, ``{{api_key}}``, ...) that the
Postman user fills in. The only exception is an explicit personal bearer
token passed at export time.
"""

from __future__ import annotations

from typing import Any, Optional

from routedoc.auth.base import AuthBlockBuilder, auth_attribute
from routedoc.models import AuthRule


class NoAuthBuilder(AuthBlockBuilder):
    """Explicitly unauthenticated requests."""

    @property
    def auth_type(self) -> str:
        return "noauth"

    def build(self, rule: AuthRule, bearer: Optional[str] = None) -> dict[str, Any]:
        return {"type": "noauth"}


class BearerBuilder(AuthBlockBuilder):
    """``Authorization: Bearer`` token, defaulting to the ``bearer_token`` variable."""

    @property
    def auth_type(self) -> str:
        return "bearer"

    def build(self, rule: AuthRule, bearer: Optional[str] = None) -> dict[str, Any]:
        token = bearer or "{{bearer_token}}"
        return {"type": "bearer", "bearer": [auth_attribute("token", token)]}


class BasicBuilder(AuthBlockBuilder):
    """HTTP Basic credentials taken from collection variables."""

    @property
    def auth_type(self) -> str:
        return "basic"

    def build(self, rule: AuthRule, bearer: Optional[str] = None) -> dict[str, Any]:
        return {
            "type": "basic",
            "basic": [
                auth_attribute("username", "{{basic_username}}"),
                auth_attribute("password", "{{basic_password}}"),
            ],
        }


class APIKeyBuilder(AuthBlockBuilder):
    """Static API key sent in a header or query parameter."""

    @property
    def auth_type(self) -> str:
        return "apikey"

    def build(self, rule: AuthRule, bearer: Optional[str] = None) -> dict[str, Any]:
        return {
            "type": "apikey",
            "apikey": [
                auth_attribute("key", rule.header or "X-API-Key"),
                auth_attribute("value", "{{api_key}}"),
                auth_attribute("in", rule.location),
            ],
        }


class OAuth2Builder(AuthBlockBuilder):
    """OAuth2 token acquisition against the ``oauth_full_url`` variable.

    The access token URL points at ``{{oauth_full_url}}``, which the
    document initializer derives from the configured ``oauth_route``.
    """

    @property
    def auth_type(self) -> str:
        return "oauth2"

    def build(self, rule: AuthRule, bearer: Optional[str] = None) -> dict[str, Any]:
        return {
            "type": "oauth2",
            "oauth2": [
                auth_attribute("grant_type", rule.grant_type),
                auth_attribute("accessTokenUrl", "{{oauth_full_url}}"),
                auth_attribute("scope", " ".join(rule.scopes)),
                auth_attribute("addTokenTo", "header"),
            ],
        }
