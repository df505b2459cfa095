"""Canonical Pydantic models shared across all routedoc modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory
or in a project-local ``routedoc.json``:
    :class:`CacheConfig`, :class:`PluginsConfig`, and :class:`ExportConfig`.

**Route models** -- produced by the manifest extractor and consumed read-only
by the collection generator:
    :class:`HTTPMethod`, :class:`AuthRule`, and :class:`RouteDescriptor`.

**Collection models** -- the Postman Collection v2.1 document built by the
generator:
    :class:`Variable`, :class:`CollectionInfo`, :class:`QueryParam`,
    :class:`HeaderEntry`, :class:`RequestURL`, :class:`RequestBody`,
    :class:`RequestSpec`, :class:`RequestItem`, :class:`FolderNode`, and
    :class:`RootDocument`.

All models use Pydantic v2. Collection models are dumped with
``by_alias=True, exclude_none=True`` so that optional blocks (``query``,
``body``) are omitted entirely rather than serialised as ``null``.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

POSTMAN_SCHEMA_URL = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
"""Schema identifier written to ``info.schema`` of every exported collection."""


# --- Configuration Models ---


class CacheConfig(BaseModel):
    """Remote manifest cache settings stored in :class:`ExportConfig`."""

    enabled: bool = Field(default=True, description="Cache manifests fetched by URL")
    ttl_seconds: int = Field(default=300, description="Cache TTL in seconds")


class PluginsConfig(BaseModel):
    """Explicit plugin allow/deny lists stored in :class:`ExportConfig`."""

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)


def _default_headers() -> dict[str, str]:
    return {"Accept": "application/json", "Content-Type": "application/json"}


class ExportConfig(BaseModel):
    """Effective export configuration.

    Loaded from ``~/.config/routedoc/config.json`` and ``./routedoc.json``
    and overridden by environment variables and CLI flags; see
    :func:`~routedoc.config.resolve_config` for the precedence chain.

    Extra keys are preserved in ``model_extra`` so that plugins can read
    their own settings from the same file.
    """

    model_config = ConfigDict(extra="allow")

    routes: Optional[str] = Field(
        default=None, description="Route manifest source: file path, URL, or '-'"
    )
    base_url: str = Field(
        default="http://localhost", description="Value of the base_url variable"
    )
    oauth_route: Optional[str] = Field(
        default=None, description="Route name whose path forms oauth_full_url"
    )
    enable_formdata: bool = Field(
        default=True, description="Generate sample query/body fields"
    )
    factories_path: Optional[str] = Field(
        default=None, description="Directory or file holding sample factories"
    )
    collection_name: str = Field(default="API", description="Collection info.name")
    output: Optional[str] = Field(
        default=None, description="Output file path ('-' for stdout)"
    )
    headers: dict[str, str] = Field(default_factory=_default_headers)
    include_prefix: Optional[list[str] | str] = Field(
        default=None,
        description="Only export uris starting with this prefix (e.g. 'api/')",
    )
    skip_methods: list[str] = Field(default_factory=lambda: ["HEAD", "OPTIONS"])
    auth_middleware: dict[str, str] = Field(
        default_factory=lambda: {"auth": "bearer", "auth:api": "oauth2"},
        description="Middleware annotation -> auth type for routes without an explicit rule",
    )
    bearer_source: Optional[str] = Field(
        default=None,
        description="Credential source for a personal bearer: env:VAR, file:/path, prompt",
    )
    cache: CacheConfig = Field(default_factory=CacheConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    def output_path(self) -> str:
        """Return the configured output path or one derived from the collection name."""
        if self.output:
            return self.output
        stem = "-".join(self.collection_name.lower().split()) or "collection"
        return f"{stem}.postman_collection.json"


# --- Route Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods a route may declare."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class AuthRule(BaseModel):
    """Credential requirement of a route.

    The ``type`` field selects the Postman auth block emitted for the
    route (``noauth``, ``bearer``, ``basic``, ``apikey``, ``oauth2``); the
    remaining fields feed the matching builder in
    :mod:`routedoc.auth.builders`.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Auth type: noauth, bearer, basic, apikey, oauth2")
    header: Optional[str] = Field(
        default=None, description="Header or query name for apikey auth"
    )
    location: str = Field(default="header", description="apikey location: header, query")
    scopes: list[str] = Field(default_factory=list)
    grant_type: str = Field(default="password_credentials")


class RouteDescriptor(BaseModel):
    """Read-only view of one declared route.

    Optional documentation features (display alias, structure depth, docs
    compilation, auth resolution) are explicit fields; the capability
    methods below answer for them so callers never probe for attributes.
    """

    model_config = ConfigDict(frozen=True)

    uri: str
    methods: list[HTTPMethod] = Field(min_length=1)
    name: Optional[str] = None
    alias: Optional[str] = None
    auth: Optional[AuthRule] = None
    description: Optional[str] = None
    group_depth: Optional[int] = None
    expands: list[str] = Field(default_factory=list)
    scopes: list[str] = Field(default_factory=list)
    doc_pattern: Optional[str] = None
    form: Optional[str] = Field(
        default=None, description="Input shape identifier for the factory registry"
    )
    fields: dict[str, Any] = Field(
        default_factory=dict, description="Inline input shape: field -> type spec"
    )
    middleware: list[str] = Field(default_factory=list)

    @field_validator("uri", mode="before")
    @classmethod
    def _strip_leading_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lstrip("/")
        return value

    @field_validator("methods", mode="before")
    @classmethod
    def _normalise_methods(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list):
            return [m.upper() if isinstance(m, str) else m for m in value]
        return value

    @field_validator("group_depth")
    @classmethod
    def _zero_depth_is_uncapped(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            return None
        return value

    def display_name(self) -> str:
        """Alias when set and non-empty, else the route name, else the raw uri."""
        if self.alias:
            return self.alias
        return self.name or self.uri

    def structure_depth(self) -> Optional[int]:
        """Number of name segments that form the folder path, if capped."""
        return self.group_depth

    def compile_docs(self) -> str:
        """Render the request description for this route."""
        from routedoc.generator.docs import render_route_docs

        return render_route_docs(self)

    def auth_rule(self, auth_middleware: Optional[dict[str, str]] = None) -> Optional[AuthRule]:
        """Return the explicit auth rule, or one implied by a middleware annotation."""
        if self.auth is not None:
            return self.auth
        for annotation in self.middleware:
            auth_type = (auth_middleware or {}).get(annotation)
            if auth_type:
                return AuthRule(type=auth_type, scopes=list(self.scopes))
        return None


# --- Collection Models ---


class Variable(BaseModel):
    """A collection-level ``{key, value}`` variable."""

    key: str
    value: str


class CollectionInfo(BaseModel):
    """The collection ``info`` block."""

    name: Optional[str] = None
    schema_: str = Field(default=POSTMAN_SCHEMA_URL, alias="schema")
    description: str = ""

    model_config = {"populate_by_name": True}


class QueryParam(BaseModel):
    key: str
    value: Any = None


class HeaderEntry(BaseModel):
    key: str
    value: str


class RequestURL(BaseModel):
    """Decomposed request URL.

    ``path`` is the uri split on ``/`` without filtering, so malformed
    uris keep their empty segments.
    """

    raw: str
    host: list[str] = Field(default_factory=lambda: ["{{base_url}}"])
    path: list[str] = Field(default_factory=list)
    query: Optional[list[QueryParam]] = None


class RequestBody(BaseModel):
    """Raw JSON request body."""

    mode: str = "raw"
    raw: str
    options: dict[str, Any] = Field(
        default_factory=lambda: {"raw": {"language": "json"}}
    )


class RequestSpec(BaseModel):
    method: str
    header: list[HeaderEntry] = Field(default_factory=list)
    auth: dict[str, Any] = Field(default_factory=lambda: {"type": "noauth"})
    url: RequestURL
    body: Optional[RequestBody] = None
    description: str = ""


class RequestItem(BaseModel):
    """A leaf of the collection tree: one synthesized request."""

    name: str
    request: RequestSpec


class FolderNode(BaseModel):
    """A named folder owning its children outright."""

    name: str
    item: list[Union[FolderNode, RequestItem]] = Field(default_factory=list)


class RootDocument(BaseModel):
    """The complete exported collection.

    Created once per export by
    :func:`~routedoc.generator.document.initialize_document` and grown in
    place by :func:`~routedoc.generator.collection_tree.build_tree`.
    """

    variable: list[Variable] = Field(default_factory=list)
    info: CollectionInfo = Field(default_factory=CollectionInfo)
    item: list[Union[FolderNode, RequestItem]] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready Postman representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


FolderNode.model_rebuild()
RootDocument.model_rebuild()
