"""Synthesize Postman request items from routes.

One :class:`~routedoc.models.RequestItem` is produced per route and HTTP
method. The item carries everything Postman needs to replay the call:

* **name** -- the route's alias, its dotted name, or its raw uri.
* **url** -- ``{{base_url}}/<uri>`` with the uri split into ``path``
  segments exactly as declared (malformed uris are passed through, empty
  segments included).
* **auth** -- the block produced by :class:`~routedoc.auth.AuthManager`
  for the route's auth rule; this module only threads the optional
  personal bearer through.
* **description** -- the route's compiled documentation.
* **sample fields** -- a ``GET`` request carries them in the query string
  (``url.raw`` and ``url.query``); every other method carries them as a
  pretty-printed raw JSON body. Without sample fields neither is set.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any, Optional
from urllib.parse import unquote_plus, urlencode

from routedoc.auth import AuthManager, create_default_manager
from routedoc.models import (
    HeaderEntry,
    HTTPMethod,
    QueryParam,
    RequestBody,
    RequestItem,
    RequestSpec,
    RequestURL,
    RouteDescriptor,
)

BASE_URL_VARIABLE = "{{base_url}}"


def make_request(
    route: RouteDescriptor,
    method: HTTPMethod | str,
    headers: Mapping[str, str],
    fields: Optional[Mapping[str, Any]] = None,
    bearer: Optional[str] = None,
    *,
    auth_manager: Optional[AuthManager] = None,
    auth_middleware: Optional[dict[str, str]] = None,
) -> RequestItem:
    """Build the request item for *route* called with *method*.

    Args:
        route: The route being exported.
        method: HTTP method; compared case-insensitively.
        headers: Header name to value mapping sent with the request.
        fields: Sample field values in insertion order, or ``None``.
        bearer: Optional personal bearer token for the auth block.
        auth_manager: Builder registry for auth blocks. Defaults to
            :func:`~routedoc.auth.create_default_manager`.
        auth_middleware: Middleware annotation to auth type mapping used
            when the route declares no explicit auth rule.

    Returns:
        The synthesized :class:`~routedoc.models.RequestItem`.
    """
    method_name = (method.value if isinstance(method, HTTPMethod) else method).upper()
    manager = auth_manager or create_default_manager()

    url = RequestURL(
        raw=f"{BASE_URL_VARIABLE}/{route.uri}",
        host=[BASE_URL_VARIABLE],
        path=route.uri.split("/"),
    )
    request = RequestSpec(
        method=method_name,
        header=[HeaderEntry(key=key, value=value) for key, value in headers.items()],
        auth=manager.structure(route.auth_rule(auth_middleware), bearer),
        url=url,
        description=route.compile_docs(),
    )

    if fields:
        if method_name == HTTPMethod.GET.value:
            url.raw += "?" + build_query_string(fields)
            url.query = [QueryParam(key=key, value=value) for key, value in fields.items()]
        else:
            request.body = RequestBody(raw=json.dumps(fields, indent=4, default=str))

    return RequestItem(name=route.display_name(), request=request)


def build_query_string(fields: Mapping[str, Any]) -> str:
    """Return a human-readable query string for *fields*.

    Nested mappings and sequences use bracket notation
    (``tags[0]=a&filter[status]=open``), booleans become ``1``/``0`` and
    ``None`` values are omitted. The string is URL-encoded and decoded
    again so it reads naturally in Postman's address bar.

    Example::

        >>> build_query_string({"page": 2, "tags": ["a", "b"]})
        'page=2&tags[0]=a&tags[1]=b'
    """
    pairs = [pair for key, value in fields.items() for pair in _query_pairs(str(key), value)]
    return unquote_plus(urlencode(pairs))


def _query_pairs(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            yield from _query_pairs(f"{prefix}[{key}]", child)
    elif isinstance(value, (list, tuple)):
        for index, child in enumerate(value):
            yield from _query_pairs(f"{prefix}[{index}]", child)
    elif isinstance(value, bool):
        yield prefix, "1" if value else "0"
    else:
        yield prefix, str(value)
