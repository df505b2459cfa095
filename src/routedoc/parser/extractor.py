"""Validate route manifests into :class:`~routedoc.models.RouteDescriptor` objects.

This module walks the ``routes`` list of a loaded manifest and validates
each entry against :class:`~routedoc.models.RouteDescriptor`. Validation
errors are reported with the entry's index and uri so that a broken
manifest points at the offending route.

The result is a :class:`RouteTable`: the routes in manifest order plus a
by-name index used to resolve routes referenced from configuration (such
as ``oauth_route``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from routedoc.exceptions import ManifestError, RouteNotFoundError
from routedoc.models import RouteDescriptor

logger = logging.getLogger(__name__)


class RouteTable:
    """Ordered, read-only collection of routes with a by-name index.

    Later routes with a duplicate name do not replace earlier ones in the
    index, mirroring how routers resolve the first registration.
    """

    def __init__(self, routes: list[RouteDescriptor]) -> None:
        self._routes = list(routes)
        self._by_name: dict[str, RouteDescriptor] = {}
        for route in self._routes:
            if route.name is not None:
                self._by_name.setdefault(route.name, route)

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def get(self, name: str) -> RouteDescriptor:
        """Return the route registered under *name*.

        Raises:
            RouteNotFoundError: If no route carries that name.
        """
        route = self._by_name.get(name)
        if route is None:
            raise RouteNotFoundError(f"Route '{name}' is not defined in the manifest")
        return route

    def path_for(self, name: str) -> str:
        """Return the relative path of the named route, with a leading slash."""
        return "/" + self.get(name).uri


def extract_routes(raw: dict[str, Any]) -> RouteTable:
    """Build a :class:`RouteTable` from a loaded manifest.

    Args:
        raw: Manifest dict as returned by
            :func:`~routedoc.parser.loader.load_manifest`.

    Returns:
        The validated routes in manifest order.

    Raises:
        ManifestError: If any entry is not an object or fails validation.
    """
    routes: list[RouteDescriptor] = []
    for index, entry in enumerate(raw.get("routes", [])):
        if not isinstance(entry, dict):
            raise ManifestError(
                f"Route #{index} must be an object (got {type(entry).__name__})"
            )
        try:
            routes.append(RouteDescriptor.model_validate(_normalise_entry(entry)))
        except ValidationError as exc:
            label = entry.get("uri", "?")
            raise ManifestError(f"Invalid route #{index} ({label}): {exc}") from exc

    logger.debug("Extracted %d routes from manifest", len(routes))
    return RouteTable(routes)


def _normalise_entry(entry: dict[str, Any]) -> dict[str, Any]:
    """Accept the spellings route dumps commonly use."""
    data = dict(entry)
    if "methods" not in data and "method" in data:
        data["methods"] = data.pop("method")
    if "group_depth" not in data and "structure_depth" in data:
        data["group_depth"] = data.pop("structure_depth")
    if isinstance(data.get("middleware"), str):
        data["middleware"] = [data["middleware"]]
    if isinstance(data.get("auth"), str):
        data["auth"] = {"type": data["auth"]}
    return data
