"""Folder placement rules for collection generation.

This module decides where in the collection tree each route is filed. A
route's folder chain comes from its dotted *name* when it has one, and
from its *uri* otherwise:

1. **Named routes** -- the name is split on ``.``. With a positive
   ``group_depth`` the first ``group_depth`` segments form the folder
   path; without one the last segment (the action, e.g. ``show``) is
   dropped.
2. **Unnamed routes** (no name, or an empty one) -- the uri is split
   on ``/`` and every segment is kept. A depth cap never applies to
   uri-derived segments.
3. Empty segments (leading/trailing separators, ``..``) are removed.

The module also carries the route filters applied before a route reaches
the generator (:func:`filter_routes`).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from routedoc.models import HTTPMethod, RouteDescriptor


def route_segments(route: RouteDescriptor) -> list[str]:
    """Return the ordered folder names under which *route* is filed.

    Args:
        route: The route to place.

    Returns:
        Folder names from the top of the tree down to the folder that
        directly holds the route's request items.

    Example::

        >>> route_segments(RouteDescriptor(uri="users/{user}/orders/{order}",
        ...                                methods=["GET"], name="users.orders.show"))
        ['users', 'orders']
        >>> route_segments(RouteDescriptor(uri="health/check", methods=["GET"]))
        ['health', 'check']
    """
    if not route.name:
        names = route.uri.split("/")
    else:
        names = route.name.split(".")
        depth = route.structure_depth()
        if depth:
            names = names[:depth]
        else:
            names = names[:-1]

    return [name for name in names if name]


def is_included(uri: str, include_prefix: Optional[list[str] | str]) -> bool:
    """Return ``True`` when *uri* matches one of the configured prefixes.

    Prefixes are compared without their leading slash, matching the
    stored form of :attr:`~routedoc.models.RouteDescriptor.uri`. No
    prefix means every uri is included.
    """
    if not include_prefix:
        return True
    prefixes = include_prefix if isinstance(include_prefix, list) else [include_prefix]
    return any(uri.startswith(prefix.lstrip("/")) for prefix in prefixes)


def filter_routes(
    routes: Iterable[RouteDescriptor],
    include_prefix: Optional[list[str] | str] = None,
    skip_methods: Iterable[str] = (),
) -> Iterator[tuple[RouteDescriptor, HTTPMethod]]:
    """Yield ``(route, method)`` pairs that should be exported.

    Args:
        routes: Routes in manifest order.
        include_prefix: Optional uri prefix (or list of prefixes).
        skip_methods: HTTP methods never exported (e.g. ``HEAD``).

    Yields:
        One pair per allowed method of every included route, preserving
        manifest order and each route's method order.
    """
    skipped = {method.upper() for method in skip_methods}
    for route in routes:
        if not is_included(route.uri, include_prefix):
            continue
        for method in route.methods:
            if method.value in skipped:
                continue
            yield route, method
