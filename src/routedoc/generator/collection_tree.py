"""Merge request items into the collection's folder tree.

The collection is a forest of :class:`~routedoc.models.FolderNode` objects
hanging off :class:`~routedoc.models.RootDocument.item`. Every request
item is filed under the folder chain computed by
:func:`~routedoc.generator.path_rules.route_segments`:

* Descending one segment at a time, an existing folder child with the same
  name is reused; a missing one is created and appended, so children keep
  insertion order.
* The last segment names the folder that holds the request item. Request
  items are appended, never merged, so several methods on one route (or
  several routes sharing a folder) accumulate side by side.

Each folder owns its ``item`` list outright; descent simply rebinds the
cursor to the owned child.
"""

from __future__ import annotations

from typing import Optional, Union

from routedoc.models import FolderNode, RequestItem, RootDocument

Container = Union[RootDocument, FolderNode]


def build_tree(root: Container, segments: list[str], request: RequestItem) -> None:
    """File *request* under the folder chain *segments* inside *root*.

    Args:
        root: The document (or folder) whose ``item`` list is grown in
            place.
        segments: Folder names from the top level down. Must not be empty.
        request: The request item to insert.

    Raises:
        ValueError: If *segments* is empty; every request item lives in
            at least one folder.

    Example::

        build_tree(document, ["users", "orders"], show_order)
        build_tree(document, ["users", "orders"], delete_order)
        # document.item == [users[orders[show_order, delete_order]]]
    """
    if not segments:
        raise ValueError("A request item needs at least one folder segment")

    cursor: Container = root
    destination = segments[-1]

    for segment in segments:
        folder = find_folder(cursor, segment)
        if folder is not None:
            cursor = folder
            if segment == destination:
                cursor.item.append(request)
        else:
            folder = FolderNode(
                name=segment,
                item=[request] if segment == destination else [],
            )
            cursor.item.append(folder)
            cursor = folder


def find_folder(container: Container, name: str) -> Optional[FolderNode]:
    """Return the direct folder child of *container* named *name*, if any."""
    for child in container.item:
        if isinstance(child, FolderNode) and child.name == name:
            return child
    return None


def iter_requests(container: Container, trail: tuple[str, ...] = ()):  # noqa: ANN201
    """Yield ``(folder_trail, request_item)`` pairs depth-first."""
    for child in container.item:
        if isinstance(child, FolderNode):
            yield from iter_requests(child, trail + (child.name,))
        else:
            yield trail, child
