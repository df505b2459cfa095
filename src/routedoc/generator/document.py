"""Create the root collection document.

:func:`initialize_document` builds the empty document shell once per
export: the ``base_url`` and ``oauth_full_url`` variables, the ``info``
block with the Postman v2.1 schema URL and a generation timestamp, and an
empty ``item`` forest for :func:`~routedoc.generator.collection_tree.build_tree`
to grow.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from routedoc import __version__
from routedoc.models import CollectionInfo, ExportConfig, RootDocument, Variable

if TYPE_CHECKING:
    from routedoc.parser.extractor import RouteTable

TIMESTAMP_FORMAT = "%d %a %A, %Y %H:%M:%S %Z %z"
"""Human-readable generation timestamp: date, time and timezone."""


def initialize_document(
    config: ExportConfig,
    file_name: Optional[str] = None,
    routes: Optional[RouteTable] = None,
    now: Optional[datetime] = None,
) -> RootDocument:
    """Return a fresh root document for one export run.

    Args:
        config: Effective export configuration (``base_url``,
            ``oauth_route``, ``collection_name``).
        file_name: Collection name; defaults to ``config.collection_name``.
        routes: Route table used to resolve ``config.oauth_route`` into a
            path. Required only when ``oauth_route`` is set.
        now: Generation time; defaults to the current local time.

    Returns:
        A :class:`~routedoc.models.RootDocument` with an empty forest.

    Raises:
        RouteNotFoundError: If ``oauth_route`` names a route that is not
            in *routes* (or no route table was supplied).
    """
    oauth_path = ""
    if config.oauth_route:
        from routedoc.parser.extractor import RouteTable

        oauth_path = (routes or RouteTable([])).path_for(config.oauth_route)

    generated_at = (now or datetime.now()).astimezone()

    return RootDocument(
        variable=[
            Variable(key="base_url", value=config.base_url.rstrip("/")),
            Variable(key="oauth_full_url", value="{{base_url}}" + oauth_path),
        ],
        info=CollectionInfo(
            name=file_name or config.collection_name,
            description=(
                f"Generated by routedoc {__version__} "
                f"{generated_at.strftime(TIMESTAMP_FORMAT)}"
            ),
        ),
        item=[],
    )
