"""Collection generator -- turn routes into a Postman folder tree.

Sub-modules:

* :mod:`~routedoc.generator.path_rules` -- folder segments per route and
  the include/skip filters applied before export.
* :mod:`~routedoc.generator.request_item` -- one Postman request per route
  and method, with query string or JSON body from sample fields.
* :mod:`~routedoc.generator.collection_tree` -- merge request items into
  nested folders, preserving insertion order.
* :mod:`~routedoc.generator.document` -- the root document shell
  (variables, info block).
* :mod:`~routedoc.generator.docs` -- Jinja2 rendering of route
  descriptions.
* :mod:`~routedoc.generator.state` -- the context-local "compiling" flag.
"""

from routedoc.generator.collection_tree import build_tree, find_folder, iter_requests
from routedoc.generator.document import initialize_document
from routedoc.generator.path_rules import filter_routes, is_included, route_segments
from routedoc.generator.request_item import build_query_string, make_request
from routedoc.generator.state import (
    compilation,
    finished,
    is_compiling,
    start_compilation,
)

__all__ = [
    "build_query_string",
    "build_tree",
    "compilation",
    "filter_routes",
    "find_folder",
    "finished",
    "initialize_document",
    "is_compiling",
    "is_included",
    "iter_requests",
    "make_request",
    "route_segments",
    "start_compilation",
]
