"""Route manifest parsing.

* :mod:`~routedoc.parser.loader` -- read a manifest from a file, URL or
  stdin (JSON or YAML).
* :mod:`~routedoc.parser.extractor` -- validate entries into
  :class:`~routedoc.models.RouteDescriptor` objects and index them by name.

Typical usage::

    from routedoc.parser import extract_routes, load_manifest

    table = extract_routes(load_manifest("routes.yaml"))
"""

from routedoc.parser.extractor import RouteTable, extract_routes
from routedoc.parser.loader import load_manifest

__all__ = ["RouteTable", "extract_routes", "load_manifest"]
