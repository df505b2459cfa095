"""Init command -- point a project at its route manifest.

Implements ``routedoc init``: loads the manifest once to validate it,
reports what was found, and writes a project-local ``routedoc.json`` so
later ``routedoc export`` runs need no flags.
"""

from __future__ import annotations

import re
from typing import Optional

import typer

from routedoc.output import debug, info, success, suggest


def init_command(
    routes: str = typer.Option(
        ...,
        "--routes",
        "-r",
        help="Route manifest file, URL, or '-' for stdin.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Value of the base_url collection variable."
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Collection name."
    ),
) -> None:
    """Validate a route manifest and write ./routedoc.json.

    Example::

        routedoc init --routes routes.yaml --base-url https://api.example.com
        routedoc init --routes http://localhost:8000/_routes --name "Shop API"
    """
    from routedoc.commands import fail
    from routedoc.config import load_project_config, save_project_config
    from routedoc.exceptions import RoutedocError
    from routedoc.parser import extract_routes, load_manifest

    info(f"Loading routes from: {routes}")
    try:
        table = extract_routes(load_manifest(routes))
    except RoutedocError as exc:
        fail(exc)

    named = sum(1 for route in table if route.name)
    info(f"Found {len(table)} routes ({named} named)")

    project = load_project_config() or {}
    if project:
        debug("Updating existing routedoc.json")
    project["routes"] = routes
    if base_url is not None:
        project["base_url"] = base_url
    if name is not None:
        project["collection_name"] = name

    path = save_project_config(project)
    success(f"Wrote {path.name}")
    suggest("Preview folders: routedoc inspect tree")
    suggest(f"Export: routedoc export -o {_slugify(name or 'api')}.postman_collection.json")


def _slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip()).strip("-")
    return slug or "collection"
