"""Export command -- compile the route manifest into a Postman collection."""

from __future__ import annotations

from typing import Optional

import typer

from routedoc.output import info, success


def export_command(
    routes: Optional[str] = typer.Option(
        None, "--routes", "-r", help="Route manifest file, URL, or '-'."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Value of the base_url collection variable."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file ('-' for stdout)."
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Collection name."),
    no_formdata: bool = typer.Option(
        False, "--no-formdata", help="Do not generate sample query/body fields."
    ),
    bearer_source: Optional[str] = typer.Option(
        None,
        "--bearer-source",
        help="Personal bearer token source: env:VAR, file:/path, or prompt.",
    ),
) -> None:
    """Compile routes and write the collection.

    Settings not given as flags come from the environment, ./routedoc.json
    and the user config, in that order.

    Example::

        routedoc export
        routedoc export --routes routes.yaml -o - | jq .info
        routedoc export --bearer-source env:API_TOKEN
    """
    from routedoc.commands import fail
    from routedoc.config import resolve_config
    from routedoc.exceptions import RoutedocError
    from routedoc.exporter import CollectionExporter, export_collection
    from routedoc.plugins import PluginManager

    plugins = PluginManager()
    try:
        config = resolve_config(
            routes=routes,
            base_url=base_url,
            output=output,
            collection_name=name,
            enable_formdata=False if no_formdata else None,
            bearer_source=bearer_source,
        )
        plugins.discover(config)
        with CollectionExporter(config, plugins=plugins) as exporter:
            document = exporter.compile()
        destination = config.output_path()
        path = export_collection(document, destination)
    except RoutedocError as exc:
        fail(exc)
    finally:
        plugins.cleanup()

    if path is not None:
        success(f"Collection written to {path}")
    else:
        info("Collection written to stdout")
