"""Inspect commands -- preview what an export would produce.

Provides the ``routedoc inspect`` group. Every sub-command resolves the
effective configuration like ``routedoc export`` does but writes nothing:
``routes`` lists the exported route/method pairs and ``tree`` shows the
folder hierarchy. ``factories`` and ``plugins`` list what an export would
load.
"""

from __future__ import annotations

from typing import Optional

import typer

from routedoc.output import get_output, info

inspect_app = typer.Typer(no_args_is_help=True)


def _resolve(routes: Optional[str] = None, **overrides):  # noqa: ANN003, ANN202
    from routedoc.commands import fail
    from routedoc.config import resolve_config
    from routedoc.exceptions import RoutedocError

    try:
        return resolve_config(routes=routes, **overrides)
    except RoutedocError as exc:
        fail(exc)


@inspect_app.command("routes")
def inspect_routes(
    routes: Optional[str] = typer.Option(
        None, "--routes", "-r", help="Route manifest file, URL, or '-'."
    ),
) -> None:
    """List exported routes with their folder path and auth.

    Routes outside ``include_prefix`` and methods in ``skip_methods`` are
    left out, exactly as ``routedoc export`` would.

    Example::

        routedoc inspect routes
        routedoc --json inspect routes --routes routes.yaml
    """
    from routedoc.commands import fail
    from routedoc.exceptions import RoutedocError
    from routedoc.exporter import CollectionExporter
    from routedoc.generator import filter_routes, route_segments

    config = _resolve(routes)
    try:
        with CollectionExporter(config) as exporter:
            table = exporter.load_routes()
    except RoutedocError as exc:
        fail(exc)

    rows: list[list[str]] = []
    for route, method in filter_routes(table, config.include_prefix, config.skip_methods):
        rule = route.auth_rule(config.auth_middleware)
        rows.append([
            method.value,
            "/" + route.uri,
            route.display_name(),
            "/".join(route_segments(route)) or "-",
            rule.type if rule else "noauth",
        ])

    get_output().print_table(
        ["Method", "URI", "Name", "Folder", "Auth"],
        rows,
        title=f"Routes ({len(rows)})",
    )


@inspect_app.command("tree")
def inspect_tree(
    routes: Optional[str] = typer.Option(
        None, "--routes", "-r", help="Route manifest file, URL, or '-'."
    ),
    no_formdata: bool = typer.Option(
        False, "--no-formdata", help="Skip sample factories while compiling."
    ),
) -> None:
    """Show the folder tree the collection would have.

    Example::

        routedoc inspect tree
    """
    from routedoc.commands import fail
    from routedoc.exceptions import RoutedocError
    from routedoc.exporter import CollectionExporter

    config = _resolve(routes, enable_formdata=False if no_formdata else None)
    try:
        with CollectionExporter(config) as exporter:
            document = exporter.compile()
    except RoutedocError as exc:
        fail(exc)

    get_output().print_tree(document)


@inspect_app.command("factories")
def inspect_factories(
    path: Optional[str] = typer.Option(
        None, "--path", help="Factories directory or file (default: factories_path)."
    ),
) -> None:
    """List registered sample factory shapes.

    Example::

        routedoc inspect factories --path tests/factories
    """
    from routedoc.commands import fail
    from routedoc.exceptions import InvalidUsageError, RoutedocError
    from routedoc.factories import FactoryRegistry

    config = _resolve(factories_path=path)
    if not config.factories_path:
        fail(InvalidUsageError("No factories path configured. Pass --path."))

    registry = FactoryRegistry()
    try:
        registry.load(config.factories_path)
    except RoutedocError as exc:
        fail(exc)

    shapes = registry.shapes()
    if not shapes:
        info(f"No sample factories found in {config.factories_path}")
        return
    get_output().print_table(["Shape"], [[shape] for shape in shapes], title="Sample factories")


@inspect_app.command("plugins")
def inspect_plugins() -> None:
    """List installed plugins that an export would load.

    Plugins are discovered from the ``routedoc.plugins`` entry-point group
    and filtered by the ``plugins.enabled`` / ``plugins.disabled`` lists.

    Example::

        routedoc inspect plugins
    """
    from routedoc.plugins import PluginManager

    config = _resolve()
    plugins = PluginManager()
    try:
        plugins.discover(config)
        loaded = plugins.list_plugins()
    finally:
        plugins.cleanup()

    if not loaded:
        info("No plugins installed")
        return
    get_output().print_table(
        ["Name", "Version", "Description"],
        [[p["name"], p["version"], p["description"]] for p in loaded],
        title="Plugins",
    )
