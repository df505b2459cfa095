"""Config commands -- view and modify the user configuration.

Provides the ``routedoc config`` group for reading, updating, and
resetting ``~/.config/routedoc/config.json``
(:class:`~routedoc.models.ExportConfig`). Project settings in
``./routedoc.json`` are written by ``routedoc init`` instead. ``config cache``
reports on (and clears) the manifest cache under the user cache directory.
"""

from __future__ import annotations

import json
from typing import Optional

import typer

from routedoc.output import error, info, print_json, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False, "--effective", help="Show the merged configuration instead of the user file."
    ),
) -> None:
    """Show the user (or effective) configuration.

    Example::

        routedoc config show
        routedoc config show --effective
    """
    from routedoc.commands import fail
    from routedoc.config import load_user_config, resolve_config, user_config_path
    from routedoc.exceptions import RoutedocError

    try:
        config = resolve_config() if effective else load_user_config()
    except RoutedocError as exc:
        fail(exc)

    info(f"Config file: {user_config_path()}")
    print_json(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g. 'cache.ttl_seconds')."),
    value: str = typer.Argument(help="Value to set. Lists and mappings take JSON."),
) -> None:
    """Set a user configuration value.

    The value is coerced to the type of the current setting: booleans
    accept true/false/1/0/yes/no, integers are parsed, lists and mappings
    are parsed as JSON, and anything else is stored as a string.

    Example::

        routedoc config set base_url https://api.example.com
        routedoc config set cache.ttl_seconds 600
        routedoc config set skip_methods '["HEAD", "OPTIONS", "PATCH"]'
    """
    from pydantic import ValidationError

    from routedoc.config import load_user_config, save_user_config
    from routedoc.models import ExportConfig

    data = load_user_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if not isinstance(target.get(k), dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    current = target[final_key]
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, int):
        try:
            coerced = int(value)
        except ValueError:
            error(f"Expected integer for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    elif isinstance(current, (list, dict)):
        try:
            coerced = json.loads(value)
        except json.JSONDecodeError:
            error(f"Expected JSON for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    else:
        coerced = value

    target[final_key] = coerced

    try:
        new_config = ExportConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_user_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the user configuration to defaults.

    Example::

        routedoc config reset --force
    """
    from routedoc.config import save_user_config
    from routedoc.models import ExportConfig

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_user_config(ExportConfig())
    success("Configuration reset to defaults.")


@config_app.command("cache")
def config_cache(
    clear: bool = typer.Option(False, "--clear", help="Remove every cached manifest."),
    url: Optional[str] = typer.Option(
        None, "--url", help="Remove the cached manifest for one URL."
    ),
) -> None:
    """Show manifest cache statistics, optionally clearing entries first.

    Example::

        routedoc config cache
        routedoc config cache --url http://localhost:8000/_routes
        routedoc config cache --clear
    """
    from routedoc.cache import ManifestCache
    from routedoc.commands import fail
    from routedoc.config import get_cache_dir, resolve_config
    from routedoc.exceptions import RoutedocError

    try:
        config = resolve_config()
    except RoutedocError as exc:
        fail(exc)

    cache = ManifestCache(get_cache_dir(), config.cache)
    try:
        if url:
            cache.invalidate(url)
            success(f"Removed cached manifest for {url}")
        if clear:
            cache.clear()
            success("Manifest cache cleared.")
        print_json(cache.stats())
    finally:
        cache.close()
