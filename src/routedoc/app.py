"""Typer application and CLI entry point for routedoc.

This module defines the root Typer application, registers the built-in
commands (``init``, ``export``, ``inspect``, ``config``) and configures
output and logging from the global flags.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the app and
maps :class:`~routedoc.exceptions.RoutedocError` to its exit code.
Unexpected exceptions are written to a crash log under the data directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from routedoc import __version__
from routedoc.commands.config import config_app
from routedoc.commands.export import export_command
from routedoc.commands.init import init_command
from routedoc.commands.inspect import inspect_app
from routedoc.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="routedoc",
    help="Export declared HTTP routes as Postman v2.1 collections.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("init")(init_command)
app.command("export")(export_command)
app.add_typer(inspect_app, name="inspect", help="Preview routes, folders and factories.")
app.add_typer(config_app, name="config", help="User configuration management.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"routedoc {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, no_color: bool = False) -> None:
    """Send library log records to stderr.

    ``--verbose`` lowers the threshold to DEBUG; otherwise only warnings
    and errors are shown.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    root = logging.getLogger("routedoc")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~routedoc.output.OutputManager` and the
    logging handler, and stores the shared flags in ``ctx.obj``.
    """
    from routedoc.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    configure_logging(verbose, no_color=no_color)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory and return its path."""
    from routedoc.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``routedoc`` console script.

    Raises:
        SystemExit: Always (either from Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from routedoc.exceptions import RoutedocError
        from routedoc.output import error

        if isinstance(exc, RoutedocError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
