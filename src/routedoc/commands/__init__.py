"""Built-in CLI sub-commands for routedoc.

* :mod:`~routedoc.commands.init` -- write a project ``routedoc.json``.
* :mod:`~routedoc.commands.export` -- compile and write the collection.
* :mod:`~routedoc.commands.inspect` -- preview routes, folders and
  factories without writing anything.
* :mod:`~routedoc.commands.config` -- view and modify user settings.

Single commands (``init``, ``export``) are plain callbacks registered on
the root app; groups (``inspect``, ``config``) are :class:`typer.Typer`
sub-applications.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from routedoc.exceptions import RoutedocError
from routedoc.output import error


def fail(exc: RoutedocError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)
