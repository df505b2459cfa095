"""Compilation state flag.

Collaborators that must behave differently while a collection is being
compiled (the manifest cache, user factories) call :func:`is_compiling`.
The flag lives in a :class:`~contextvars.ContextVar`, so every thread and
asyncio task sees its own value and two exports running side by side in
one process do not observe each other.

Prefer the :func:`compilation` context manager: it resets the flag on
every exit path, including exceptions and ``KeyboardInterrupt``.
:func:`start_compilation` and :func:`finished` remain available for
callers that manage the scope themselves.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Optional

_compiling: ContextVar[bool] = ContextVar("routedoc_compiling", default=False)


def start_compilation() -> Token[bool]:
    """Mark a compilation as running and return the token that undoes it."""
    return _compiling.set(True)


def is_compiling() -> bool:
    """Return ``True`` while a compilation is in progress in this context."""
    return _compiling.get()


def finished(token: Optional[Token[bool]] = None) -> None:
    """Mark the compilation as finished.

    With the *token* from :func:`start_compilation` the previous value is
    restored (nested scopes unwind correctly); without one the flag is
    simply cleared.
    """
    if token is not None:
        _compiling.reset(token)
    else:
        _compiling.set(False)


@contextmanager
def compilation() -> Iterator[None]:
    """Scope a compilation run, guaranteeing the flag is reset on exit."""
    token = start_compilation()
    try:
        yield
    finally:
        finished(token)
