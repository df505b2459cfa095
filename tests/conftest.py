"""Shared test fixtures for routedoc.

Provides the route manifest and factory fixtures under ``tests/fixtures``,
isolated config directories, output managers, and a CLI runner. These
fixtures are discovered by pytest and available to every test module.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from routedoc.models import CacheConfig, ExportConfig, RouteDescriptor
from routedoc.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager holds references to sys.stdout/sys.stderr taken at
    creation time; CliRunner swaps those streams, so a manager left over
    from one test would write to a closed file in the next.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_logging_between_tests() -> None:
    """Undo the handler installed by the CLI callback so caplog keeps working."""
    yield
    logger = logging.getLogger("routedoc")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Manifest and factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def routes_file() -> Path:
    """Path to the YAML route manifest fixture."""
    return FIXTURES_DIR / "routes.yaml"


@pytest.fixture
def factories_dir() -> Path:
    """Directory of sample factory modules."""
    return FIXTURES_DIR / "factories"


@pytest.fixture
def route_table(routes_file: Path):  # noqa: ANN201
    """The fixture manifest loaded into a RouteTable."""
    from routedoc.parser import extract_routes, load_manifest

    return extract_routes(load_manifest(str(routes_file)))


@pytest.fixture
def export_config(routes_file: Path, factories_dir: Path) -> ExportConfig:
    """Export configuration for the fixture manifest, with caching off."""
    return ExportConfig(
        routes=str(routes_file),
        base_url="https://api.example.com/",
        oauth_route="passport.token",
        factories_path=str(factories_dir),
        collection_name="User API",
        cache=CacheConfig(enabled=False),
    )


@pytest.fixture
def make_route() -> Callable[..., RouteDescriptor]:
    """Factory for RouteDescriptor objects with sensible defaults."""

    def _make(uri: str = "users", methods: Any = ("GET",), **kwargs: Any) -> RouteDescriptor:
        return RouteDescriptor(uri=uri, methods=list(methods), **kwargs)

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME, XDG_CACHE_HOME and XDG_DATA_HOME at
    subdirectories of tmp_path, clears ROUTEDOC_* variables and changes
    into tmp_path so that ``./routedoc.json`` is test-local.
    """
    monkeypatch.setattr("routedoc.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["ROUTEDOC_BASE_URL", "ROUTEDOC_ROUTES", "ROUTEDOC_OUTPUT", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format OutputManager."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format OutputManager with colour disabled."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager."""
    output = OutputManager(format=OutputFormat.JSON, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
