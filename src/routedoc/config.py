"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for routedoc:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.routedoc/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **User config** -- a single :class:`~routedoc.models.ExportConfig` JSON
  file holding the user's defaults.
* **Project config** -- ``./routedoc.json`` written by ``routedoc init``.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config and user config into the
  effective :class:`~routedoc.models.ExportConfig`.
* **Credential resolution** -- :func:`resolve_credential` reads a personal
  bearer token from an env var, a file, or an interactive prompt.

All file writes go through :func:`atomic_write`.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from routedoc.exceptions import ConfigError
from routedoc.models import ExportConfig

_APP_NAME = "routedoc"
_CONFIG_FILENAME = "config.json"
PROJECT_CONFIG_FILENAME = "routedoc.json"

# Environment variable -> ExportConfig key.
ENV_OVERRIDES = {
    "ROUTEDOC_BASE_URL": "base_url",
    "ROUTEDOC_ROUTES": "routes",
    "ROUTEDOC_OUTPUT": "output",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _xdg_dir(env_var: str, default: Path, fallback_sub: Optional[str]) -> Path:
    if _is_xdg_platform():
        env_value = os.environ.get(env_var, "")
        path = (Path(env_value) if env_value else default) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if fallback_sub:
            path = path / fallback_sub
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/routedoc/`` (default ``~/.config/routedoc/``).
    On macOS/Windows: ``~/.routedoc/``.
    """
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config", None)


def get_cache_dir() -> Path:
    """Return the cache directory (remote manifest cache), creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/routedoc/`` (default ``~/.cache/routedoc/``).
    On macOS/Windows: ``~/.routedoc/cache/``.
    """
    return _xdg_dir("XDG_CACHE_HOME", Path.home() / ".cache", "cache")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/routedoc/`` (default ``~/.local/share/routedoc/``).
    On macOS/Windows: ``~/.routedoc/logs/``.
    """
    return _xdg_dir("XDG_DATA_HOME", Path.home() / ".local" / "share", "logs")


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* atomically using a temp file and rename.

    The temporary file is created next to *path* so that ``os.replace`` is
    an atomic rename on POSIX. On any failure the temp file is removed and
    the original file is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def _read_json(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def _validate(data: dict[str, Any], origin: str) -> ExportConfig:
    try:
        return ExportConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration ({origin}): {exc}") from exc


# --- User config ---


def user_config_path() -> Path:
    """Path to the user config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_user_config() -> ExportConfig:
    """Load the user configuration, or defaults when the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid JSON or fails
            validation.
    """
    path = user_config_path()
    data = _read_json(path, "user config")
    if data is None:
        return ExportConfig()
    return _validate(data, str(path))


def save_user_config(config: ExportConfig) -> None:
    """Persist the user configuration atomically."""
    data = config.model_dump(mode="json")
    atomic_write(user_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project config ---


def project_config_path() -> Path:
    return Path.cwd() / PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./routedoc.json`` as a raw dict, or ``None`` if absent.

    Only the keys present in the file override the user config, so the
    raw dict is returned rather than a validated model.
    """
    return _read_json(project_config_path(), "project config")


def save_project_config(data: dict[str, Any]) -> Path:
    """Write *data* to ``./routedoc.json`` atomically and return the path."""
    path = project_config_path()
    atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def resolve_config(**cli_overrides: Any) -> ExportConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (keyword arguments whose value is not ``None``)
        2. Environment variables (``ROUTEDOC_BASE_URL``, ``ROUTEDOC_ROUTES``,
           ``ROUTEDOC_OUTPUT``)
        3. Project config (``./routedoc.json``)
        4. User config (``~/.config/routedoc/config.json``)
        5. Defaults

    Layers are merged key by key at the top level; a nested setting such
    as ``cache`` given in a higher layer replaces the lower one whole.

    Raises:
        ConfigError: If a config file is invalid or the merged result
            fails validation.
    """
    merged: dict[str, Any] = load_user_config().model_dump(mode="json")

    project = load_project_config()
    if project:
        merged.update(project)

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            merged[key] = value

    merged.update({k: v for k, v in cli_overrides.items() if v is not None})
    return _validate(merged, "merged")


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Bearer token: ")

    raise ConfigError(f"Unknown credential source format: {source}")
