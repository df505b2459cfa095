"""Load route manifests from a URL, local file, or stdin.

A route manifest lists the routes an application declares. It is the
hand-off point between the application's router and routedoc: the
application dumps its routes (or serves them from a debug endpoint) and
routedoc reads them back. Both JSON and YAML are accepted, with format
detection from the file extension, the response content type, or the
content itself.

The manifest is either an object with a ``routes`` list or a bare list of
route objects; :func:`load_manifest` always returns the object form.

After loading, the raw dict is passed to
:func:`~routedoc.parser.extractor.extract_routes`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import httpx
import yaml

from routedoc.exceptions import ConnectionError_, ManifestError

if TYPE_CHECKING:
    from routedoc.cache import ManifestCache

logger = logging.getLogger(__name__)


def load_manifest(source: str, cache: Optional[ManifestCache] = None) -> dict[str, Any]:
    """Load a route manifest from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or ``'-'`` for stdin.
        cache: Optional cache consulted for URL sources.

    Returns:
        The manifest as a dict with a ``routes`` list.

    Raises:
        ManifestError: If the source cannot be read or parsed.
        ConnectionError_: If a URL source cannot be reached.
    """
    if source == "-":
        raw = _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        raw = _load_from_url(source, cache)
    else:
        raw = _load_from_file(source)
    return _normalise(raw)


def _normalise(raw: Any) -> dict[str, Any]:
    if isinstance(raw, list):
        return {"routes": raw}
    if "routes" not in raw:
        raise ManifestError("Manifest has no 'routes' list")
    if not isinstance(raw["routes"], list):
        raise ManifestError(
            f"Manifest 'routes' must be a list (got {type(raw['routes']).__name__})"
        )
    return raw


def _load_from_stdin() -> Any:
    """Read a manifest from stdin.

    Raises:
        ManifestError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise ManifestError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise ManifestError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str, cache: Optional[ManifestCache] = None) -> Any:
    """Fetch a manifest from *url*, going through *cache* when given.

    Raises:
        ConnectionError_: If the URL cannot be reached.
        ManifestError: On a non-2xx response or unparseable content.
    """
    if cache is not None:
        cached = cache.get(url)
        if cached is not None:
            logger.debug("Manifest cache hit for %s", url)
            return cached

    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ManifestError(
            f"HTTP {exc.response.status_code} fetching manifest from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Failed to fetch manifest from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    raw = _parse_content(response.text, hint=hint)
    if cache is not None:
        cache.set(url, _normalise(raw))
    return raw


def _load_from_file(path: str) -> Any:
    """Load a manifest from a local ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        ManifestError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ManifestError(f"Route manifest not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed to read route manifest {path}: {exc}") from exc

    if not content.strip():
        raise ManifestError(f"Route manifest is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> Any:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hinted as YAML), then falls back to YAML.

    Returns:
        The parsed dict or list.

    Raises:
        ManifestError: If the content is neither a JSON/YAML object nor a
            list.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return _check_shape(json.loads(content))
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise ManifestError(f"Invalid JSON: {exc}") from exc

    try:
        return _check_shape(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse route manifest as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise ManifestError(msg)


def _check_shape(result: Any) -> Any:
    if not isinstance(result, (dict, list)):
        kind = type(result).__name__ if result is not None else "empty document"
        raise ManifestError(f"Route manifest must be an object or a list (got {kind})")
    return result
