"""Tests for routedoc.parser.loader -- manifest loading from file, URL and stdin."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from routedoc.cache import ManifestCache
from routedoc.exceptions import ConnectionError_, ManifestError
from routedoc.generator.state import compilation
from routedoc.models import CacheConfig
from routedoc.parser.loader import load_manifest

MANIFEST = {"routes": [{"uri": "users", "methods": ["GET"], "name": "users.index"}]}
URL = "http://app.test/_routes"


def _response(status: int = 200, text: str = "", content_type: str = "application/json"):
    return httpx.Response(
        status,
        text=text,
        headers={"content-type": content_type},
        request=httpx.Request("GET", URL),
    )


# ------------------------------------------------------------------ #
# Files
# ------------------------------------------------------------------ #


class TestLoadFromFile:
    def test_yaml_fixture(self, routes_file: Path) -> None:
        raw = load_manifest(str(routes_file))
        assert len(raw["routes"]) == 6
        assert raw["routes"][0]["name"] == "api.users.index"

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.json"
        path.write_text(json.dumps(MANIFEST))
        assert load_manifest(str(path)) == MANIFEST

    def test_bare_list_is_wrapped(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.json"
        path.write_text(json.dumps(MANIFEST["routes"]))
        assert load_manifest(str(path)) == MANIFEST

    def test_unknown_suffix_detects_format(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.txt"
        path.write_text("routes:\n  - uri: users\n    methods: [GET]\n")
        assert load_manifest(str(path))["routes"][0]["uri"] == "users"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="not found"):
            load_manifest(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.yaml"
        path.write_text("  \n")
        with pytest.raises(ManifestError, match="empty"):
            load_manifest(str(path))

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.json"
        path.write_text("{not json")
        with pytest.raises(ManifestError, match="Invalid JSON"):
            load_manifest(str(path))

    def test_scalar_document(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.yaml"
        path.write_text("just a string\n")
        with pytest.raises(ManifestError, match="object or a list"):
            load_manifest(str(path))

    def test_missing_routes_key(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({"paths": []}))
        with pytest.raises(ManifestError, match="no 'routes'"):
            load_manifest(str(path))

    def test_routes_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({"routes": {"uri": "users"}}))
        with pytest.raises(ManifestError, match="must be a list"):
            load_manifest(str(path))


# ------------------------------------------------------------------ #
# Stdin
# ------------------------------------------------------------------ #


class TestLoadFromStdin:
    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(MANIFEST)))
        assert load_manifest("-") == MANIFEST

    def test_empty_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(ManifestError, match="stdin"):
            load_manifest("-")


# ------------------------------------------------------------------ #
# URLs
# ------------------------------------------------------------------ #


class TestLoadFromUrl:
    def test_fetches_json(self) -> None:
        with patch("routedoc.parser.loader.httpx.get", return_value=_response(text=json.dumps(MANIFEST))) as get:
            assert load_manifest(URL) == MANIFEST
        get.assert_called_once_with(URL, timeout=30.0, follow_redirects=True)

    def test_fetches_yaml_by_content_type(self) -> None:
        body = "routes:\n  - uri: users\n    methods: [GET]\n"
        with patch(
            "routedoc.parser.loader.httpx.get",
            return_value=_response(text=body, content_type="application/yaml"),
        ):
            assert load_manifest(URL)["routes"][0]["uri"] == "users"

    def test_http_error_status(self) -> None:
        with patch("routedoc.parser.loader.httpx.get", return_value=_response(404, text="nope")):
            with pytest.raises(ManifestError, match="HTTP 404"):
                load_manifest(URL)

    def test_connection_error(self) -> None:
        error = httpx.ConnectError("refused", request=httpx.Request("GET", URL))
        with patch("routedoc.parser.loader.httpx.get", side_effect=error):
            with pytest.raises(ConnectionError_, match="refused"):
                load_manifest(URL)

    def test_cache_hit_skips_fetch(self, tmp_path: Path) -> None:
        cache = ManifestCache(tmp_path, CacheConfig())
        try:
            cache.set(URL, MANIFEST)
            with patch("routedoc.parser.loader.httpx.get") as get:
                assert load_manifest(URL, cache=cache) == MANIFEST
            get.assert_not_called()
        finally:
            cache.close()

    def test_fetch_populates_cache(self, tmp_path: Path) -> None:
        cache = ManifestCache(tmp_path, CacheConfig())
        try:
            with patch("routedoc.parser.loader.httpx.get", return_value=_response(text=json.dumps(MANIFEST))):
                load_manifest(URL, cache=cache)
            assert cache.get(URL) == MANIFEST
        finally:
            cache.close()

    def test_compilation_refetches_despite_cache(self, tmp_path: Path) -> None:
        cache = ManifestCache(tmp_path, CacheConfig())
        fresh = {"routes": [{"uri": "fresh", "methods": ["GET"]}]}
        try:
            cache.set(URL, MANIFEST)
            with patch("routedoc.parser.loader.httpx.get", return_value=_response(text=json.dumps(fresh))) as get:
                with compilation():
                    assert load_manifest(URL, cache=cache) == fresh
            get.assert_called_once()
            assert cache.get(URL) == fresh
        finally:
            cache.close()
