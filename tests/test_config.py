"""Tests for routedoc.config -- XDG paths, atomic writes, precedence, credentials."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from routedoc.config import (
    atomic_write,
    get_cache_dir,
    get_config_dir,
    get_data_dir,
    load_project_config,
    load_user_config,
    resolve_config,
    resolve_credential,
    save_project_config,
    save_user_config,
    user_config_path,
)
from routedoc.exceptions import ConfigError
from routedoc.models import CacheConfig, ExportConfig


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_xdg_env_vars(self, isolated_config: Path) -> None:
        assert get_config_dir() == isolated_config / "config" / "routedoc"
        assert get_cache_dir() == isolated_config / "cache" / "routedoc"
        assert get_data_dir() == isolated_config / "data" / "routedoc"
        assert get_config_dir().is_dir()

    def test_xdg_defaults_under_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("routedoc.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "routedoc"

    def test_non_xdg_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("routedoc.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".routedoc"
        assert get_cache_dir() == tmp_path / ".routedoc" / "cache"
        assert get_data_dir() == tmp_path / ".routedoc" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_and_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.json"
        atomic_write(target, "hello\n")
        assert target.read_text() == "hello\n"

    def test_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        target.write_text("old")
        atomic_write(target, "new")
        assert target.read_text() == "new"

    def test_failure_keeps_original_and_cleans_up(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        target.write_text("original")
        with patch("routedoc.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write(target, "new")
        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


# ---------------------------------------------------------------------------
# User and project config
# ---------------------------------------------------------------------------


class TestUserConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_user_config() == ExportConfig()

    def test_save_and_load(self, isolated_config: Path) -> None:
        save_user_config(ExportConfig(base_url="https://saved.test", cache=CacheConfig(ttl_seconds=5)))
        loaded = load_user_config()
        assert loaded.base_url == "https://saved.test"
        assert loaded.cache.ttl_seconds == 5

    def test_invalid_json(self, isolated_config: Path) -> None:
        user_config_path().write_text("{broken")
        with pytest.raises(ConfigError, match="Invalid user config"):
            load_user_config()

    def test_invalid_values(self, isolated_config: Path) -> None:
        _write_json(user_config_path(), {"enable_formdata": "definitely"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_user_config()

    def test_extra_keys_preserved(self, isolated_config: Path) -> None:
        _write_json(user_config_path(), {"my_plugin": {"level": 3}})
        assert load_user_config().model_extra == {"my_plugin": {"level": 3}}


class TestProjectConfig:
    def test_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_round_trip(self, isolated_config: Path) -> None:
        path = save_project_config({"routes": "routes.yaml"})
        assert path == isolated_config / "routedoc.json"
        assert load_project_config() == {"routes": "routes.yaml"}

    def test_not_an_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "routedoc.json", ["routes.yaml"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.base_url == "http://localhost"
        assert config.routes is None

    def test_project_overrides_user(self, isolated_config: Path) -> None:
        save_user_config(ExportConfig(base_url="https://user.test", collection_name="User"))
        _write_json(isolated_config / "routedoc.json", {"base_url": "https://project.test"})
        config = resolve_config()
        assert config.base_url == "https://project.test"
        assert config.collection_name == "User"

    def test_env_overrides_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "routedoc.json", {"base_url": "https://project.test"})
        monkeypatch.setenv("ROUTEDOC_BASE_URL", "https://env.test")
        monkeypatch.setenv("ROUTEDOC_ROUTES", "env-routes.yaml")
        config = resolve_config()
        assert config.base_url == "https://env.test"
        assert config.routes == "env-routes.yaml"

    def test_cli_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROUTEDOC_OUTPUT", "env.json")
        config = resolve_config(output="cli.json", base_url=None)
        assert config.output == "cli.json"
        assert config.base_url == "http://localhost"

    def test_false_cli_flag_is_applied(self, isolated_config: Path) -> None:
        assert resolve_config(enable_formdata=False).enable_formdata is False

    def test_nested_section_replaced_whole(self, isolated_config: Path) -> None:
        save_user_config(ExportConfig(cache=CacheConfig(enabled=False, ttl_seconds=5)))
        _write_json(isolated_config / "routedoc.json", {"cache": {"ttl_seconds": 60}})
        config = resolve_config()
        assert config.cache.ttl_seconds == 60
        assert config.cache.enabled is True

    def test_invalid_merged_value(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError):
            resolve_config(skip_methods="HEAD")


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


class TestResolveCredential:
    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_TOKEN", "secret")
        assert resolve_credential("env:API_TOKEN") == "secret"

    def test_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("API_TOKEN", raising=False)
        with pytest.raises(ConfigError, match="API_TOKEN"):
            resolve_credential("env:API_TOKEN")

    def test_file(self, tmp_path: Path) -> None:
        token_file = tmp_path / "token"
        token_file.write_text("  from-file\n")
        assert resolve_credential(f"file:{token_file}") == "from-file"

    def test_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            resolve_credential(f"file:{tmp_path / 'nope'}")

    def test_prompt_requires_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(ConfigError, match="not a TTY"):
            resolve_credential("prompt")

    def test_unknown_source(self) -> None:
        with pytest.raises(ConfigError, match="Unknown credential source"):
            resolve_credential("vault:secret/api")
