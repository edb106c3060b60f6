"""Tests for specimport.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specimport.config import load_config_file, load_import_config
from specimport.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate every test from the caller's environment and working directory."""
    for name in (
        "SPECIMPORT_DEFAULT_SCHEME",
        "SPECIMPORT_IMPORT_ALLOWLIST",
        "SPECIMPORT_ALLOW_PRIVATE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfigFile:
    def test_no_file(self) -> None:
        assert load_config_file() is None

    def test_project_file(self, tmp_path: Path) -> None:
        write_config(tmp_path / "specimport.json", {"default_scheme": "http"})
        assert load_config_file() == {"default_scheme": "http"}

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config_file(path)

    def test_non_object(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "list.json", ["a"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_config_file(path)


class TestLoadImportConfig:
    def test_defaults(self) -> None:
        config = load_import_config()
        assert config.default_scheme == "https"
        assert config.import_allowlist == []
        assert config.allow_import_from_private is False

    def test_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = write_config(
            tmp_path / "custom.json",
            {"default_scheme": "ftp", "import_allowlist": ["a.example.com"], "fetch_timeout": 5},
        )
        monkeypatch.setenv("SPECIMPORT_DEFAULT_SCHEME", "http")
        monkeypatch.setenv("SPECIMPORT_IMPORT_ALLOWLIST", "b.example.com, https://c.example.com/specs/")
        monkeypatch.setenv("SPECIMPORT_ALLOW_PRIVATE", "yes")

        config = load_import_config(path)
        assert config.default_scheme == "http"
        assert config.import_allowlist == ["b.example.com", "https://c.example.com/specs/"]
        assert config.allow_import_from_private is True
        assert config.fetch_timeout == 5.0

        overridden = load_import_config(path, default_scheme="https", allow_import_from_private=None)
        assert overridden.default_scheme == "https"
        assert overridden.allow_import_from_private is True

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "bad.json", {"fetch_timeout": "soon"})
        with pytest.raises(ConfigError, match="Invalid import configuration"):
            load_import_config(path)
