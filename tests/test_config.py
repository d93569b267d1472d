"""Tests for zodapi.config: atomic writes, project config, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from zodapi.config import atomic_write, load_project_config, resolve_config
from zodapi.exceptions import ConfigError


# ---------------------------------------------------------------------------
# atomic_write
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "endpoints.ts"
        atomic_write(target, "export {};\n")
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "endpoints.ts"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "endpoints.ts"
        atomic_write(target, "x")
        assert target.is_file()

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "endpoints.ts", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["endpoints.ts"]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "endpoints.ts"
        target.write_text("original", encoding="utf-8")
        with patch("zodapi.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                atomic_write(target, "replacement")
        assert [p.name for p in tmp_path.iterdir()] == ["endpoints.ts"]
        assert target.read_text(encoding="utf-8") == "original"

    def test_unicode_content(self, tmp_path: Path) -> None:
        target = tmp_path / "endpoints.ts"
        atomic_write(target, "// Café ✓\n")
        assert target.read_text(encoding="utf-8") == "// Café ✓\n"


# ---------------------------------------------------------------------------
# load_project_config
# ---------------------------------------------------------------------------


class TestLoadProjectConfig:
    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert load_project_config(tmp_path) is None

    def test_loads_object(self, tmp_path: Path) -> None:
        (tmp_path / "zodapi.json").write_text(json.dumps({"out_dir": "web"}), encoding="utf-8")
        assert load_project_config(tmp_path) == {"out_dir": "web"}

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        (tmp_path / "zodapi.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config(tmp_path)

    def test_non_object_raises(self, tmp_path: Path) -> None:
        (tmp_path / "zodapi.json").write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config(tmp_path)


# ---------------------------------------------------------------------------
# resolve_config precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.out_dir == "src"
        assert config.output_filename == "endpoints.ts"
        assert config.package_import == "@danstackme/apity"
        assert config.base_url is None

    def test_project_config_applied(self, isolated_config: Path) -> None:
        (isolated_config / "zodapi.json").write_text(
            json.dumps({"out_dir": "web/src", "package_import": "@acme/api"}), encoding="utf-8"
        )
        config = resolve_config()
        assert config.out_dir == "web/src"
        assert config.package_import == "@acme/api"

    def test_env_overrides_project_config(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_config / "zodapi.json").write_text(json.dumps({"out_dir": "from-file"}), encoding="utf-8")
        monkeypatch.setenv("ZODAPI_OUT_DIR", "from-env")
        monkeypatch.setenv("ZODAPI_BASE_URL", "https://env.example.com")
        config = resolve_config()
        assert config.out_dir == "from-env"
        assert config.base_url == "https://env.example.com"

    def test_cli_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZODAPI_OUT_DIR", "from-env")
        monkeypatch.setenv("ZODAPI_BASE_URL", "https://env.example.com")
        config = resolve_config(cli_out_dir="from-cli", cli_base_url="https://cli.example.com")
        assert config.out_dir == "from-cli"
        assert config.base_url == "https://cli.example.com"

    def test_unknown_key_rejected(self, isolated_config: Path) -> None:
        (isolated_config / "zodapi.json").write_text(json.dumps({"outdir": "typo"}), encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
