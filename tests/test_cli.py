"""Tests for the rolegate CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from rolegate.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, acl_file: Path) -> Path:
    path = tmp_path / "rolegate.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "authorizer": {"acl_file": str(acl_file), "super_admin_role": 99},
                "roles": {"Roles": {"admin": 1, "editor": 2, "reader": 3}},
                "caches": {"default": {"engine": "file", "path": str(tmp_path / "cache")}},
            }
        )
    )
    return path


# ── rolegate check ────────────────────────────────────────────────────


def test_check_allow(config_file: Path):
    result = runner.invoke(
        app, ["-c", str(config_file), "check", "2", "--controller", "Posts", "--action", "view"]
    )
    assert result.exit_code == 0
    assert "ALLOW" in result.output


def test_check_deny(config_file: Path):
    result = runner.invoke(
        app, ["-c", str(config_file), "check", "2", "--controller", "Posts", "--action", "delete"]
    )
    assert result.exit_code == 1
    assert "DENY" in result.output


def test_check_prefix_and_plugin(config_file: Path):
    result = runner.invoke(
        app,
        [
            "-c", str(config_file), "check", "3",
            "--plugin", "Blog", "--prefix", "admin",
            "--controller", "Articles", "--action", "edit",
        ],
    )
    assert result.exit_code == 0


def test_check_super_admin(config_file: Path):
    result = runner.invoke(
        app, ["-c", str(config_file), "check", "99", "--controller", "Nope", "--action", "x"]
    )
    assert result.exit_code == 0


def test_check_missing_acl(tmp_path: Path):
    path = tmp_path / "rolegate.yaml"
    path.write_text(yaml.safe_dump({"authorizer": {"acl_file": str(tmp_path / "none.ini")}}))
    result = runner.invoke(
        app, ["-c", str(path), "check", "1", "--controller", "Posts", "--action", "view"]
    )
    assert result.exit_code == 2
    assert "Missing ACL file" in result.output


def test_missing_config_file(tmp_path: Path):
    result = runner.invoke(app, ["-c", str(tmp_path / "nope.yaml"), "config", "show"])
    assert result.exit_code == 2


# ── rolegate compile / cache ──────────────────────────────────────────


def test_compile_shows_table(config_file: Path):
    result = runner.invoke(app, ["-c", str(config_file), "compile"])
    assert result.exit_code == 0
    assert "Posts" in result.output
    assert "Tags" in result.output


def test_compile_writes_cache_and_clear_removes_it(config_file: Path, tmp_path: Path):
    cache_dir = tmp_path / "cache"
    runner.invoke(app, ["-c", str(config_file), "compile"])
    assert list(cache_dir.glob("*.json"))

    result = runner.invoke(app, ["-c", str(config_file), "cache", "clear"])
    assert result.exit_code == 0
    assert "cleared" in result.output
    assert not list(cache_dir.glob("*.json"))


def test_compile_refresh(config_file: Path):
    result = runner.invoke(app, ["-c", str(config_file), "compile", "--refresh"])
    assert result.exit_code == 0


# ── rolegate config ────────────────────────────────────────────────────


def test_config_init(tmp_path: Path):
    dest = tmp_path / "rolegate.yaml"
    result = runner.invoke(app, ["config", "init", "--path", str(dest)])
    assert result.exit_code == 0
    assert dest.is_file()
    assert "authorizer:" in dest.read_text()


def test_config_init_refuses_overwrite(tmp_path: Path):
    dest = tmp_path / "rolegate.yaml"
    dest.write_text("debug: true\n")
    result = runner.invoke(app, ["config", "init", "--path", str(dest)])
    assert result.exit_code == 1
    assert dest.read_text() == "debug: true\n"


def test_config_init_force_replaces_broken_local_config(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "rolegate.yaml").write_text("log_level: loud\n")
    result = runner.invoke(app, ["config", "init", "--path", "rolegate.yaml", "--force"])
    assert result.exit_code == 0
    assert "authorizer:" in (tmp_path / "rolegate.yaml").read_text()


def test_broken_local_config_still_reported(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "rolegate.yaml").write_text("log_level: loud\n")
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 2


def test_config_show(config_file: Path):
    result = runner.invoke(app, ["-c", str(config_file), "config", "show"])
    assert result.exit_code == 0
    shown = yaml.safe_load(result.output)
    assert shown["authorizer"]["super_admin_role"] == 99
