"""Tests for rolegate.config: models and YAML loader."""

import os
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from rolegate.config.loader import DEFAULT_CONFIG_TEMPLATE, _expand_env_vars, load_config
from rolegate.config.models import AuthorizerConfig, CacheBackendConfig, RolegateConfig
from rolegate.errors import ConfigError


# ── defaults ───────────────────────────────────────────────────────


class TestAuthorizerConfigDefaults:
    def test_defaults(self):
        cfg = AuthorizerConfig()
        assert cfg.role_column == "role_id"
        assert cfg.roles_table == "Roles"
        assert cfg.use_database_roles is False
        assert cfg.multi_role is False
        assert cfg.admin_role is None
        assert cfg.super_admin_role is None
        assert cfg.admin_prefix == "admin"
        assert cfg.allow_admin is False
        assert cfg.allow_user is False
        assert cfg.cache == "default"
        assert cfg.cache_key == "rolegate_acl"
        assert cfg.auto_clear_cache is False

    def test_role_ids_keep_type(self):
        assert AuthorizerConfig(admin_role=9).admin_role == 9
        assert AuthorizerConfig(admin_role="ops").admin_role == "ops"


class TestRolegateConfig:
    def test_defaults(self):
        cfg = RolegateConfig()
        assert cfg.debug is False
        assert cfg.roles == {}
        assert set(cfg.caches) == {"default"}
        assert cfg.log_level == "info"
        assert cfg.log_format == "text"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            RolegateConfig(log_level="verbose")

    def test_invalid_cache_engine_rejected(self):
        with pytest.raises(ValidationError):
            CacheBackendConfig(engine="redis")


# ── _expand_env_vars ────────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_string_variable(self):
        with patch.dict(os.environ, {"ACL_DIR": "/etc/acl"}):
            assert _expand_env_vars("${ACL_DIR}/acl.ini") == "/etc/acl/acl.ini"

    def test_missing_var_becomes_empty(self):
        os.environ.pop("ROLEGATE_UNSET_VAR", None)
        assert _expand_env_vars("${ROLEGATE_UNSET_VAR}") == ""

    def test_expands_nested(self):
        with patch.dict(os.environ, {"X": "1"}):
            assert _expand_env_vars({"a": ["${X}", 2]}) == {"a": ["1", 2]}


# ── load_config ─────────────────────────────────────────────────────


class TestLoadConfig:
    def test_explicit_path(self, tmp_path):
        path = tmp_path / "rolegate.yaml"
        path.write_text(
            "authorizer:\n  allow_user: true\n  super_admin_role: 1\n"
            "roles:\n  Roles:\n    admin: 1\n"
        )
        cfg = load_config(str(path))
        assert cfg.authorizer.allow_user is True
        assert cfg.authorizer.super_admin_role == 1
        assert cfg.roles == {"Roles": {"admin": 1}}

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("authorizer: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(str(path))

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("log_level: loud\n")
        with pytest.raises(ConfigError, match="Invalid config") as exc_info:
            load_config(str(path))
        assert exc_info.value.source == str(path)

    def test_project_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "rolegate.yaml").write_text("debug: true\n")
        assert load_config().debug is True

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert load_config() == RolegateConfig()

    def test_env_vars_expanded(self, tmp_path):
        path = tmp_path / "rolegate.yaml"
        path.write_text('authorizer:\n  acl_file: "${ACL_DIR}/acl.ini"\n')
        with patch.dict(os.environ, {"ACL_DIR": "/srv"}):
            assert load_config(str(path)).authorizer.acl_file == "/srv/acl.ini"


def test_default_template_is_valid():
    cfg = RolegateConfig(**yaml.safe_load(DEFAULT_CONFIG_TEMPLATE))
    assert cfg.roles["Roles"] == {"admin": 1, "user": 2}
    assert cfg.caches["default"].engine == "memory"
