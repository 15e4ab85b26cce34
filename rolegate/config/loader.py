"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from rolegate.errors import ConfigError

from .models import RolegateConfig


def load_config(cli_path: str | None = None) -> RolegateConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./rolegate.yaml"),
        Path.home() / ".rolegate" / "config.yaml",
    ]

    if cli_path and not Path(cli_path).exists():
        raise ConfigError(f"Config file not found: {cli_path}", source=cli_path)

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return RolegateConfig(**raw)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}", source=str(path)) from e
            except ValidationError as e:
                raise ConfigError(f"Invalid config in {path}: {e}", source=str(path)) from e

    return RolegateConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `rolegate config init`
DEFAULT_CONFIG_TEMPLATE = """\
# rolegate.yaml

authorizer:
  acl_file: "config/acl.ini"
  role_column: "role_id"         # user field holding the single role id
  roles_table: "Roles"           # key under `roles` (or database roles table)
  use_database_roles: false      # true to read roles from the SQLite role store
  multi_role: false              # true to look up several roles per user
  # admin_role: 9
  # super_admin_role: 1
  admin_prefix: "admin"
  allow_admin: false             # admin_role gets every admin_prefix resource
  allow_user: false              # any user gets every non admin_prefix resource
  cache: "default"
  cache_key: "rolegate_acl"
  auto_clear_cache: false        # only honoured when debug is true

# Static role tables (name: id)
roles:
  Roles:
    admin: 1
    user: 2

# Cache backends
caches:
  default:
    engine: "memory"             # memory | file
  # disk:
  #   engine: "file"
  #   path: ".rolegate/cache"

# SQLite role store (use_database_roles / multi_role)
database:
  path: ".rolegate/roles.db"

debug: false

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
