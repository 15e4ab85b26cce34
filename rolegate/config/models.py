from pydantic import BaseModel, Field
from typing import Literal

RoleId = int | str


class AuthorizerConfig(BaseModel):
    role_column: str = "role_id"
    roles_table: str = "Roles"
    use_database_roles: bool = False
    multi_role: bool = False
    admin_role: RoleId | None = None
    super_admin_role: RoleId | None = None
    admin_prefix: str = "admin"
    allow_admin: bool = False
    allow_user: bool = False
    cache: str = "default"
    cache_key: str = "rolegate_acl"
    auto_clear_cache: bool = False
    acl_file: str = "config/acl.ini"


class CacheBackendConfig(BaseModel):
    engine: Literal["memory", "file"] = "memory"
    path: str = ".rolegate/cache"


class DatabaseConfig(BaseModel):
    path: str = ".rolegate/roles.db"


class RolegateConfig(BaseModel):
    authorizer: AuthorizerConfig = Field(default_factory=AuthorizerConfig)
    roles: dict[str, dict[str, RoleId]] = Field(default_factory=dict)
    caches: dict[str, CacheBackendConfig] = Field(
        default_factory=lambda: {"default": CacheBackendConfig()}
    )
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    debug: bool = False
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
