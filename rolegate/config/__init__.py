from .loader import load_config
from .models import (
    AuthorizerConfig,
    CacheBackendConfig,
    DatabaseConfig,
    RoleId,
    RolegateConfig,
)

__all__ = [
    "AuthorizerConfig",
    "CacheBackendConfig",
    "DatabaseConfig",
    "RoleId",
    "RolegateConfig",
    "load_config",
]
