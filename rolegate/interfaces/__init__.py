"""Collaborator interfaces: role sources, cache backends, authorizers."""

from rolegate.interfaces.authorize import Authorize
from rolegate.interfaces.cache import CacheBackend
from rolegate.interfaces.roles import RoleRecord, RoleRepository, RoleStore

__all__ = [
    "Authorize",
    "CacheBackend",
    "RoleRecord",
    "RoleRepository",
    "RoleStore",
]
