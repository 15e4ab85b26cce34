from rolegate.roles.resolver import resolve_roles
from rolegate.roles.sqlite_store import SQLiteRoleStore

__all__ = ["SQLiteRoleStore", "resolve_roles"]
