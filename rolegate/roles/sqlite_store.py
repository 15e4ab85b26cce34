"""RoleStore / RoleRepository backed by a local SQLite database."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any

from rolegate.config.models import RoleId
from rolegate.errors import ConfigError
from rolegate.interfaces.roles import RoleRecord

logger = logging.getLogger(__name__)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS roles (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS users_roles (
    user_id INTEGER NOT NULL,
    role_id INTEGER NOT NULL REFERENCES roles(id) ON DELETE CASCADE,
    PRIMARY KEY (user_id, role_id)
);
CREATE INDEX IF NOT EXISTS idx_users_roles_user ON users_roles(user_id);
"""


class SQLiteRoleStore:
    """Roles plus the users/roles join table in one SQLite file.

    Serves both the role name table (``use_database_roles``) and the
    per-user lookup (``multi_role``). One connection is shared by all
    threads; a lock serializes its use.
    """

    def __init__(self, db_path: str = ".rolegate/roles.db") -> None:
        path = Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        self.db_path = str(path)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(
                self.db_path, isolation_level=None, timeout=5, check_same_thread=False
            )
            self._conn.execute("PRAGMA foreign_keys=ON")
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as e:
            raise ConfigError(f"Cannot open role store {self.db_path}: {e}", source=self.db_path) from e

    # -- seeding ---------------------------------------------------------------

    def add_role(self, name: str, role_id: int | None = None) -> int:
        """Insert a role and return its id."""
        with self._lock:
            cursor = self._conn.execute(
                "INSERT INTO roles (id, name) VALUES (?, ?)", (role_id, name)
            )
        logger.debug("added role %s (%d)", name, cursor.lastrowid)
        return cursor.lastrowid

    def assign(self, user_id: Any, role_id: RoleId) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT OR IGNORE INTO users_roles (user_id, role_id) VALUES (?, ?)",
                (user_id, role_id),
            )

    # -- RoleStore / RoleRepository --------------------------------------------

    def all_roles(self) -> list[RoleRecord]:
        with self._lock:
            rows = self._conn.execute("SELECT id, name FROM roles ORDER BY id").fetchall()
        return [RoleRecord(id=id_, name=name) for id_, name in rows]

    def roles_for_user(self, user_id: Any) -> set[RoleId]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT role_id FROM users_roles WHERE user_id = ?", (user_id,)
            ).fetchall()
        return {row[0] for row in rows}

    def close(self) -> None:
        with self._lock:
            self._conn.close()
