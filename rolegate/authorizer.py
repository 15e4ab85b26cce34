"""The authorization entry point: precedence rules over the compiled access table."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from rolegate.acl import (
    WILDCARD,
    AccessTable,
    AuthorizationRequest,
    compile_rules,
    encode,
    parse_file,
)
from rolegate.cache import AccessTableCache, CacheRegistry
from rolegate.config.models import RoleId, RolegateConfig
from rolegate.errors import ConfigError
from rolegate.interfaces.roles import RoleRepository, RoleStore
from rolegate.roles import SQLiteRoleStore, resolve_roles

logger = logging.getLogger(__name__)


def _as_keys(roles: Iterable[RoleId]) -> set[str]:
    # Session values and configured ids may disagree on int vs str.
    return {str(role) for role in roles}


class Authorizer:
    """Decides whether a set of roles may run an action on a resource.

    Checks, first match wins:

    1. ``allow_user``: anything outside ``admin_prefix`` is allowed.
    2. ``allow_admin``: ``admin_role`` gets everything under ``admin_prefix``.
    3. ``super_admin_role`` gets everything.
    4. The access table: a ``*`` action rule, then the exact action rule.

    The access table is loaded lazily and kept on the instance; later cache
    invalidations are not observed until a new Authorizer is built.
    """

    def __init__(
        self,
        config: RolegateConfig,
        caches: CacheRegistry | None = None,
        role_store: RoleStore | None = None,
        role_repository: RoleRepository | None = None,
        acl_path: str | Path | None = None,
    ) -> None:
        self._config = config
        self._settings = config.authorizer
        self._role_store = role_store
        self._role_repository = role_repository
        self.acl_path = Path(acl_path or self._settings.acl_file)

        caches = caches if caches is not None else CacheRegistry.from_config(config)
        self._cache = AccessTableCache(
            caches.get(self._settings.cache),
            self._settings.cache_key,
            auto_clear=self._settings.auto_clear_cache,
            debug=config.debug,
        )
        self._acl: AccessTable | None = None
        self._owned_store: SQLiteRoleStore | None = None

    @classmethod
    def from_config(
        cls, config: RolegateConfig, caches: CacheRegistry | None = None
    ) -> Authorizer:
        """Build an Authorizer, opening the SQLite role store when it is needed."""
        store = None
        if config.authorizer.use_database_roles or config.authorizer.multi_role:
            store = SQLiteRoleStore(config.database.path)
        try:
            authorizer = cls(config, caches=caches, role_store=store, role_repository=store)
        except ConfigError:
            if store is not None:
                store.close()
            raise
        authorizer._owned_store = store
        return authorizer

    def close(self) -> None:
        """Close the role store opened by ``from_config``; injected stores are left alone."""
        if self._owned_store is not None:
            self._owned_store.close()
            self._owned_store = None

    def __enter__(self) -> Authorizer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- access table ----------------------------------------------------------

    def access_table(self) -> AccessTable:
        if self._acl is None:
            self._acl = self._load_table()
        return self._acl

    def _load_table(self) -> AccessTable:
        table = self._cache.get()
        if table is not None:
            logger.debug("access table served from cache key %s", self._cache.key)
            return table

        logger.info("compiling access table from %s", self.acl_path)
        raw = parse_file(self.acl_path)
        role_map = resolve_roles(self._config, self._role_store)
        table = compile_rules(raw, role_map)
        self._cache.set(table)
        return table

    def clear_cache(self) -> None:
        """Drop the cached table and the in-memory copy."""
        self._cache.clear()
        self._acl = None

    # -- user roles ------------------------------------------------------------

    def user_roles(self, user: Mapping[str, Any]) -> list[RoleId]:
        """Role ids of *user*: one column in single-role mode, the repository otherwise."""
        if not self._settings.multi_role:
            role_id = user.get(self._settings.role_column)
            if role_id is None:
                raise ConfigError(
                    f"Missing role id ({self._settings.role_column}) in user session",
                    source=self._settings.role_column,
                )
            return [role_id]

        if self._role_repository is None:
            raise ConfigError(
                f"Missing relationship between users and {self._settings.roles_table}",
                source=self._settings.roles_table,
            )
        if "id" not in user:
            raise ConfigError("Missing user id in user session", source="id")
        return sorted(self._role_repository.roles_for_user(user["id"]), key=str)

    # -- decisions -------------------------------------------------------------

    def authorize(self, request: AuthorizationRequest) -> bool:
        allowed, rule = self._decide(request)
        logger.debug(
            "%s:%s roles=%s -> %s (%s)",
            encode(request.descriptor),
            request.action,
            list(request.roles),
            allowed,
            rule,
        )
        return allowed

    def authorize_user(
        self,
        user: Mapping[str, Any],
        controller: str,
        action: str,
        plugin: str | None = None,
        prefix: str | None = None,
    ) -> bool:
        request = AuthorizationRequest(
            roles=tuple(self.user_roles(user)),
            plugin=plugin,
            prefix=prefix,
            controller=controller,
            action=action,
        )
        return self.authorize(request)

    def _decide(self, request: AuthorizationRequest) -> tuple[bool, str]:
        settings = self._settings
        roles = _as_keys(request.roles)

        if settings.allow_user:
            if not request.prefix:
                return True, "allow_user"
            if request.prefix != settings.admin_prefix:
                return True, "allow_user"

        if settings.allow_admin and settings.admin_role is not None:
            if request.prefix and request.prefix == settings.admin_prefix:
                if str(settings.admin_role) in roles:
                    return True, "allow_admin"

        if settings.super_admin_role is not None:
            if str(settings.super_admin_role) in roles:
                return True, "super_admin"

        table = self.access_table()
        key = encode(request.descriptor)

        wildcard = table.roles_for(key, WILDCARD)
        if wildcard and roles & _as_keys(wildcard):
            return True, "wildcard"

        granted = table.roles_for(key, request.action)
        if granted and roles & _as_keys(granted):
            return True, "action"

        return False, "deny"
