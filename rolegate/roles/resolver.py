"""Building the lower-cased role name -> role id map."""

from __future__ import annotations

import logging

from rolegate.acl.models import RoleMap
from rolegate.config.models import RolegateConfig
from rolegate.errors import ConfigError
from rolegate.interfaces.roles import RoleStore

logger = logging.getLogger(__name__)


def resolve_roles(config: RolegateConfig, store: RoleStore | None = None) -> RoleMap:
    """Return every known role keyed by lower-cased name.

    Static mode reads ``config.roles[authorizer.roles_table]``; database mode
    (``use_database_roles``) asks *store*. Either source coming back empty is
    a ConfigError.
    """
    table = config.authorizer.roles_table

    if not config.authorizer.use_database_roles:
        roles = config.roles.get(table)
        if not roles:
            raise ConfigError(
                f"Invalid role setup: no configured roles found under '{table}'",
                source=table,
            )
        role_map = {name.lower(): role_id for name, role_id in roles.items()}
        logger.debug("resolved %d roles from config '%s'", len(role_map), table)
        return role_map

    if store is None:
        raise ConfigError(
            f"Invalid role setup: use_database_roles is on but no role store for '{table}'",
            source=table,
        )
    records = store.all_roles()
    if not records:
        raise ConfigError(
            f"Invalid role setup: no database roles found in '{table}'", source=table
        )
    role_map = {record.name.lower(): record.id for record in records}
    logger.debug("resolved %d roles from role store", len(role_map))
    return role_map
