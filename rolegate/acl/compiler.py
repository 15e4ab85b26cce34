"""Turns parsed acl.ini sections plus a role map into an AccessTable."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rolegate.acl.keys import decode
from rolegate.acl.models import WILDCARD, AccessTable, ResourceRules, RoleMap
from rolegate.config.models import RoleId
from rolegate.errors import ConfigError

logger = logging.getLogger(__name__)


def _tokens(value: str) -> list[str]:
    return [token.strip() for token in value.split(",") if token.strip()]


def _resolve_role_tokens(tokens: list[str], role_map: RoleMap) -> set[RoleId]:
    """Map role names to ids; ``*`` stands for every known role."""
    resolved: set[RoleId] = set()
    for token in tokens:
        if token == WILDCARD:
            resolved.update(role_map.values())
            continue
        role_id = role_map.get(token.lower())
        if role_id is None:
            logger.debug("dropping unknown role %r", token)
            continue
        resolved.add(role_id)
    return resolved


def compile_rules(
    raw_sections: Mapping[str, Mapping[str, str]], role_map: RoleMap
) -> AccessTable:
    """Build the access table.

    Unknown role names and empty tokens are skipped, never raised. The
    action ``*`` is kept as its own key and matched as a fallback at
    authorization time.
    """
    if not raw_sections:
        raise ConfigError("Invalid ACL file: no sections")

    role_map = {name.lower(): role_id for name, role_id in role_map.items()}

    resources: dict[str, ResourceRules] = {}
    for key, lines in raw_sections.items():
        actions: dict[str, set[RoleId]] = {}
        for action_list, role_list in lines.items():
            roles = _resolve_role_tokens(_tokens(role_list or ""), role_map)
            for action in _tokens(action_list):
                actions.setdefault(action, set()).update(roles)

        resources[key] = ResourceRules(
            descriptor=decode(key),
            actions={action: frozenset(ids) for action, ids in actions.items()},
        )

    logger.debug("compiled %d resources", len(resources))
    return AccessTable(resources=resources)
