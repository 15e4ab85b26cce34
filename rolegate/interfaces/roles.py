"""Role source interfaces and models."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from rolegate.config.models import RoleId


class RoleRecord(BaseModel):
    """A single known role."""

    model_config = ConfigDict(frozen=True)

    id: RoleId
    name: str


@runtime_checkable
class RoleStore(Protocol):
    """Queryable store holding every known role."""

    def all_roles(self) -> list[RoleRecord]: ...


@runtime_checkable
class RoleRepository(Protocol):
    """Lookup of the roles attached to one user (multi-role mode)."""

    def roles_for_user(self, user_id: Any) -> set[RoleId]: ...
