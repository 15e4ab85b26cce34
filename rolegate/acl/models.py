"""Pydantic models for compiled access rules and authorization requests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rolegate.config.models import RoleId

WILDCARD = "*"

RoleMap = dict[str, RoleId]
ActionRule = dict[str, frozenset[RoleId]]


class ResourceDescriptor(BaseModel):
    """A controller, optionally scoped by plugin namespace and routing prefix."""

    model_config = ConfigDict(frozen=True)

    plugin: str | None = None
    prefix: str | None = None
    controller: str


class ResourceRules(BaseModel):
    """Everything the access table knows about one resource key."""

    model_config = ConfigDict(frozen=True)

    descriptor: ResourceDescriptor
    actions: ActionRule = Field(default_factory=dict)


class AccessTable(BaseModel):
    """Compiled rule set keyed by resource key.

    Built once per cache miss and only read afterwards. Serializes to plain
    JSON (``model_dump(mode="json")``) so any cache backend can hold it.
    """

    model_config = ConfigDict(frozen=True)

    resources: dict[str, ResourceRules] = Field(default_factory=dict)

    def __contains__(self, key: object) -> bool:
        return key in self.resources

    def __len__(self) -> int:
        return len(self.resources)

    def keys(self) -> list[str]:
        return list(self.resources)

    def get(self, key: str) -> ResourceRules | None:
        return self.resources.get(key)

    def roles_for(self, key: str, action: str) -> frozenset[RoleId] | None:
        """Role ids granted *action* on *key*, or None when no rule exists."""
        rules = self.resources.get(key)
        if rules is None:
            return None
        return rules.actions.get(action)


class AuthorizationRequest(BaseModel):
    """The roles of the current user plus the resource/action they are hitting."""

    model_config = ConfigDict(frozen=True)

    roles: tuple[RoleId, ...] = ()
    plugin: str | None = None
    prefix: str | None = None
    controller: str
    action: str

    @property
    def descriptor(self) -> ResourceDescriptor:
        return ResourceDescriptor(
            plugin=self.plugin, prefix=self.prefix, controller=self.controller
        )
