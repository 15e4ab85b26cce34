"""Authorization interface the request-handling layer depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rolegate.acl.models import AuthorizationRequest


@runtime_checkable
class Authorize(Protocol):
    def authorize(self, request: AuthorizationRequest) -> bool: ...
