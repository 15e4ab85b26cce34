"""Error types shared across rolegate."""

from __future__ import annotations


class ConfigError(Exception):
    """Deployment misconfiguration: missing rule file, roles, cache backend, etc.

    Always fatal. An ordinary access denial is never raised; it is the
    ``False`` result of ``Authorizer.authorize``.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(message)
