"""Write-through storage of the compiled AccessTable."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from rolegate.acl.models import AccessTable
from rolegate.interfaces.cache import CacheBackend

logger = logging.getLogger(__name__)


class AccessTableCache:
    """Stores the whole AccessTable under one key of a CacheBackend.

    With ``auto_clear`` on and ``debug`` on, every ``get`` starts with a
    ``clear`` so the table is rebuilt each time while developing. Eviction
    and TTL belong to the backend.
    """

    def __init__(
        self,
        backend: CacheBackend,
        key: str,
        auto_clear: bool = False,
        debug: bool = False,
    ) -> None:
        self._backend = backend
        self.key = key
        self.auto_clear = auto_clear
        self.debug = debug

    def get(self) -> AccessTable | None:
        if self.auto_clear and self.debug:
            self.clear()

        raw = self._backend.read(self.key)
        if raw is None:
            return None
        if isinstance(raw, AccessTable):
            return raw
        try:
            return AccessTable.model_validate(raw)
        except ValidationError:
            logger.warning("Cached access table under %s is unreadable, recompiling", self.key)
            return None

    def set(self, table: AccessTable) -> None:
        self._backend.write(self.key, table.model_dump(mode="json"))

    def clear(self) -> None:
        self._backend.delete(self.key)
