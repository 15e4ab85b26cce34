"""Named cache backends."""

from __future__ import annotations

import logging

from rolegate.cache.backends import FileCache, MemoryCache
from rolegate.config.models import RolegateConfig
from rolegate.errors import ConfigError
from rolegate.interfaces.cache import CacheBackend

logger = logging.getLogger(__name__)


class CacheRegistry:
    """Maps backend names (``authorizer.cache``) to CacheBackend instances."""

    def __init__(self, backends: dict[str, CacheBackend] | None = None) -> None:
        self._backends: dict[str, CacheBackend] = dict(backends or {})

    @classmethod
    def from_config(cls, config: RolegateConfig) -> CacheRegistry:
        registry = cls()
        for name, backend_config in config.caches.items():
            if backend_config.engine == "file":
                registry.register(name, FileCache(backend_config.path))
            else:
                registry.register(name, MemoryCache())
        if "default" not in registry:
            registry.register("default", MemoryCache())
        return registry

    def __contains__(self, name: object) -> bool:
        return name in self._backends

    def names(self) -> list[str]:
        return sorted(self._backends)

    def register(self, name: str, backend: CacheBackend) -> None:
        if not isinstance(backend, CacheBackend):
            raise ConfigError(f"Cache '{name}' does not implement read/write/delete", source=name)
        self._backends[name] = backend
        logger.debug("registered cache backend %s (%s)", name, type(backend).__name__)

    def get(self, name: str) -> CacheBackend:
        try:
            return self._backends[name]
        except KeyError:
            raise ConfigError(
                f"Could not find '{name}' cache (configured: {self.names()})",
                source=name,
            ) from None
