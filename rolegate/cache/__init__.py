"""Cache backends and AccessTable caching."""

from rolegate.cache.backends import FileCache, MemoryCache
from rolegate.cache.registry import CacheRegistry
from rolegate.cache.table_cache import AccessTableCache

__all__ = ["AccessTableCache", "CacheRegistry", "FileCache", "MemoryCache"]
