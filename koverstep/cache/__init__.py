"""Build cache integration."""

from .collector import (
    CACHE_EXCLUDE_PATHS_KEY,
    CACHE_INCLUDE_PATHS_KEY,
    GradleCacheCollector,
    create_cache_collector,
)


__all__ = [
    "CACHE_EXCLUDE_PATHS_KEY",
    "CACHE_INCLUDE_PATHS_KEY",
    "GradleCacheCollector",
    "create_cache_collector",
]
