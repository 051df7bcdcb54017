"""
tagged_cache – Tag-based invalidation for key-value caches.

Import path convention::

    from tagged_cache.application.cache import CacheRepository, ExpirationClass
    from tagged_cache.adapters.redis import RedisStore
    from tagged_cache.kernel.errors import DeletionError, IndexingError
    from tagged_cache.config.settings import TaggedCacheSettings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
