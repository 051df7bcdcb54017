"""Redis adapter – key-value store with set and pipeline support."""
from tagged_cache.adapters.redis.store import RedisStore, RedisStorePipeline

__all__ = ["RedisStore", "RedisStorePipeline"]
