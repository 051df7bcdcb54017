"""Application cache – CacheRepository entry point."""
from __future__ import annotations

from typing import Any

from tagged_cache.application.cache.ports import KeyValueStore
from tagged_cache.application.cache.tagged import RedisTaggedCache
from tagged_cache.application.cache.tags import TagSet
from tagged_cache.config.settings import TaggedCacheSettings

__all__ = ["CacheRepository"]


class CacheRepository:
    """Untagged access to a store plus a factory for tagged views of it.

    The store handle is shared by every tagged cache the repository hands
    out; connecting and closing it is the host application's job::

        repo = CacheRepository.from_settings(TaggedCacheSettings())
        await repo.tags("users", "premium").set("u:42", payload, ttl=300)
        await repo.tags("users").flush()
        await repo.close()
    """

    def __init__(self, store: KeyValueStore, settings: TaggedCacheSettings | None = None) -> None:
        self.store = store
        self.settings = settings or TaggedCacheSettings(key_prefix=store.key_prefix)

    @classmethod
    def from_settings(cls, settings: TaggedCacheSettings, **redis_kwargs: Any) -> "CacheRepository":
        from tagged_cache.adapters.redis import RedisStore  # lazy import

        return cls(RedisStore.from_settings(settings, **redis_kwargs), settings)

    def tags(self, *names: str) -> RedisTaggedCache:
        tag_set = TagSet(
            self.store,
            names,
            prefix=self.settings.reference_prefix,
            delimiter=self.settings.delimiter,
        )
        return RedisTaggedCache(
            self.store,
            tag_set,
            delimiter=self.settings.delimiter,
            chunk_size=self.settings.chunk_size,
            concurrency=self.settings.concurrency,
        )

    async def get(self, key: str, default: Any = None) -> Any:
        value = await self.store.get(key)
        return default if value is None else value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        await self.store.set(key, value, ttl)

    async def delete(self, key: str) -> bool:
        return bool(await self.store.delete(key))

    async def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "CacheRepository":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()
