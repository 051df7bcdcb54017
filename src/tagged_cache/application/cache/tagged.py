"""Application cache – TaggedCache and RedisTaggedCache facades."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tagged_cache.application.cache.deleter import DEFAULT_CHUNK_SIZE, DEFAULT_CONCURRENCY, BatchDeleter
from tagged_cache.application.cache.indexer import KeyIndexer
from tagged_cache.application.cache.invalidation import InvalidationCoordinator
from tagged_cache.application.cache.keys import (
    DEFAULT_DELIMITER,
    CacheKey,
    ExpirationClass,
    HashFn,
    ReferenceKeyBuilder,
    sha1_hex,
)
from tagged_cache.application.cache.ports import KeyValueStore, NamespaceResolver
from tagged_cache.kernel.errors import IndexingError, NamespaceResolutionError

__all__ = ["RedisTaggedCache", "TaggedCache"]

T = TypeVar("T")
logger = logging.getLogger(__name__)


class TaggedCache:
    """Cache whose keys are scoped to the namespace of a tag combination.

    Entries are stored under ``<sha1(namespace)>:<key>``; flushing resets the
    tag set, which changes the namespace and orphans every entry written
    under the old one until its TTL (if any) expires.
    """

    def __init__(
        self,
        store: KeyValueStore,
        tags: NamespaceResolver,
        *,
        hash_fn: HashFn = sha1_hex,
    ) -> None:
        self.store = store
        self.tags = tags
        self._hash_fn = hash_fn

    async def namespace(self) -> str:
        try:
            return await self.tags.get_namespace()
        except NamespaceResolutionError:
            raise
        except Exception as exc:
            raise NamespaceResolutionError(
                tags=list(getattr(self.tags, "names", [])),
                cause=exc,
            ) from exc

    async def tagged_item_key(self, key: str) -> str:
        return self._tagged(await self.namespace(), key)

    async def get(self, key: str, default: Any = None) -> Any:
        value = await self.store.get(await self.tagged_item_key(key))
        return default if value is None else value

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        await self._put(await self.namespace(), key, value, ttl)

    async def forever(self, key: str, value: Any) -> None:
        await self.set(key, value, None)

    async def increment(self, key: str, delta: int = 1) -> int:
        return await self.store.increment(await self.tagged_item_key(key), delta)

    async def decrement(self, key: str, delta: int = 1) -> int:
        return await self.store.decrement(await self.tagged_item_key(key), delta)

    async def delete(self, key: str) -> bool:
        return bool(await self.store.delete(await self.tagged_item_key(key)))

    async def remember(self, key: str, ttl: int | None, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value, or load, store and return it on a miss."""
        cached = await self.get(key)
        if cached is not None:
            return cached  # type: ignore[no-any-return]
        value = await loader()
        await self.set(key, value, ttl)
        return value

    async def remember_forever(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        return await self.remember(key, None, loader)

    async def flush(self) -> None:
        await self.tags.reset()

    async def _put(self, namespace: str, key: str, value: Any, ttl: int | None) -> None:
        await self.store.set(self._tagged(namespace, key), value, ttl)

    def _tagged(self, namespace: str, key: str) -> str:
        return CacheKey.tagged(namespace, key, self._hash_fn)


class RedisTaggedCache(TaggedCache):
    """Tagged cache that indexes every write in per-tag reference sets.

    Writes are indexed into the ``FOREVER`` or ``STANDARD`` reference set of
    each tag segment, concurrently with the value write. :meth:`flush` deletes
    the indexed entries and the sets before resetting the tags, so entries
    stop occupying memory instead of merely becoming unreachable.
    """

    def __init__(
        self,
        store: KeyValueStore,
        tags: NamespaceResolver,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        concurrency: int = DEFAULT_CONCURRENCY,
        hash_fn: HashFn = sha1_hex,
    ) -> None:
        super().__init__(store, tags, hash_fn=hash_fn)
        self.references = ReferenceKeyBuilder(tags.prefix)
        self.indexer = KeyIndexer(store, self.references, delimiter=delimiter, hash_fn=hash_fn)
        self.coordinator = InvalidationCoordinator(
            store,
            self.references,
            BatchDeleter(store, chunk_size=chunk_size, concurrency=concurrency),
            delimiter=delimiter,
        )

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        namespace = await self.namespace()
        await self._indexed(
            key,
            self.indexer.index(namespace, key, ExpirationClass.for_ttl(ttl)),
            self._put(namespace, key, value, ttl),
        )

    async def increment(self, key: str, delta: int = 1) -> int:
        namespace = await self.namespace()
        return await self._indexed(
            key,
            self.indexer.index(namespace, key, ExpirationClass.STANDARD),
            self.store.increment(self._tagged(namespace, key), delta),
        )

    async def decrement(self, key: str, delta: int = 1) -> int:
        namespace = await self.namespace()
        return await self._indexed(
            key,
            self.indexer.index(namespace, key, ExpirationClass.STANDARD),
            self.store.decrement(self._tagged(namespace, key), delta),
        )

    async def flush(self) -> None:
        namespace = await self.namespace()
        removed = await self.coordinator.flush_all(namespace)
        await super().flush()
        logger.info("tagged_cache.flush.completed removed=%d", removed)

    async def _indexed(self, key: str, index: Awaitable[None], write: Awaitable[T]) -> T:
        index_result, write_result = await asyncio.gather(index, write, return_exceptions=True)
        if isinstance(write_result, BaseException):
            if isinstance(index_result, BaseException):
                logger.warning("tagged_cache.index.failed_with_write key=%s error=%r", key, index_result)
            raise write_result
        if isinstance(index_result, BaseException):
            if isinstance(index_result, IndexingError):
                index_result.value_written = True
            raise index_result
        return write_result
