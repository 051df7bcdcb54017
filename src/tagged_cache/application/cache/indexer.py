"""Application cache – KeyIndexer."""
from __future__ import annotations

import logging

from tagged_cache.application.cache.keys import (
    DEFAULT_DELIMITER,
    CacheKey,
    ExpirationClass,
    HashFn,
    ReferenceKeyBuilder,
    sha1_hex,
    split_namespace,
)
from tagged_cache.application.cache.ports import KeyValueStore
from tagged_cache.kernel.errors import IndexingError

__all__ = ["KeyIndexer"]

logger = logging.getLogger(__name__)


class KeyIndexer:
    """Records a cache key in the reference set of every namespace segment.

    All ``SADD`` commands of one :meth:`index` call go out in a single
    pipeline. Set-union adds are idempotent and commutative, so concurrent
    indexers of the same namespace need no locking.
    """

    def __init__(
        self,
        store: KeyValueStore,
        references: ReferenceKeyBuilder,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        hash_fn: HashFn = sha1_hex,
    ) -> None:
        self._store = store
        self._references = references
        self._delimiter = delimiter
        self._hash_fn = hash_fn

    def qualified_key(self, namespace: str, key: str) -> str:
        return CacheKey.qualified(self._store.key_prefix, namespace, key, self._hash_fn)

    async def index(self, namespace: str, key: str, expiration: ExpirationClass) -> None:
        segments = split_namespace(namespace, self._delimiter)
        if not segments:
            return

        member = self.qualified_key(namespace, key)
        pipe = self._store.pipeline()
        for segment in segments:
            pipe.sadd(self._references.reference_key(segment, expiration), member)

        try:
            await pipe.execute()
        except Exception as exc:
            logger.warning(
                "tagged_cache.index.failed key=%s class=%s segments=%d",
                key, expiration.name, len(segments),
            )
            raise IndexingError(
                f"Failed to index key {key!r}",
                key=key,
                detail={"expiration": expiration.name, "segments": len(segments)},
                cause=exc,
            ) from exc
        logger.debug("tagged_cache.index.added key=%s class=%s", key, expiration.name)
