"""Application cache – BatchDeleter and chunking helper."""
from __future__ import annotations

import asyncio
import logging
from typing import Iterator, Sequence, TypeVar

from tagged_cache.application.cache.ports import KeyValueStore
from tagged_cache.kernel.errors import DeletionError

__all__ = ["BatchDeleter", "DEFAULT_CHUNK_SIZE", "DEFAULT_CONCURRENCY", "chunked"]

T = TypeVar("T")
logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CONCURRENCY = 100


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of *items* holding at most *size* elements."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


class BatchDeleter:
    """Deletes every key indexed in a reference set.

    Membership is deleted in chunks of ``chunk_size`` keys with at most
    ``concurrency`` chunk deletes in flight. After the first failed chunk no
    further chunks are started; chunks already in flight are awaited before
    :class:`DeletionError` is raised.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._store = store
        self.chunk_size = chunk_size
        self.concurrency = concurrency

    async def delete_indexed(self, reference_key: str) -> int:
        """Delete the members of *reference_key*; return how many the store removed.

        A missing set reads as empty. The set itself is left in place.
        """
        members = await self._store.smembers(reference_key)
        # order-preserving dedupe
        unique = list(dict.fromkeys(members))
        if not unique:
            return 0

        semaphore = asyncio.Semaphore(self.concurrency)
        failures: list[BaseException] = []

        async def _delete(chunk: list[str]) -> int:
            async with semaphore:
                if failures:
                    return 0
                try:
                    return await self._store.delete_qualified(*chunk)
                except Exception as exc:
                    failures.append(exc)
                    raise

        chunks = list(chunked(unique, self.chunk_size))
        results = await asyncio.gather(*(_delete(c) for c in chunks), return_exceptions=True)

        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            logger.warning(
                "tagged_cache.delete.failed reference=%s chunks=%d failed=%d",
                reference_key, len(chunks), len(errors),
            )
            raise DeletionError(
                f"Failed to delete keys indexed under {reference_key!r}",
                reference_key=reference_key,
                detail={"chunks": len(chunks), "failed_chunks": len(errors)},
                cause=errors[0],
            ) from errors[0]

        removed = sum(results)
        logger.debug(
            "tagged_cache.delete.completed reference=%s members=%d chunks=%d removed=%d",
            reference_key, len(unique), len(chunks), removed,
        )
        return removed
