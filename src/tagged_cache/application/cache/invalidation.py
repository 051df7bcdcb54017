"""Application cache – InvalidationCoordinator."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from tagged_cache.application.cache.deleter import BatchDeleter
from tagged_cache.application.cache.keys import DEFAULT_DELIMITER, ExpirationClass, ReferenceKeyBuilder
from tagged_cache.application.cache.ports import KeyValueStore
from tagged_cache.kernel.errors import DeletionError

__all__ = ["InvalidationCoordinator"]

logger = logging.getLogger(__name__)


def _raise_first(results: list[Any], what: str) -> None:
    errors = [r for r in results if isinstance(r, BaseException)]
    for extra in errors[1:]:
        logger.warning("tagged_cache.%s.additional_failure error=%r", what, extra)
    if errors:
        raise errors[0]


class InvalidationCoordinator:
    """Flushes the reference index of a namespace, one expiration class at a time.

    Per class the sequence is strict: read and delete the members of every
    reference set, then delete the sets. The sets of a class survive any
    failed member deletion so a later flush can finish the job.
    """

    def __init__(
        self,
        store: KeyValueStore,
        references: ReferenceKeyBuilder,
        deleter: BatchDeleter,
        *,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        self._store = store
        self._references = references
        self._deleter = deleter
        self._delimiter = delimiter

    async def flush_class(self, namespace: str, expiration: ExpirationClass) -> int:
        reference_keys = self._references.reference_keys(namespace, expiration, self._delimiter)
        if not reference_keys:
            return 0

        results = await asyncio.gather(
            *(self._deleter.delete_indexed(k) for k in reference_keys),
            return_exceptions=True,
        )
        _raise_first(results, "flush_class")

        try:
            await self._store.delete(*reference_keys)
        except Exception as exc:
            raise DeletionError(
                "Failed to delete reference sets",
                reference_key=reference_keys[0],
                detail={"expiration": expiration.name, "reference_keys": reference_keys},
                cause=exc,
            ) from exc

        removed = sum(results)
        logger.info(
            "tagged_cache.flush_class.completed class=%s references=%d removed=%d",
            expiration.name, len(reference_keys), removed,
        )
        return removed

    async def flush_all(self, namespace: str) -> int:
        """Flush both expiration classes; raise the first failure after both finish."""
        results = await asyncio.gather(
            self.flush_class(namespace, ExpirationClass.FOREVER),
            self.flush_class(namespace, ExpirationClass.STANDARD),
            return_exceptions=True,
        )
        _raise_first(results, "flush_all")
        return sum(results)
