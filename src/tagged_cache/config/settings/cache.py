"""Config settings – TaggedCacheSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from tagged_cache.config.settings.base import Settings
from tagged_cache.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class TaggedCacheSettings(Settings):
    """Connection and invalidation policy for a tagged cache instance.

    Read from ``TAGGED_CACHE_*`` environment variables by the env loaders.

    * ``key_prefix`` – prepended by the store to every primitive key; isolates
      tenants sharing one Redis database.
    * ``reference_prefix`` – prepended to reference-set keys so they never
      collide with cached entries or another cache instance's indices.
    * ``chunk_size`` / ``concurrency`` – bulk-delete batch size and the number
      of chunk deletes allowed in flight at once.
    """

    _prefix: ClassVar[str] = "TAGGED_CACHE"

    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""
    reference_prefix: str = "ref:"
    delimiter: str = "|"
    chunk_size: int = 1000
    concurrency: int = 100

    def _validate(self) -> None:
        if self.chunk_size < 1:
            raise InvalidSettingValueError("chunk_size", self.chunk_size, "must be >= 1")
        if self.concurrency < 1:
            raise InvalidSettingValueError("concurrency", self.concurrency, "must be >= 1")
        if not self.delimiter:
            raise InvalidSettingValueError("delimiter", self.delimiter, "must not be empty")


__all__ = ["TaggedCacheSettings"]
