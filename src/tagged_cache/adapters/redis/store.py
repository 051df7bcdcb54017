"""Redis adapter – RedisStore."""
from __future__ import annotations

import contextlib
import json
import logging
from typing import Any, Iterator

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from tagged_cache.config.settings import TaggedCacheSettings
from tagged_cache.kernel.errors import SerializationError, StoreUnavailableError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as exc:
        logger.warning("tagged_cache.redis.unavailable op=%s error=%s", operation, exc)
        raise StoreUnavailableError("redis", f"Redis {operation} failed: {exc}", cause=exc) from exc


def _decode(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


class RedisStorePipeline:
    """Queues commands on a ``MULTI/EXEC`` pipeline, prefixing logical keys."""

    def __init__(self, store: "RedisStore", pipe: Any) -> None:
        self._store = store
        self._pipe = pipe
        self._queued = 0

    def __len__(self) -> int:
        return self._queued

    def sadd(self, set_key: str, *members: str) -> "RedisStorePipeline":
        self._pipe.sadd(self._store.qualify(set_key), *members)
        self._queued += 1
        return self

    def delete(self, *keys: str) -> "RedisStorePipeline":
        self._pipe.delete(*(self._store.qualify(k) for k in keys))
        self._queued += 1
        return self

    async def execute(self) -> list[Any]:
        if not self._queued:
            return []
        async with self._pipe as pipe:
            with _translate_errors("pipeline"):
                return list(await pipe.execute())


class RedisStore:
    """Async key-value store over ``redis.asyncio`` with a global key prefix.

    Values are JSON-encoded, so integers written by ``set`` remain valid
    operands for ``INCRBY``/``DECRBY``.
    """

    def __init__(self, client: aioredis.Redis, *, key_prefix: str = "") -> None:
        self._client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, *, key_prefix: str = "", **kwargs: Any) -> "RedisStore":
        kwargs.setdefault("decode_responses", True)
        return cls(aioredis.from_url(url, **kwargs), key_prefix=key_prefix)

    @classmethod
    def from_settings(cls, settings: TaggedCacheSettings, **kwargs: Any) -> "RedisStore":
        return cls.from_url(settings.redis_url, key_prefix=settings.key_prefix, **kwargs)

    @property
    def client(self) -> aioredis.Redis:
        return self._client

    def qualify(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Any:
        with _translate_errors("get"):
            raw = await self._client.get(self.qualify(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise SerializationError(f"Cannot decode value of {key!r}", payload_type="json", cause=exc) from exc

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        payload = self._encode(key, value)
        with _translate_errors("set"):
            await self._client.set(self.qualify(key), payload, ex=ttl or None)

    async def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        payload = self._encode(key, value)
        with _translate_errors("set"):
            return bool(await self._client.set(self.qualify(key), payload, ex=ttl or None, nx=True))

    async def increment(self, key: str, delta: int = 1) -> int:
        with _translate_errors("incrby"):
            return int(await self._client.incrby(self.qualify(key), delta))

    async def decrement(self, key: str, delta: int = 1) -> int:
        with _translate_errors("decrby"):
            return int(await self._client.decrby(self.qualify(key), delta))

    async def delete(self, *keys: str) -> int:
        return await self.delete_qualified(*(self.qualify(k) for k in keys))

    async def delete_qualified(self, *keys: str) -> int:
        if not keys:
            return 0
        with _translate_errors("delete"):
            return int(await self._client.delete(*keys))

    async def sadd(self, set_key: str, *members: str) -> int:
        with _translate_errors("sadd"):
            return int(await self._client.sadd(self.qualify(set_key), *members))

    async def smembers(self, set_key: str) -> list[str]:
        with _translate_errors("smembers"):
            members = await self._client.smembers(self.qualify(set_key))
        return [_decode(m) for m in members]

    @staticmethod
    def _encode(key: str, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Cannot encode value for {key!r}", payload_type=type(value).__name__, cause=exc
            ) from exc

    def pipeline(self) -> RedisStorePipeline:
        return RedisStorePipeline(self, self._client.pipeline(transaction=True))

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisStore", "RedisStorePipeline"]
