"""Application cache – @cached decorator."""
from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable

from tagged_cache.application.cache.repository import CacheRepository

__all__ = ["cached"]


def cached(
    repository: CacheRepository,
    ttl: int | None = 60,
    key_fn: Callable[..., str] | None = None,
    tags: list[str] | None = None,
):
    """Decorator: caches an async function's result under *tags*.

    *key_fn* receives the same args/kwargs as the wrapped function. Results
    are indexed, so ``repository.tags(*tags).flush()`` drops them. A ``None``
    result reads back as a miss and is loaded again on the next call.
    """
    tag_names = list(tags or [])

    def decorator(fn: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            key = key_fn(*args, **kwargs) if key_fn else f"{fn.__qualname__}:{args}:{sorted(kwargs.items())}"
            cache = repository.tags(*tag_names)
            return await cache.remember(key, ttl, lambda: fn(*args, **kwargs))

        wrapper._cache_repository = repository  # type: ignore[attr-defined]
        return wrapper

    return decorator
