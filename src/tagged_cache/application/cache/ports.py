"""Application cache – store and namespace-resolver ports."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["KeyValueStore", "NamespaceResolver", "StorePipeline"]


class StorePipeline(Protocol):
    """Queued commands executed as one round trip.

    Command methods only queue and return the pipeline; ``execute`` returns
    one result per queued command, in submission order.
    """

    def sadd(self, set_key: str, *members: str) -> "StorePipeline": ...
    def delete(self, *keys: str) -> "StorePipeline": ...
    async def execute(self) -> list[Any]: ...


@runtime_checkable
class KeyValueStore(Protocol):
    """Primitive key-value store the tagged cache is built on.

    Every method taking *logical* keys applies ``key_prefix`` itself;
    ``delete_qualified`` receives keys that already carry it. ``add`` writes
    only when the key is absent and reports whether it did, atomically.
    """

    key_prefix: str

    async def get(self, key: str) -> Any: ...
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None: ...
    async def add(self, key: str, value: Any, ttl: int | None = None) -> bool: ...
    async def increment(self, key: str, delta: int = 1) -> int: ...
    async def decrement(self, key: str, delta: int = 1) -> int: ...
    async def delete(self, *keys: str) -> int: ...
    async def delete_qualified(self, *keys: str) -> int: ...
    async def sadd(self, set_key: str, *members: str) -> int: ...
    async def smembers(self, set_key: str) -> list[str]: ...
    def pipeline(self) -> StorePipeline: ...


@runtime_checkable
class NamespaceResolver(Protocol):
    """Produces the namespace for the active tag combination.

    ``prefix`` is the fixed string reference keys are built from; ``reset``
    is the primitive flush of the tag combination.
    """

    prefix: str

    async def get_namespace(self) -> str: ...
    async def reset(self) -> None: ...
