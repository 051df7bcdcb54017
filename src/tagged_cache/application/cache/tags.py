"""Application cache – TagSet namespace resolver."""
from __future__ import annotations

import asyncio
import uuid
from typing import Iterable

from tagged_cache.application.cache.keys import DEFAULT_DELIMITER
from tagged_cache.application.cache.ports import KeyValueStore

__all__ = ["TagSet"]


class TagSet:
    """Versioned set of tag names.

    Each tag owns a random id stored forever at ``<prefix>tag:<name>:key``,
    created with an atomic set-if-absent so concurrent first users agree on
    it. The namespace is the tags' ids joined with the delimiter, so
    resetting a tag moves every entry written under it out of reach in one
    write.
    Names are de-duplicated and sorted: the same tags in any order yield the
    same namespace.
    """

    def __init__(
        self,
        store: KeyValueStore,
        names: Iterable[str],
        *,
        prefix: str = "ref:",
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        self._store = store
        self.names: list[str] = sorted(set(names))
        self.prefix = prefix
        self._delimiter = delimiter
        for name in self.names:
            if not name or delimiter in name:
                raise ValueError(f"invalid tag name {name!r}")

    def tag_key(self, name: str) -> str:
        return f"{self.prefix}tag:{name}:key"

    async def tag_id(self, name: str) -> str:
        key = self.tag_key(name)
        current = await self._store.get(key)
        while current is None:
            candidate = uuid.uuid4().hex
            if await self._store.add(key, candidate):
                return candidate
            # lost the race: adopt the winner's id
            current = await self._store.get(key)
        return str(current)

    async def reset_tag(self, name: str) -> str:
        new_id = uuid.uuid4().hex
        await self._store.set(self.tag_key(name), new_id)
        return new_id

    async def reset(self) -> None:
        await asyncio.gather(*(self.reset_tag(n) for n in self.names))

    async def get_namespace(self) -> str:
        ids = await asyncio.gather(*(self.tag_id(n) for n in self.names))
        return self._delimiter.join(ids)
