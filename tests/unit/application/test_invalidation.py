"""Unit tests for InvalidationCoordinator."""
from __future__ import annotations

import asyncio

import pytest

from tagged_cache.application.cache import (
    BatchDeleter,
    CacheKey,
    ExpirationClass,
    InvalidationCoordinator,
    KeyIndexer,
    ReferenceKeyBuilder,
)
from tagged_cache.kernel.errors import DeletionError, StoreUnavailableError
from tagged_cache.testing.fakes import InMemoryStore

NAMESPACE = "users|premium"


class _Harness:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        references = ReferenceKeyBuilder("ref:")
        self.indexer = KeyIndexer(store, references)
        self.coordinator = InvalidationCoordinator(store, references, BatchDeleter(store, chunk_size=2))

    async def write(self, key: str, expiration: ExpirationClass, namespace: str = NAMESPACE) -> str:
        await self.store.set(CacheKey.tagged(namespace, key), key)
        await self.indexer.index(namespace, key, expiration)
        return self.indexer.qualified_key(namespace, key)


def _harness() -> _Harness:
    return _Harness(InMemoryStore(key_prefix="app:"))


class TestFlushClass:
    def test_removes_entries_and_reference_sets(self) -> None:
        h = _harness()

        async def run() -> int:
            for i in range(5):
                await h.write(f"u:{i}", ExpirationClass.STANDARD)
            return await h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD)

        assert asyncio.run(run()) == 5
        assert h.store.raw_keys() == set()

    def test_class_isolation(self) -> None:
        h = _harness()

        async def run() -> str:
            kept = await h.write("forever", ExpirationClass.FOREVER)
            await h.write("short", ExpirationClass.STANDARD)
            await h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD)
            return kept

        kept = asyncio.run(run())
        assert h.store.raw_keys() == {
            kept,
            "app:ref:users:forever_ref",
            "app:ref:premium:forever_ref",
        }

    def test_empty_reference_sets(self) -> None:
        h = _harness()
        removed = asyncio.run(h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD))
        assert removed == 0
        assert h.store.count("smembers") == 2
        assert h.store.count("delete_qualified") == 0
        assert h.store.calls[-1] == ("delete", ("ref:users:standard_ref", "ref:premium:standard_ref"))

    def test_reference_sets_deleted_in_one_call_after_members(self) -> None:
        h = _harness()

        async def run() -> None:
            await h.write("u:1", ExpirationClass.STANDARD)
            h.store.calls.clear()
            await h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD)

        asyncio.run(run())
        names = [name for name, _ in h.store.calls]
        assert names.count("delete") == 1
        assert names[-1] == "delete"
        assert names.index("delete") > max(i for i, n in enumerate(names) if n == "delete_qualified")

    def test_member_failure_keeps_reference_sets(self) -> None:
        h = _harness()

        async def run() -> None:
            await h.write("u:1", ExpirationClass.STANDARD)
            h.store.fail_on("delete_qualified", StoreUnavailableError("redis"))
            await h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD)

        with pytest.raises(DeletionError):
            asyncio.run(run())
        assert h.store.count("delete") == 0
        assert h.store.members("ref:users:standard_ref")
        assert h.store.members("ref:premium:standard_ref")

    def test_reference_set_delete_failure_is_deletion_error(self) -> None:
        h = _harness()
        h.store.fail_on("delete", StoreUnavailableError("redis"))

        with pytest.raises(DeletionError) as exc_info:
            asyncio.run(h.coordinator.flush_class(NAMESPACE, ExpirationClass.FOREVER))
        assert isinstance(exc_info.value.__cause__, StoreUnavailableError)
        assert exc_info.value.reference_key == "ref:users:forever_ref"
        assert exc_info.value.detail["reference_keys"] == ["ref:users:forever_ref", "ref:premium:forever_ref"]

    def test_reflush_after_failure_converges(self) -> None:
        h = _harness()

        async def run() -> None:
            await h.write("u:1", ExpirationClass.STANDARD)
            h.store.fail_on("delete_qualified", StoreUnavailableError("redis"))
            with pytest.raises(DeletionError):
                await h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD)
            h.store.clear_failures()
            await h.coordinator.flush_class(NAMESPACE, ExpirationClass.STANDARD)

        asyncio.run(run())
        assert h.store.raw_keys() == set()


class TestFlushAll:
    def test_flushes_both_classes(self) -> None:
        h = _harness()

        async def run() -> int:
            await h.write("a", ExpirationClass.FOREVER)
            await h.write("b", ExpirationClass.STANDARD)
            await h.write("c", ExpirationClass.STANDARD)
            return await h.coordinator.flush_all(NAMESPACE)

        assert asyncio.run(run()) == 3
        assert h.store.raw_keys() == set()

    def test_standard_failure_still_completes_forever(self) -> None:
        h = _harness()

        async def run() -> tuple[str, str]:
            forever = await h.write("a", ExpirationClass.FOREVER)
            standard = await h.write("b", ExpirationClass.STANDARD)
            return forever, standard

        forever, standard = asyncio.run(run())
        h.store.fail_on("delete_qualified", StoreUnavailableError("redis"), when=lambda *keys: standard in keys)

        with pytest.raises(DeletionError):
            asyncio.run(h.coordinator.flush_all(NAMESPACE))

        assert forever not in h.store.raw_keys()
        assert not h.store.members("ref:users:forever_ref")
        assert standard in h.store.raw_keys()
        assert h.store.members("ref:users:standard_ref") == {standard}
