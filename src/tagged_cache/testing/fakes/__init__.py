"""Testing fakes – in-memory doubles for the store port."""
from tagged_cache.testing.fakes.store import InMemoryPipeline, InMemoryStore

__all__ = ["InMemoryPipeline", "InMemoryStore"]
