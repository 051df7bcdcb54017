"""Testing fixtures – pytest fixtures for fake doubles."""
from tagged_cache.testing.fixtures.store import cache_repository, in_memory_store

__all__ = ["cache_repository", "in_memory_store"]
