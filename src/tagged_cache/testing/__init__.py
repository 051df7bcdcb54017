"""Testing support – in-memory store fake and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["tagged_cache.testing.fixtures"]
"""

from tagged_cache.testing.fakes import InMemoryPipeline, InMemoryStore

__all__ = ["InMemoryPipeline", "InMemoryStore"]
