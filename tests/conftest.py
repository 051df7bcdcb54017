"""Shared pytest configuration: registers the in-memory store fixtures."""

pytest_plugins = ["tagged_cache.testing.fixtures"]
