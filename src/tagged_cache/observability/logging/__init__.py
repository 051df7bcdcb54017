"""Observability – structured logging helpers."""
from tagged_cache.observability.logging.factory import JsonLoggerFactory

__all__ = ["JsonLoggerFactory"]
