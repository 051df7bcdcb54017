"""Observability – logging configuration for cache hosts."""
