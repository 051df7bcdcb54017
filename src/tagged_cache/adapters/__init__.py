"""Adapters – concrete stores behind the application ports."""
