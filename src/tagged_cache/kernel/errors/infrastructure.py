"""Infrastructure errors — store I/O, encoding, index maintenance."""

from __future__ import annotations

from typing import Any

from tagged_cache.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a caller mistake."""

    default_code = "infrastructure_error"


class StoreUnavailableError(InfrastructureError):
    """The transport to the backing key-value store failed."""

    default_code = "store_unavailable"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Store '{resource}' is unavailable", **kwargs)
        self.resource = resource


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a cached value."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class IndexingError(InfrastructureError):
    """The batched add of a key to its reference sets failed.

    The store may have applied a subset of the batch. ``value_written`` tells
    whether the primitive value write of the same call succeeded (``None``
    when the indexer was used on its own).
    """

    default_code = "indexing_failed"

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value_written: bool | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key = key
        self.value_written = value_written


class DeletionError(InfrastructureError):
    """Deleting indexed keys (or the reference sets themselves) failed."""

    default_code = "deletion_failed"

    def __init__(
        self,
        message: str,
        *,
        reference_key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.reference_key = reference_key


__all__ = [
    "DeletionError",
    "IndexingError",
    "InfrastructureError",
    "SerializationError",
    "StoreUnavailableError",
]
