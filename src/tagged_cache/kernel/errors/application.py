"""Application-layer errors — failures raised by the cache use cases themselves."""

from __future__ import annotations

from typing import Any

from tagged_cache.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class NamespaceResolutionError(ApplicationError):
    """The tag namespace resolver could not produce a namespace.

    Blocks every indexed operation of the call that needed it; never retried.
    """

    default_code = "namespace_resolution_failed"

    def __init__(
        self,
        message: str = "Could not resolve the tag namespace",
        *,
        tags: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.tags: list[str] = tags or []


__all__ = [
    "ApplicationError",
    "NamespaceResolutionError",
]
