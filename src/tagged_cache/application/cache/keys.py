"""Application cache – ExpirationClass, reference keys and cache key helpers."""
from __future__ import annotations

import enum
import hashlib
from typing import Callable

__all__ = [
    "CacheKey",
    "DEFAULT_DELIMITER",
    "ExpirationClass",
    "ReferenceKeyBuilder",
    "sha1_hex",
    "split_namespace",
]

DEFAULT_DELIMITER = "|"

HashFn = Callable[[str], str]


class ExpirationClass(enum.Enum):
    """Partition of the reference index by whether entries carry a TTL."""

    FOREVER = "forever_ref"
    STANDARD = "standard_ref"

    @classmethod
    def for_ttl(cls, ttl: int | None) -> "ExpirationClass":
        return cls.STANDARD if ttl else cls.FOREVER


def sha1_hex(text: str) -> str:
    """Stable 40-char digest used to shorten namespaces inside cache keys."""
    return hashlib.sha1(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def split_namespace(namespace: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """Return the non-empty segments of *namespace*."""
    return [segment for segment in namespace.split(delimiter) if segment]


class ReferenceKeyBuilder:
    """Derives reference-set keys: ``<prefix><segment>:<class token>``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def reference_key(self, segment: str, expiration: ExpirationClass) -> str:
        if not isinstance(expiration, ExpirationClass):
            raise TypeError(f"expected ExpirationClass, got {expiration!r}")
        return f"{self.prefix}{segment}:{expiration.value}"

    def reference_keys(
        self,
        namespace: str,
        expiration: ExpirationClass,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> list[str]:
        return [self.reference_key(s, expiration) for s in split_namespace(namespace, delimiter)]


class CacheKey:
    """Factory for the two derived forms of a tagged entry's key."""

    @staticmethod
    def tagged(namespace: str, key: str, hash_fn: HashFn = sha1_hex) -> str:
        # what callers hand to the store; the store adds its own prefix
        return f"{hash_fn(namespace)}:{key}"

    @staticmethod
    def qualified(key_prefix: str, namespace: str, key: str, hash_fn: HashFn = sha1_hex) -> str:
        # the physical key, as stored in reference sets
        return f"{key_prefix}{CacheKey.tagged(namespace, key, hash_fn)}"
