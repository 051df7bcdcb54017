"""Application cache – reference-indexed tagged cache."""
from tagged_cache.application.cache.keys import (
    CacheKey,
    ExpirationClass,
    ReferenceKeyBuilder,
    sha1_hex,
    split_namespace,
)
from tagged_cache.application.cache.ports import KeyValueStore, NamespaceResolver, StorePipeline
from tagged_cache.application.cache.tags import TagSet
from tagged_cache.application.cache.indexer import KeyIndexer
from tagged_cache.application.cache.deleter import BatchDeleter, chunked
from tagged_cache.application.cache.invalidation import InvalidationCoordinator
from tagged_cache.application.cache.tagged import RedisTaggedCache, TaggedCache
from tagged_cache.application.cache.repository import CacheRepository
from tagged_cache.application.cache.decorators import cached

__all__ = [
    "BatchDeleter",
    "CacheKey",
    "CacheRepository",
    "ExpirationClass",
    "InvalidationCoordinator",
    "KeyIndexer",
    "KeyValueStore",
    "NamespaceResolver",
    "RedisTaggedCache",
    "ReferenceKeyBuilder",
    "StorePipeline",
    "TagSet",
    "TaggedCache",
    "cached",
    "chunked",
    "sha1_hex",
    "split_namespace",
]
