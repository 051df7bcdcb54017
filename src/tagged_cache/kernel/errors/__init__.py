"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError             (application.py)
    │   ├── NamespaceResolutionError
    │   └── ConfigError              (tagged_cache.config.validation)
    └── InfrastructureError          (infrastructure.py)
        ├── StoreUnavailableError
        ├── SerializationError
        ├── IndexingError
        └── DeletionError
"""

from tagged_cache.kernel.errors.application import (
    ApplicationError,
    NamespaceResolutionError,
)
from tagged_cache.kernel.errors.base import BaseError
from tagged_cache.kernel.errors.infrastructure import (
    DeletionError,
    IndexingError,
    InfrastructureError,
    SerializationError,
    StoreUnavailableError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DeletionError",
    "IndexingError",
    "InfrastructureError",
    "NamespaceResolutionError",
    "SerializationError",
    "StoreUnavailableError",
]
