"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        └── StorageError
"""

from metadata_editor.kernel.errors.application import ApplicationError
from metadata_editor.kernel.errors.base import BaseError
from metadata_editor.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from metadata_editor.kernel.errors.infrastructure import InfrastructureError, StorageError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
