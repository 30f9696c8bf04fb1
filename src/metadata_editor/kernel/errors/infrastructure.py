"""Infrastructure errors – I/O failures in the storage collaborator."""

from __future__ import annotations

from typing import Any

from metadata_editor.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StorageError(InfrastructureError):
    """The document store failed to execute an operation."""

    default_code = "storage_error"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Storage operation '{operation}' failed", **kwargs)
        self.operation = operation


__all__ = ["InfrastructureError", "StorageError"]
