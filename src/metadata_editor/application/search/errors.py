"""Search errors – field-level input errors and configuration faults."""
from __future__ import annotations

from typing import Any

from metadata_editor.kernel.errors import (
    ApplicationError,
    ConflictError,
    StorageError,
    ValidationError,
)


class UnknownFieldError(ValidationError):
    """A search parameter names a field that is not registered."""

    default_code = "unknown_field"

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Unknown search field: {field_name}")
        self.field_name = field_name

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "field": self.field_name, "message": self.message}


class InvalidValueError(ValidationError):
    """A value failed the field's value rule or could not be parsed."""

    default_code = "invalid_value"

    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(f"Invalid value for {field_name}: {reason}")
        self.field_name = field_name
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "field": self.field_name, "message": self.message}


class UnsupportedMatchKindError(ApplicationError):
    """A field configuration references a match kind with no strategy."""

    default_code = "unsupported_match_kind"

    def __init__(self, match_kind: object) -> None:
        super().__init__(f"No search strategy for match kind {match_kind!r}")
        self.match_kind = match_kind


class FieldAlreadyRegisteredError(ConflictError):
    """A field with the same name is already in the registry."""

    default_code = "field_already_registered"

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Search field '{field_name}' is already registered")
        self.field_name = field_name


class StorageFaultError(StorageError):
    """The storage collaborator failed or timed out during a search."""

    default_code = "storage_fault"

    def __init__(self, operation: str = "search", cause: BaseException | None = None) -> None:
        super().__init__(operation, "Storage fault during search", cause=cause)


__all__ = [
    "FieldAlreadyRegisteredError",
    "InvalidValueError",
    "StorageFaultError",
    "UnknownFieldError",
    "UnsupportedMatchKindError",
]
