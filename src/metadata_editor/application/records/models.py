"""Record models – pydantic validation of record payloads."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StringConstraints,
    ValidationInfo,
    field_validator,
    model_validator,
)

from metadata_editor.application.search.rules import UUID_PATTERN

LANGUAGES = ("Assyrian", "English", "Arabic", "Other")
COPYRIGHT = ("yes", "no")
SOURCES = ("private", "online", "published")

ShortText = Annotated[str, StringConstraints(max_length=500)]
AuthorName = Annotated[str, StringConstraints(min_length=1, max_length=500)]
RecordIdStr = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]


class RecordMetadata(BaseModel):
    """Metadata block of a record.

    Predefined fields are validated; any other key is accepted as a custom
    field.  ``genre`` and ``dialect`` are checked against the option lists
    passed in the validation context under ``"options"``.
    """

    model_config = ConfigDict(extra="allow")

    title: ShortText | None = None
    subtitle: ShortText | None = None
    genre: str | None = None
    language: Literal["Assyrian", "English", "Arabic", "Other"] | None = None
    copyright: Literal["yes", "no"] | None = None
    authors: Annotated[list[AuthorName], Field(min_length=1)] | None = None
    editor: ShortText | None = None
    translator: ShortText | None = None
    dialect: str | None = None
    location: ShortText | None = None
    country: ShortText | None = None
    source: Literal["private", "online", "published"] | None = None
    num_pages: PositiveInt | None = None
    pub_date: Annotated[int, Field(ge=1000)] | None = None
    edition: ShortText | None = None

    @field_validator("pub_date")
    @classmethod
    def _not_in_future(cls, value: int | None) -> int | None:
        year = datetime.now(UTC).year
        if value is not None and value > year:
            raise ValueError(f"must be less than or equal to {year}")
        return value

    @field_validator("genre", "dialect")
    @classmethod
    def _known_option(cls, value: str | None, info: ValidationInfo) -> str | None:
        catalogue = (info.context or {}).get("options")
        if value is None or catalogue is None:
            return value
        allowed = catalogue.get(info.field_name)
        if value not in allowed:
            raise ValueError(f"must be one of {', '.join(allowed)}")
        return value

    @model_validator(mode="after")
    def _not_empty(self) -> "RecordMetadata":
        if not self.model_fields_set and not self.model_extra:
            raise ValueError("metadata must contain at least one field")
        return self

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class RecordPayload(BaseModel):
    """Body of a create/update request."""

    model_config = ConfigDict(extra="ignore")

    id: RecordIdStr | None = None
    metadata: RecordMetadata


__all__ = ["COPYRIGHT", "LANGUAGES", "SOURCES", "RecordMetadata", "RecordPayload"]
