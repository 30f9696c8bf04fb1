"""Record service – create, read, update and delete metadata records."""
from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from metadata_editor.application.records.models import (
    COPYRIGHT,
    LANGUAGES,
    RecordPayload,
)
from metadata_editor.application.records.store import RecordStore
from metadata_editor.application.search.rules import UUID_PATTERN
from metadata_editor.config.options import OptionCatalogue
from metadata_editor.kernel.errors import ConflictError, NotFoundError, ValidationError
from metadata_editor.kernel.time import Clock, SystemClock
from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)

_UUID_RE = re.compile(UUID_PATTERN)


def _require_record_id(record_id: str) -> None:
    if not _UUID_RE.fullmatch(record_id):
        raise ValidationError("Invalid ID format", detail={"id": record_id})


def _loc(error: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in error["loc"]) or "body"


class RecordService:
    """Use cases over :class:`RecordStore`.

    Every write validates the payload with
    :class:`~metadata_editor.application.records.models.RecordPayload`;
    timestamps come from the injected clock.
    """

    def __init__(
        self,
        store: RecordStore,
        options: OptionCatalogue | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._options = options or OptionCatalogue()
        self._clock = clock or SystemClock()

    async def list_records(self) -> list[dict[str, Any]]:
        return await self._store.list_all()

    async def get_record(self, record_id: str) -> dict[str, Any]:
        _require_record_id(record_id)
        record = await self._store.get(record_id)
        if record is None:
            raise NotFoundError("Record", record_id)
        return record

    async def create_record(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        parsed = self._validate(payload)
        now = self._clock.now()
        record = {
            "id": parsed.id or str(uuid.uuid4()),
            "metadata": parsed.metadata.to_document(),
            "createdAt": now,
            "updatedAt": now,
        }
        if await self._store.get(record["id"]) is not None:
            raise ConflictError("Record with this ID already exists", detail={"id": record["id"]})
        await self._store.insert(record)
        logger.info("records.created", record_id=record["id"])
        return record

    async def update_record(
        self, record_id: str, payload: Mapping[str, Any]
    ) -> tuple[dict[str, Any], bool]:
        """Replace the record's metadata.

        Returns the stored record and whether anything changed; identical
        metadata leaves the record (and its ``updatedAt``) untouched.
        """
        _require_record_id(record_id)
        parsed = self._validate({**payload, "id": record_id})
        existing = await self._store.get(record_id)
        if existing is None:
            raise NotFoundError("Record", record_id)

        metadata = parsed.metadata.to_document()
        if metadata == existing.get("metadata"):
            return existing, False

        if not await self._store.update_metadata(record_id, metadata, self._clock.now()):
            raise NotFoundError("Record", record_id)
        logger.info("records.updated", record_id=record_id)
        return await self.get_record(record_id), True

    async def delete_record(self, record_id: str) -> None:
        _require_record_id(record_id)
        if not await self._store.delete(record_id):
            raise NotFoundError("Record", record_id)
        logger.info("records.deleted", record_id=record_id)

    def field_definitions(self) -> dict[str, list[dict[str, Any]]]:
        """Predefined form fields, with the current option lists."""
        current_year = datetime.now(UTC).year
        return {
            "predefinedFields": [
                {"name": "title", "type": "text", "label": "Title", "maxLength": 500},
                {"name": "subtitle", "type": "text", "label": "Subtitle", "maxLength": 500},
                {"name": "genre", "type": "select", "label": "Genre", "options": list(self._options.get("genre"))},
                {"name": "language", "type": "select", "label": "Language", "options": list(LANGUAGES)},
                {"name": "copyright", "type": "select", "label": "Copyright", "options": list(COPYRIGHT)},
                {
                    "name": "authors",
                    "type": "array",
                    "label": "Authors",
                    "itemType": "text",
                    "minItems": 1,
                    "maxLength": 500,
                },
                {"name": "editor", "type": "text", "label": "Editor", "maxLength": 500},
                {"name": "translator", "type": "text", "label": "Translator", "maxLength": 500},
                {"name": "dialect", "type": "select", "label": "Dialect", "options": list(self._options.get("dialect"))},
                {"name": "location", "type": "text", "label": "Location", "maxLength": 500},
                {"name": "country", "type": "text", "label": "Country", "maxLength": 500},
                {"name": "source", "type": "select", "label": "Source", "options": list(self._options.get("source"))},
                {"name": "num_pages", "type": "number", "label": "Number of Pages", "min": 1},
                {"name": "pub_date", "type": "year", "label": "Publication Date", "min": 1000, "max": current_year},
                {"name": "edition", "type": "text", "label": "Edition", "maxLength": 500},
            ]
        }

    def _validate(self, payload: Mapping[str, Any]) -> RecordPayload:
        try:
            return RecordPayload.model_validate(dict(payload), context={"options": self._options})
        except PydanticValidationError as exc:
            errors = [{"field": _loc(e), "message": e["msg"]} for e in exc.errors()]
            first = errors[0]
            raise ValidationError(f"{first['field']}: {first['message']}", errors=errors) from None


__all__ = ["RecordService"]
