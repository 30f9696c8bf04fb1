"""Record store – port for record persistence."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """Port: CRUD access to stored records keyed by their ``id`` attribute.

    :meth:`insert` raises
    :class:`~metadata_editor.kernel.errors.ConflictError` when a record with
    the same id exists.
    """

    async def get(self, record_id: str) -> dict[str, Any] | None: ...

    async def list_all(self) -> list[dict[str, Any]]: ...

    async def insert(self, record: dict[str, Any]) -> None: ...

    async def update_metadata(
        self, record_id: str, metadata: dict[str, Any], updated_at: datetime
    ) -> bool: ...

    async def delete(self, record_id: str) -> bool: ...


__all__ = ["RecordStore"]
