"""MongoDB adapter – MongoRecordCollection."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.errors import DuplicateKeyError

from metadata_editor.application.search.query import SortField
from metadata_editor.kernel.errors import ConflictError

_PROJECTION = {"_id": False}


class MongoRecordCollection:
    """Metadata records stored in a **motor** collection.

    Serves both the search engine (:meth:`find` / :meth:`count` with
    MongoDB filter documents) and the record service (CRUD keyed by the
    record's ``id`` attribute).  Mongo's internal ``_id`` is never
    returned.

    Call :meth:`create_indexes` once on startup.
    """

    COLLECTION_NAME = "metadata"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        """Create the unique ``id`` index and the title/authors text index.

        Idempotent; safe to call repeatedly.
        """
        await collection.create_index([("id", ASCENDING)], unique=True, name="idx_record_id")
        await collection.create_index(
            [("metadata.title", TEXT), ("metadata.authors", TEXT)],
            name="idx_record_text",
        )

    async def ensure_indexes(self) -> None:
        await self.create_indexes(self._col)

    async def ping(self) -> bool:
        await self._col.database.command("ping")
        return True

    # ------------------------------------------------------------------
    # SearchableCollection interface
    # ------------------------------------------------------------------

    async def find(
        self,
        filter: Mapping[str, Any],
        *,
        sort: Sequence[SortField] = (),
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        cursor = self._col.find(dict(filter), _PROJECTION)
        if sort:
            cursor = cursor.sort(
                [(s.field, ASCENDING if s.direction == "asc" else DESCENDING) for s in sort]
            )
        cursor = cursor.skip(skip).limit(limit)
        return [doc async for doc in cursor]

    async def count(self, filter: Mapping[str, Any]) -> int:
        return await self._col.count_documents(dict(filter))

    # ------------------------------------------------------------------
    # RecordStore interface
    # ------------------------------------------------------------------

    async def get(self, record_id: str) -> dict[str, Any] | None:
        return await self._col.find_one({"id": record_id}, _PROJECTION)

    async def list_all(self) -> list[dict[str, Any]]:
        return [doc async for doc in self._col.find({}, _PROJECTION)]

    async def insert(self, record: dict[str, Any]) -> None:
        try:
            # insert_one adds _id to the dict it is given
            await self._col.insert_one(dict(record))
        except DuplicateKeyError:
            raise ConflictError(
                "Record with this ID already exists", detail={"id": record["id"]}
            ) from None

    async def update_metadata(
        self, record_id: str, metadata: dict[str, Any], updated_at: datetime
    ) -> bool:
        result = await self._col.update_one(
            {"id": record_id},
            {"$set": {"metadata": metadata, "updatedAt": updated_at}},
        )
        return result.matched_count > 0

    async def delete(self, record_id: str) -> bool:
        result = await self._col.delete_one({"id": record_id})
        return result.deleted_count > 0


__all__ = ["MongoRecordCollection"]
