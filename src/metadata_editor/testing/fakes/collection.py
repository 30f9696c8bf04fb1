"""Testing fakes – InMemoryRecordCollection."""
from __future__ import annotations

import copy
import re
from datetime import datetime
from typing import Any, Mapping, Sequence

from metadata_editor.application.search.query import SortField
from metadata_editor.kernel.errors import ConflictError

_MISSING = object()


def _resolve(doc: Any, path: str) -> Any:
    value = doc
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _regex_matches(value: Any, cond: Mapping[str, Any]) -> bool:
    flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
    return isinstance(value, str) and re.search(cond["$regex"], value, flags) is not None


def _compare(value: Any, op: str, operand: Any) -> bool:
    if value is _MISSING or value is None:
        return False
    try:
        match op:
            case "$gt":  return value > operand
            case "$gte": return value >= operand
            case "$lt":  return value < operand
            case "$lte": return value <= operand
    except TypeError:
        return False
    raise ValueError(f"unsupported comparison operator {op!r}")


def _value_matches(value: Any, cond: Any) -> bool:
    """Evaluate one field condition; arrays match when any element matches."""
    if not (isinstance(cond, Mapping) and any(k.startswith("$") for k in cond)):
        if isinstance(value, list):
            return cond in value or value == cond
        return value is not _MISSING and value == cond

    if "$regex" in cond:
        candidates = value if isinstance(value, list) else [value]
        if not any(_regex_matches(v, cond) for v in candidates):
            return False

    for op, operand in cond.items():
        match op:
            case "$regex" | "$options":
                continue
            case "$eq":
                if not _value_matches(value, operand):
                    return False
            case "$ne":
                if _value_matches(value, operand):
                    return False
            case "$in":
                if not any(_value_matches(value, o) for o in operand):
                    return False
            case "$elemMatch":
                if not isinstance(value, list) or not any(_value_matches(v, operand) for v in value):
                    return False
            case "$gt" | "$gte" | "$lt" | "$lte":
                candidates = value if isinstance(value, list) else [value]
                if not any(_compare(v, op, operand) for v in candidates):
                    return False
            case _:
                raise ValueError(f"unsupported query operator {op!r}")
    return True


def matches(doc: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    """Evaluate a MongoDB filter document against *doc*."""
    for key, cond in filter.items():
        if key == "$and":
            if not all(matches(doc, sub) for sub in cond):
                return False
        elif key == "$or":
            if not any(matches(doc, sub) for sub in cond):
                return False
        elif key.startswith("$"):
            raise ValueError(f"unsupported top-level operator {key!r}")
        elif not _value_matches(_resolve(doc, key), cond):
            return False
    return True


def _sort_key(doc: Mapping[str, Any], path: str) -> tuple[bool, Any]:
    value = _resolve(doc, path)
    missing = value is _MISSING or value is None
    return (not missing, None if missing else value)


class InMemoryRecordCollection:
    """List-backed record collection that understands the filter documents
    produced by the search strategies (equality, ``$regex``,
    ``$elemMatch``, ``$gte``/``$lte``, ``$and``).

    Documents are deep-copied on the way in and out.  Set
    :attr:`fail_with` to make every read raise, for storage-fault tests.
    """

    def __init__(self, records: Sequence[Mapping[str, Any]] = ()) -> None:
        self._records: list[dict[str, Any]] = [copy.deepcopy(dict(r)) for r in records]
        self.fail_with: BaseException | None = None
        self.find_calls: list[dict[str, Any]] = []

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def find(
        self,
        filter: Mapping[str, Any],
        *,
        sort: Sequence[SortField] = (),
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        self._check_failure()
        self.find_calls.append(copy.deepcopy(dict(filter)))
        results = [r for r in self._records if matches(r, filter)]
        for sf in reversed(sort):
            results.sort(key=lambda r: _sort_key(r, sf.field), reverse=(sf.direction == "desc"))
        results = results[skip:]
        if limit:
            results = results[:limit]
        return copy.deepcopy(results)

    async def count(self, filter: Mapping[str, Any]) -> int:
        self._check_failure()
        return sum(1 for r in self._records if matches(r, filter))

    async def get(self, record_id: str) -> dict[str, Any] | None:
        self._check_failure()
        for r in self._records:
            if r.get("id") == record_id:
                return copy.deepcopy(r)
        return None

    async def list_all(self) -> list[dict[str, Any]]:
        self._check_failure()
        return copy.deepcopy(self._records)

    async def insert(self, record: dict[str, Any]) -> None:
        self._check_failure()
        if any(r.get("id") == record["id"] for r in self._records):
            raise ConflictError("Record with this ID already exists", detail={"id": record["id"]})
        self._records.append(copy.deepcopy(record))

    async def update_metadata(
        self, record_id: str, metadata: dict[str, Any], updated_at: datetime
    ) -> bool:
        self._check_failure()
        for r in self._records:
            if r.get("id") == record_id:
                r["metadata"] = copy.deepcopy(metadata)
                r["updatedAt"] = updated_at
                return True
        return False

    async def delete(self, record_id: str) -> bool:
        self._check_failure()
        before = len(self._records)
        self._records = [r for r in self._records if r.get("id") != record_id]
        return len(self._records) < before

    async def ping(self) -> bool:
        self._check_failure()
        return True


__all__ = ["InMemoryRecordCollection", "matches"]
