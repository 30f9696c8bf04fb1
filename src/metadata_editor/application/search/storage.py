"""Search storage – port for the document collection queried by the engine."""
from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from metadata_editor.application.search.query import SortField


@runtime_checkable
class SearchableCollection(Protocol):
    """Port: a collection that evaluates MongoDB-style filter documents."""

    async def find(
        self,
        filter: Mapping[str, Any],
        *,
        sort: Sequence[SortField] = (),
        skip: int = 0,
        limit: int = 0,
    ) -> list[dict[str, Any]]: ...

    async def count(self, filter: Mapping[str, Any]) -> int: ...


__all__ = ["SearchableCollection"]
