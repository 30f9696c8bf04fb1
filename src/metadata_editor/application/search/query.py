"""Search query – pagination and sort options."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = ["MAX_LIMIT", "SearchOptions", "SortField"]

MAX_LIMIT = 1000


@dataclass(frozen=True)
class SortField:
    field: str
    direction: Literal["asc", "desc"] = "asc"

    def __post_init__(self) -> None:
        if any(not part or part.startswith("$") for part in self.field.split(".")):
            raise ValueError(f"invalid sort field {self.field!r}")
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"sort direction must be 'asc' or 'desc', got {self.direction!r}")

    @classmethod
    def parse(cls, text: str) -> tuple["SortField", ...]:
        """Parse ``"path:asc,other:desc"``; a missing direction means ascending."""
        fields: list[SortField] = []
        for item in text.split(","):
            item = item.strip()
            if not item:
                continue
            path, _, direction = item.partition(":")
            fields.append(cls(path.strip(), (direction.strip().lower() or "asc")))  # type: ignore[arg-type]
        return tuple(fields)


@dataclass(frozen=True)
class SearchOptions:
    limit: int = 100
    skip: int = 0
    sort: tuple[SortField, ...] = ()

    def __post_init__(self) -> None:
        if self.limit < 1 or self.limit > MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}")
        if self.skip < 0:
            raise ValueError("skip must be >= 0")
