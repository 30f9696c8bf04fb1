"""Search result – the envelope returned by every search call."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["INTERNAL_ERROR", "SearchResult"]

INTERNAL_ERROR: dict[str, str] = {"code": "internal_error", "message": "Internal search error"}


@dataclass
class SearchResult:
    success: bool
    errors: list[dict[str, Any]] = field(default_factory=list)
    validated_params: dict[str, str] = field(default_factory=dict)
    filter: dict[str, Any] = field(default_factory=dict)
    records: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0
    returned_count: int = 0
    has_more: bool = False

    @classmethod
    def rejected(cls, errors: list[dict[str, Any]]) -> "SearchResult":
        return cls(success=False, errors=errors)

    @classmethod
    def internal_failure(cls) -> "SearchResult":
        return cls(success=False, errors=[dict(INTERNAL_ERROR)])

    @property
    def is_internal_failure(self) -> bool:
        return any(e.get("code") == INTERNAL_ERROR["code"] for e in self.errors)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "errors": self.errors}
        return {
            "success": True,
            "validatedParams": self.validated_params,
            "filter": self.filter,
            "records": self.records,
            "totalCount": self.total_count,
            "returnedCount": self.returned_count,
            "hasMore": self.has_more,
        }
