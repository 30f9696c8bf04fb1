"""Search fields – match kinds and the per-field configuration record."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import NamedTuple

from metadata_editor.application.search.rules import ValueRule


class MatchKind(str, Enum):
    EXACT = "exact"
    TEXT = "text"
    ARRAY_TEXT = "array"
    NUMBER = "number"
    RANGE = "range"


@dataclasses.dataclass(frozen=True)
class SearchFieldConfig:
    """Configuration of one searchable field.

    ``path`` is the dotted attribute path inside a stored record
    (``metadata.title``).  ``match_kind`` accepts a :class:`MatchKind` or
    its string value; any other value is kept verbatim and rejected by the
    dispatcher when the field is registered.
    """

    name: str
    path: str
    match_kind: MatchKind
    label: str
    description: str
    value_rule: ValueRule

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("search field name must not be empty")
        if not self.path:
            raise ValueError(f"search field '{self.name}' has an empty path")
        if not isinstance(self.match_kind, MatchKind):
            try:
                object.__setattr__(self, "match_kind", MatchKind(self.match_kind))
            except ValueError:
                pass


class FieldSummary(NamedTuple):
    """Public description of a searchable field (for docs and the UI)."""
    name: str
    label: str
    description: str
    match_kind: MatchKind


__all__ = ["FieldSummary", "MatchKind", "SearchFieldConfig"]
