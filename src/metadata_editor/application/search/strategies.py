"""Search strategies – one filter-fragment builder per match kind.

Every strategy validates the raw value against the field's
:class:`~metadata_editor.application.search.rules.ValueRule` first and only
then parses or escapes it in :meth:`MatchStrategy.build_query`.  Fragments
are MongoDB query documents keyed by the field's attribute path.
"""
from __future__ import annotations

import abc
import re
from typing import Any, ClassVar, Sequence

from metadata_editor.application.search.errors import InvalidValueError
from metadata_editor.application.search.fields import MatchKind, SearchFieldConfig

FilterFragment = dict[str, Any]

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# BSON stores integers as signed 64-bit values
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_integer(config: SearchFieldConfig, raw: str) -> int:
    """Parse an ASCII base-10 integer that fits a signed 64-bit BSON int."""
    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidValueError(config.name, f"{text!r} is not a base-10 integer")
    number = int(text, 10)
    if not INT64_MIN <= number <= INT64_MAX:
        raise InvalidValueError(config.name, f"{text} is outside the 64-bit integer range")
    return number


def literal_pattern(config: SearchFieldConfig, raw: str) -> str:
    """Trim *raw* and escape it so the regex matches it as a literal substring."""
    text = raw.strip()
    if not text:
        raise InvalidValueError(config.name, "value must not be blank")
    if "\x00" in text:
        raise InvalidValueError(config.name, "value must not contain NUL characters")
    return re.escape(text)


def combine_fragments(fragments: Sequence[FilterFragment]) -> FilterFragment:
    """Match-all for no fragments, the fragment itself for one, ``$and`` otherwise."""
    if not fragments:
        return {}
    if len(fragments) == 1:
        return fragments[0]
    return {"$and": list(fragments)}


class MatchStrategy(abc.ABC):
    """Validate a raw value and turn it into a filter fragment for a field."""

    match_kind: ClassVar[MatchKind]

    def validate_value(self, config: SearchFieldConfig, value: str) -> None:
        if not isinstance(value, str):
            raise InvalidValueError(config.name, "value must be a string")
        reason = config.value_rule.check(value)
        if reason is not None:
            raise InvalidValueError(config.name, reason)

    @abc.abstractmethod
    def build_query(self, config: SearchFieldConfig, value: str) -> FilterFragment: ...


class ExactStrategy(MatchStrategy):
    match_kind = MatchKind.EXACT

    def build_query(self, config: SearchFieldConfig, value: str) -> FilterFragment:
        return {config.path: value}


class TextStrategy(MatchStrategy):
    """Case-insensitive literal substring."""

    match_kind = MatchKind.TEXT

    def build_query(self, config: SearchFieldConfig, value: str) -> FilterFragment:
        return {config.path: {"$regex": literal_pattern(config, value), "$options": "i"}}


class ArrayTextStrategy(MatchStrategy):
    """At least one array element contains the value (case-insensitive)."""

    match_kind = MatchKind.ARRAY_TEXT

    def build_query(self, config: SearchFieldConfig, value: str) -> FilterFragment:
        pattern = literal_pattern(config, value)
        return {config.path: {"$elemMatch": {"$regex": pattern, "$options": "i"}}}


class NumberStrategy(MatchStrategy):
    match_kind = MatchKind.NUMBER

    def build_query(self, config: SearchFieldConfig, value: str) -> FilterFragment:
        return {config.path: parse_integer(config, value)}


class RangeStrategy(MatchStrategy):
    """``LOW-HIGH`` (inclusive) or a single integer.

    A range whose start is greater than its end is rejected rather than
    swapped.
    """

    match_kind = MatchKind.RANGE

    def build_query(self, config: SearchFieldConfig, value: str) -> FilterFragment:
        if "-" not in value:
            return {config.path: parse_integer(config, value)}

        parts = value.split("-")
        if len(parts) != 2:
            raise InvalidValueError(config.name, "range must have the form LOW-HIGH")
        low = parse_integer(config, parts[0])
        high = parse_integer(config, parts[1])
        if low > high:
            raise InvalidValueError(
                config.name, f"range start {low} is greater than range end {high}"
            )
        return {config.path: {"$gte": low, "$lte": high}}


DEFAULT_STRATEGIES: tuple[MatchStrategy, ...] = (
    ExactStrategy(),
    TextStrategy(),
    ArrayTextStrategy(),
    NumberStrategy(),
    RangeStrategy(),
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "INT64_MAX",
    "INT64_MIN",
    "ArrayTextStrategy",
    "ExactStrategy",
    "FilterFragment",
    "MatchStrategy",
    "NumberStrategy",
    "RangeStrategy",
    "TextStrategy",
    "combine_fragments",
    "literal_pattern",
    "parse_integer",
]
