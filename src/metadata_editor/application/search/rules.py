"""Search value rules – pydantic-backed validation of raw search values."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, Field, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
INTEGER_RANGE_PATTERN = r"^\s*[0-9]+\s*(-\s*[0-9]+\s*)?$"


class ValueRule:
    """Validate a raw string against an annotated type.

    :meth:`check` returns ``None`` when the value is acceptable, otherwise
    the first pydantic error message.
    """

    def __init__(self, annotation: Any, description: str) -> None:
        self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)
        self.description = description

    def check(self, value: str) -> str | None:
        try:
            self._adapter.validate_python(value)
        except PydanticValidationError as exc:
            return exc.errors()[0]["msg"]
        return None

    def __repr__(self) -> str:
        return f"ValueRule({self.description!r})"


def uuid_rule() -> ValueRule:
    return ValueRule(Annotated[str, StringConstraints(pattern=UUID_PATTERN)], "UUID")


def text_rule(min_length: int = 1, max_length: int | None = 500) -> ValueRule:
    bounds = f"{min_length}..{max_length}" if max_length is not None else f">= {min_length}"
    return ValueRule(
        Annotated[str, StringConstraints(min_length=min_length, max_length=max_length)],
        f"string with length {bounds}",
    )


def integer_rule(ge: int | None = None, le: int | None = None) -> ValueRule:
    """Integer given as a decimal string, optionally bounded."""
    return ValueRule(Annotated[int, Field(ge=ge, le=le)], f"integer in [{ge}, {le}]")


def integer_range_rule(ge: int | None = None, le: int | None = None) -> ValueRule:
    """``N`` or ``LOW-HIGH`` where every bound lies within ``[ge, le]``."""

    def _within_bounds(value: str) -> str:
        for part in value.split("-"):
            number = int(part.strip())
            if ge is not None and number < ge:
                raise ValueError(f"{number} is less than {ge}")
            if le is not None and number > le:
                raise ValueError(f"{number} is greater than {le}")
        return value

    return ValueRule(
        Annotated[
            str,
            StringConstraints(pattern=INTEGER_RANGE_PATTERN),
            AfterValidator(_within_bounds),
        ],
        f"integer or integer range in [{ge}, {le}]",
    )


def year_range_rule(earliest: int = 1000) -> ValueRule:
    """Publication year or year range, bounded by the current year."""
    return integer_range_rule(ge=earliest, le=datetime.now(UTC).year)


__all__ = [
    "ValueRule",
    "integer_range_rule",
    "integer_rule",
    "text_rule",
    "uuid_rule",
    "year_range_rule",
]
