"""Search registry – catalogue of searchable fields.

The registry is built once at startup and read by every search.  Runtime
registration swaps in a new immutable mapping under a lock, so readers
always see either the old or the new catalogue, never a partial update.
"""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from metadata_editor.application.search.dispatcher import StrategyDispatcher
from metadata_editor.application.search.errors import FieldAlreadyRegisteredError
from metadata_editor.application.search.fields import FieldSummary, MatchKind, SearchFieldConfig
from metadata_editor.application.search.rules import (
    integer_rule,
    text_rule,
    uuid_rule,
    year_range_rule,
)
from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)


class FieldRegistry:
    """Mapping of field name to :class:`SearchFieldConfig`.

    :meth:`register` rejects names that are already present and resolves
    the field's match kind against the dispatcher before storing it, so a
    field with no strategy can never enter the registry.
    """

    def __init__(
        self,
        fields: Iterable[SearchFieldConfig] = (),
        dispatcher: StrategyDispatcher | None = None,
    ) -> None:
        self._dispatcher = dispatcher or StrategyDispatcher()
        self._lock = threading.Lock()
        self._fields: Mapping[str, SearchFieldConfig] = MappingProxyType({})
        for config in fields:
            self.register(config)

    @property
    def dispatcher(self) -> StrategyDispatcher:
        return self._dispatcher

    def lookup(self, field_name: str) -> SearchFieldConfig | None:
        return self._fields.get(field_name)

    def snapshot(self) -> Mapping[str, SearchFieldConfig]:
        """Current read-only view; unaffected by later registrations."""
        return self._fields

    def list_all(self) -> list[FieldSummary]:
        return [
            FieldSummary(c.name, c.label, c.description, c.match_kind)
            for c in self._fields.values()
        ]

    def register(self, config: SearchFieldConfig) -> None:
        self._dispatcher.for_field(config)
        with self._lock:
            if config.name in self._fields:
                raise FieldAlreadyRegisteredError(config.name)
            updated = dict(self._fields)
            updated[config.name] = config
            self._fields = MappingProxyType(updated)
        logger.debug(
            "search.field_registered",
            field=config.name,
            path=config.path,
            match_kind=config.match_kind.value,
        )

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)


def default_fields() -> list[SearchFieldConfig]:
    """The searchable fields of a metadata record."""
    return [
        SearchFieldConfig(
            name="id",
            path="id",
            match_kind=MatchKind.EXACT,
            label="Record ID",
            description="Search by exact record ID (UUID)",
            value_rule=uuid_rule(),
        ),
        SearchFieldConfig(
            name="title",
            path="metadata.title",
            match_kind=MatchKind.TEXT,
            label="Title",
            description="Search in record title",
            value_rule=text_rule(1, 500),
        ),
        SearchFieldConfig(
            name="subtitle",
            path="metadata.subtitle",
            match_kind=MatchKind.TEXT,
            label="Subtitle",
            description="Search in record subtitle",
            value_rule=text_rule(1, 500),
        ),
        SearchFieldConfig(
            name="authors",
            path="metadata.authors",
            match_kind=MatchKind.ARRAY_TEXT,
            label="Authors",
            description="Search in authors list",
            value_rule=text_rule(1, 500),
        ),
        SearchFieldConfig(
            name="genre",
            path="metadata.genre",
            match_kind=MatchKind.EXACT,
            label="Genre",
            description="Search by exact genre match",
            value_rule=text_rule(1, None),
        ),
        SearchFieldConfig(
            name="country",
            path="metadata.country",
            match_kind=MatchKind.TEXT,
            label="Country",
            description="Search in country field",
            value_rule=text_rule(1, 500),
        ),
        SearchFieldConfig(
            name="editor",
            path="metadata.editor",
            match_kind=MatchKind.TEXT,
            label="Editor",
            description="Search in editor field",
            value_rule=text_rule(1, 500),
        ),
        SearchFieldConfig(
            name="dialect",
            path="metadata.dialect",
            match_kind=MatchKind.EXACT,
            label="Dialect",
            description="Search by exact dialect match",
            value_rule=text_rule(1, None),
        ),
        SearchFieldConfig(
            name="pages",
            path="metadata.num_pages",
            match_kind=MatchKind.NUMBER,
            label="Number of Pages",
            description="Search by exact page count",
            value_rule=integer_rule(ge=1),
        ),
        SearchFieldConfig(
            name="year",
            path="metadata.pub_date",
            match_kind=MatchKind.RANGE,
            label="Publication Year",
            description="Search by publication year or year range (e.g. 2020-2023)",
            value_rule=year_range_rule(),
        ),
    ]


def default_registry(dispatcher: StrategyDispatcher | None = None) -> FieldRegistry:
    """Build a fresh registry holding :func:`default_fields`."""
    return FieldRegistry(default_fields(), dispatcher=dispatcher)


__all__ = ["FieldRegistry", "default_fields", "default_registry"]
