"""Search engine – validate, build, execute and shape a field-driven search."""
from __future__ import annotations

import asyncio
from typing import Any, Mapping

from metadata_editor.application.search.errors import (
    InvalidValueError,
    StorageFaultError,
    UnknownFieldError,
    UnsupportedMatchKindError,
)
from metadata_editor.application.search.fields import SearchFieldConfig
from metadata_editor.application.search.query import SearchOptions
from metadata_editor.application.search.registry import FieldRegistry, default_registry
from metadata_editor.application.search.result import SearchResult
from metadata_editor.application.search.storage import SearchableCollection
from metadata_editor.application.search.strategies import FilterFragment, combine_fragments
from metadata_editor.kernel.errors import ValidationError
from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)

Fields = Mapping[str, SearchFieldConfig]


class MetadataSearchEngine:
    """Turns ``{field: value}`` requests into a compound filter and runs it.

    Input errors (:class:`UnknownFieldError`, :class:`InvalidValueError`)
    are collected across all parameters and returned in a single rejected
    result.  Storage faults and configuration faults never escape
    :meth:`search`; they are logged and reported as a generic internal
    error.  Cancelling the task running :meth:`search` re-raises
    :class:`asyncio.CancelledError` instead of returning a result; use
    *storage_timeout* for a deadline that ends in a failure result.

    Parameters
    ----------
    collection:
        Storage collaborator implementing
        :class:`~metadata_editor.application.search.storage.SearchableCollection`.
    registry:
        Field catalogue; defaults to a fresh :func:`default_registry`.
    storage_timeout:
        Optional deadline in seconds for the storage round trip.
    """

    def __init__(
        self,
        collection: SearchableCollection,
        registry: FieldRegistry | None = None,
        *,
        storage_timeout: float | None = None,
    ) -> None:
        self._collection = collection
        self._registry = registry if registry is not None else default_registry()
        self._storage_timeout = storage_timeout or None

    @property
    def registry(self) -> FieldRegistry:
        return self._registry

    def searchable_fields(self) -> dict[str, dict[str, str]]:
        return {
            summary.name: {
                "label": summary.label,
                "description": summary.description,
                "type": summary.match_kind.value,
            }
            for summary in self._registry.list_all()
        }

    def validate_params(
        self, params: Mapping[str, str], fields: Fields | None = None
    ) -> tuple[dict[str, str], list[ValidationError]]:
        fields = self._registry.snapshot() if fields is None else fields
        validated: dict[str, str] = {}
        errors: list[ValidationError] = []
        for field_name, value in params.items():
            config = fields.get(field_name)
            if config is None:
                errors.append(UnknownFieldError(field_name))
                continue
            try:
                self._registry.dispatcher.for_field(config).validate_value(config, value)
            except InvalidValueError as exc:
                errors.append(exc)
                continue
            validated[field_name] = value
        return validated, errors

    def build_filter(
        self, params: Mapping[str, str], fields: Fields | None = None
    ) -> tuple[FilterFragment, list[ValidationError]]:
        """Build the compound filter for already-validated *params*."""
        fields = self._registry.snapshot() if fields is None else fields
        fragments: list[FilterFragment] = []
        errors: list[ValidationError] = []
        for field_name, value in params.items():
            config = fields[field_name]
            try:
                fragments.append(self._registry.dispatcher.for_field(config).build_query(config, value))
            except InvalidValueError as exc:
                errors.append(exc)
        return combine_fragments(fragments), errors

    async def search(
        self,
        params: Mapping[str, str],
        options: SearchOptions | None = None,
    ) -> SearchResult:
        options = options or SearchOptions()
        fields = self._registry.snapshot()
        query: FilterFragment = {}

        try:
            validated, errors = self.validate_params(params, fields)
            if not errors:
                query, errors = self.build_filter(validated, fields)
        except UnsupportedMatchKindError:
            logger.exception("search.unsupported_match_kind", params=sorted(params))
            return SearchResult.internal_failure()

        if errors:
            logger.info("search.rejected", errors=[e.code for e in errors])
            return SearchResult.rejected([e.to_dict() for e in errors])

        try:
            records, total = await self._execute(query, options)
        except StorageFaultError as fault:
            logger.error("search.storage_fault", filter=query, exc_info=fault.cause)
            return SearchResult.internal_failure()

        returned = len(records)
        logger.debug("search.completed", fields=sorted(validated), total=total, returned=returned)
        return SearchResult(
            success=True,
            validated_params=validated,
            filter=query,
            records=records,
            total_count=total,
            returned_count=returned,
            has_more=options.skip + returned < total,
        )

    async def _execute(
        self, query: FilterFragment, options: SearchOptions
    ) -> tuple[list[dict[str, Any]], int]:
        try:
            if self._storage_timeout is None:
                return await self._query(query, options)
            return await asyncio.wait_for(self._query(query, options), self._storage_timeout)
        except Exception as exc:  # noqa: BLE001
            raise StorageFaultError(cause=exc) from exc

    async def _query(
        self, query: FilterFragment, options: SearchOptions
    ) -> tuple[list[dict[str, Any]], int]:
        records = await self._collection.find(
            query, sort=options.sort, skip=options.skip, limit=options.limit
        )
        total = await self._collection.count(query)
        return records, total


__all__ = ["MetadataSearchEngine"]
