"""Unit tests for MetadataSearchEngine."""
from __future__ import annotations

import asyncio
from typing import Any, Mapping

import bson
import pytest

from metadata_editor.application.search import (
    MatchKind,
    MetadataSearchEngine,
    SearchFieldConfig,
    SearchOptions,
    SortField,
    StrategyDispatcher,
    UnsupportedMatchKindError,
    default_registry,
    text_rule,
)
from metadata_editor.application.search.result import INTERNAL_ERROR
from metadata_editor.testing.fakes import InMemoryRecordCollection

RECORDS: list[dict[str, Any]] = [
    {
        "id": "11111111-1111-4111-8111-111111111111",
        "metadata": {
            "title": "The Gospel of Mark",
            "authors": ["Mark"],
            "genre": "new testament",
            "country": "Iraq",
            "num_pages": 120,
            "pub_date": 2019,
        },
    },
    {
        "id": "22222222-2222-4222-8222-222222222222",
        "metadata": {
            "title": "Poems of the Plain",
            "authors": ["A. Shlimon", "B. Odisho"],
            "genre": "Literary",
            "country": "Iraq",
            "num_pages": 88,
            "pub_date": 2021,
        },
    },
    {
        "id": "33333333-3333-4333-8333-333333333333",
        "metadata": {
            "title": "Literary Review (vol. 2)",
            "authors": ["C. Benyamin"],
            "genre": "Literary",
            "country": "Iran",
            "num_pages": 64,
            "pub_date": 2023,
        },
    },
]


def _engine(records=RECORDS, **kwargs: Any) -> tuple[MetadataSearchEngine, InMemoryRecordCollection]:
    collection = InMemoryRecordCollection(records)
    return MetadataSearchEngine(collection, **kwargs), collection


def _search(engine: MetadataSearchEngine, params: Mapping[str, str], options: SearchOptions | None = None):
    return asyncio.run(engine.search(params, options))


VALID_VALUES: dict[str, str] = {
    "id": "11111111-1111-4111-8111-111111111111",
    "title": "Gospel",
    "subtitle": "vol",
    "authors": "Mark",
    "genre": "Literary",
    "country": "Iraq",
    "editor": "Smith",
    "dialect": "urmi",
    "pages": "120",
    "year": "2019-2021",
}


class TestSearchFilterConstruction:
    @pytest.mark.parametrize("field_name", sorted(VALID_VALUES))
    def test_single_field_yields_one_fragment(self, field_name: str) -> None:
        engine, _ = _engine()
        result = _search(engine, {field_name: VALID_VALUES[field_name]})
        config = engine.registry.lookup(field_name)
        assert result.success is True
        assert config is not None
        assert list(result.filter) == [config.path]

    def test_every_default_field_covered(self) -> None:
        engine, _ = _engine()
        assert set(VALID_VALUES) == set(engine.registry)

    def test_single_text_field(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"title": "Gospel"})
        assert result.success is True
        assert result.validated_params == {"title": "Gospel"}
        assert result.filter == {"metadata.title": {"$regex": "Gospel", "$options": "i"}}
        assert [r["id"] for r in result.records] == [RECORDS[0]["id"]]

    def test_multiple_fields_are_and_combined(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"genre": "Literary", "country": "Iraq"})
        assert result.filter == {
            "$and": [
                {"metadata.genre": "Literary"},
                {"metadata.country": {"$regex": "Iraq", "$options": "i"}},
            ]
        }
        assert result.total_count == 1
        assert result.records[0]["id"] == RECORDS[1]["id"]

    def test_empty_request_matches_everything(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {})
        assert result.filter == {}
        assert result.total_count == 3

    def test_year_range(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"year": "2020-2023"})
        assert result.filter == {"metadata.pub_date": {"$gte": 2020, "$lte": 2023}}
        assert {r["id"] for r in result.records} == {RECORDS[1]["id"], RECORDS[2]["id"]}

    def test_single_year(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"year": "2020"})
        assert result.filter == {"metadata.pub_date": 2020}
        assert result.total_count == 0
        assert result.records == []

    def test_authors_array_match(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"authors": "odisho"})
        assert [r["id"] for r in result.records] == [RECORDS[1]["id"]]

    def test_metacharacters_match_literally(self) -> None:
        engine, _ = _engine()
        assert _search(engine, {"title": "(vol. 2)"}).total_count == 1
        assert _search(engine, {"title": ".*"}).total_count == 0

    def test_filter_passed_to_storage(self) -> None:
        engine, collection = _engine()
        result = _search(engine, {"pages": "88"})
        assert collection.find_calls == [result.filter]
        assert result.filter == {"metadata.num_pages": 88}

    def test_idempotent(self) -> None:
        engine, _ = _engine()
        first = _search(engine, {"title": "poems", "year": "2021"})
        second = _search(engine, {"title": "poems", "year": "2021"})
        assert first.to_dict() == second.to_dict()


class TestSearchRejections:
    def test_unknown_field(self) -> None:
        engine, collection = _engine()
        result = _search(engine, {"colour": "red"})
        assert result.success is False
        assert result.errors == [
            {"code": "unknown_field", "field": "colour", "message": "Unknown search field: colour"}
        ]
        assert collection.find_calls == []

    def test_all_errors_collected(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"colour": "red", "pages": "many", "title": "ok"})
        assert [(e["code"], e["field"]) for e in result.errors] == [
            ("unknown_field", "colour"),
            ("invalid_value", "pages"),
        ]

    def test_reversed_year_range(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"year": "2023-2020"})
        assert result.success is False
        assert result.errors[0]["code"] == "invalid_value"
        assert result.errors[0]["field"] == "year"

    def test_blank_text(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"title": "   "})
        assert result.success is False
        assert result.errors[0]["code"] == "invalid_value"

    def test_invalid_record_id(self) -> None:
        engine, _ = _engine()
        result = _search(engine, {"id": "123"})
        assert result.errors[0]["field"] == "id"

    def test_rejected_envelope_has_only_errors(self) -> None:
        engine, _ = _engine()
        body = _search(engine, {"colour": "red"}).to_dict()
        assert set(body) == {"success", "errors"}


class TestSearchPagination:
    @pytest.fixture()
    def engine(self) -> MetadataSearchEngine:
        records = [
            {"id": f"rec-{i}", "metadata": {"title": f"Volume {i}", "pub_date": 2000 + i}}
            for i in range(10)
        ]
        return _engine(records)[0]

    def test_last_page(self, engine: MetadataSearchEngine) -> None:
        result = _search(engine, {}, SearchOptions(limit=5, skip=8))
        assert result.total_count == 10
        assert result.returned_count == 2
        assert result.has_more is False

    def test_first_page_has_more(self, engine: MetadataSearchEngine) -> None:
        result = _search(engine, {}, SearchOptions(limit=5))
        assert result.returned_count == 5
        assert result.has_more is True

    def test_sort_descending(self, engine: MetadataSearchEngine) -> None:
        result = _search(
            engine, {}, SearchOptions(limit=3, sort=(SortField("metadata.pub_date", "desc"),))
        )
        assert [r["metadata"]["pub_date"] for r in result.records] == [2009, 2008, 2007]

    def test_envelope_keys(self, engine: MetadataSearchEngine) -> None:
        body = _search(engine, {"title": "Volume"}).to_dict()
        assert body["success"] is True
        assert body["totalCount"] == 10
        assert body["returnedCount"] == 10
        assert body["hasMore"] is False
        assert body["validatedParams"] == {"title": "Volume"}

    @pytest.mark.parametrize("kwargs", [{"limit": 0}, {"limit": 1001}, {"skip": -1}])
    def test_invalid_options(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            SearchOptions(**kwargs)

    def test_sort_parse(self) -> None:
        assert SortField.parse("metadata.title:asc, metadata.pub_date:DESC") == (
            SortField("metadata.title", "asc"),
            SortField("metadata.pub_date", "desc"),
        )

    def test_sort_parse_rejects_bad_direction(self) -> None:
        with pytest.raises(ValueError):
            SortField.parse("metadata.title:up")


class _BsonEncodingCollection(InMemoryRecordCollection):
    """Encodes every filter to BSON first, as the MongoDB driver would."""

    async def find(self, filter: Mapping[str, Any], **kwargs: Any) -> list[dict[str, Any]]:
        bson.encode(dict(filter))
        return await super().find(filter, **kwargs)

    async def count(self, filter: Mapping[str, Any]) -> int:
        bson.encode(dict(filter))
        return await super().count(filter)


class TestSearchStorageEncodableInput:
    """Values the storage layer cannot encode are field errors, not storage faults."""

    def _engine(self) -> MetadataSearchEngine:
        return MetadataSearchEngine(_BsonEncodingCollection(RECORDS))

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"pages": "99999999999999999999"}, "pages"),
            ({"pages": "9223372036854775808"}, "pages"),
            ({"title": "\x00"}, "title"),
            ({"title": "Gos\x00pel"}, "title"),
            ({"authors": "Mark\x00"}, "authors"),
            ({"year": "２０２０"}, "year"),
        ],
    )
    def test_rejected_as_invalid_value(self, params: dict[str, str], field: str) -> None:
        result = _search(self._engine(), params)
        assert result.success is False
        assert not result.is_internal_failure
        assert result.errors[0]["code"] == "invalid_value"
        assert result.errors[0]["field"] == field

    def test_largest_int64_reaches_storage(self) -> None:
        result = _search(self._engine(), {"pages": "9223372036854775807"})
        assert result.success is True
        assert result.filter == {"metadata.num_pages": 9223372036854775807}
        assert result.total_count == 0

    def test_encodable_filter_succeeds(self) -> None:
        result = _search(self._engine(), {"title": "gospel", "pages": "120"})
        assert result.success is True
        assert result.total_count == 1


class _SlowCollection(InMemoryRecordCollection):
    async def find(self, *args: Any, **kwargs: Any) -> list[dict[str, Any]]:
        await asyncio.sleep(1)
        return await super().find(*args, **kwargs)


class _BreakableDispatcher(StrategyDispatcher):
    broken = False

    def resolve(self, match_kind: Any) -> Any:
        if self.broken:
            raise UnsupportedMatchKindError(match_kind)
        return super().resolve(match_kind)


class TestSearchInternalFailures:
    def test_storage_fault_is_generic(self) -> None:
        engine, collection = _engine()
        collection.fail_with = RuntimeError("connection refused by 10.0.0.5")
        result = _search(engine, {"title": "Gospel"})
        assert result.success is False
        assert result.errors == [INTERNAL_ERROR]
        assert result.is_internal_failure
        assert "10.0.0.5" not in str(result.to_dict())

    def test_storage_timeout(self) -> None:
        engine = MetadataSearchEngine(_SlowCollection(RECORDS), storage_timeout=0.01)
        result = _search(engine, {})
        assert result.is_internal_failure

    def test_cancellation_propagates(self) -> None:
        engine = MetadataSearchEngine(_SlowCollection(RECORDS))

        async def run() -> None:
            task = asyncio.create_task(engine.search({}))
            await asyncio.sleep(0.01)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(run())

    def test_unsupported_kind_at_search_time(self) -> None:
        dispatcher = _BreakableDispatcher()
        engine, collection = _engine(registry=default_registry(dispatcher))
        dispatcher.broken = True
        result = _search(engine, {"title": "Gospel"})
        assert result.is_internal_failure
        assert collection.find_calls == []

    def test_validate_params_raises_for_unsupported_kind(self) -> None:
        engine, _ = _engine()
        bad = SearchFieldConfig("x", "metadata.x", "fuzzy", "X", "", text_rule())  # type: ignore[arg-type]
        with pytest.raises(UnsupportedMatchKindError):
            engine.validate_params({"x": "1"}, {"x": bad})


class TestSearchableFields:
    def test_describes_every_field(self) -> None:
        engine, _ = _engine()
        fields = engine.searchable_fields()
        assert len(fields) == 10
        assert fields["year"]["type"] == "range"
        assert fields["authors"]["type"] == "array"
        assert fields["title"] == {
            "label": "Title",
            "description": "Search in record title",
            "type": "text",
        }

    def test_reflects_runtime_registration(self) -> None:
        engine, _ = _engine()
        engine.registry.register(
            SearchFieldConfig(
                "translator", "metadata.translator", MatchKind.TEXT, "Translator", "", text_rule()
            )
        )
        assert "translator" in engine.searchable_fields()


class TestSortFieldPaths:
    @pytest.mark.parametrize("path", ["", "$where", "metadata.$title", "metadata..title"])
    def test_rejected(self, path: str) -> None:
        with pytest.raises(ValueError):
            SortField(path)

    def test_parse_rejects_empty_path(self) -> None:
        with pytest.raises(ValueError):
            SortField.parse(":desc")
