"""Application search – field registry, match strategies and search engine."""
from metadata_editor.application.search.dispatcher import StrategyDispatcher
from metadata_editor.application.search.engine import MetadataSearchEngine
from metadata_editor.application.search.errors import (
    FieldAlreadyRegisteredError,
    InvalidValueError,
    StorageFaultError,
    UnknownFieldError,
    UnsupportedMatchKindError,
)
from metadata_editor.application.search.fields import FieldSummary, MatchKind, SearchFieldConfig
from metadata_editor.application.search.query import MAX_LIMIT, SearchOptions, SortField
from metadata_editor.application.search.registry import FieldRegistry, default_fields, default_registry
from metadata_editor.application.search.result import SearchResult
from metadata_editor.application.search.rules import (
    ValueRule,
    integer_range_rule,
    integer_rule,
    text_rule,
    uuid_rule,
    year_range_rule,
)
from metadata_editor.application.search.storage import SearchableCollection
from metadata_editor.application.search.strategies import (
    ArrayTextStrategy,
    ExactStrategy,
    MatchStrategy,
    NumberStrategy,
    RangeStrategy,
    TextStrategy,
    combine_fragments,
)

__all__ = [
    "MAX_LIMIT",
    "ArrayTextStrategy",
    "ExactStrategy",
    "FieldAlreadyRegisteredError",
    "FieldRegistry",
    "FieldSummary",
    "InvalidValueError",
    "MatchKind",
    "MatchStrategy",
    "MetadataSearchEngine",
    "NumberStrategy",
    "RangeStrategy",
    "SearchFieldConfig",
    "SearchOptions",
    "SearchResult",
    "SearchableCollection",
    "SortField",
    "StorageFaultError",
    "StrategyDispatcher",
    "TextStrategy",
    "UnknownFieldError",
    "UnsupportedMatchKindError",
    "ValueRule",
    "combine_fragments",
    "default_fields",
    "default_registry",
    "integer_range_rule",
    "integer_rule",
    "text_rule",
    "uuid_rule",
    "year_range_rule",
]
