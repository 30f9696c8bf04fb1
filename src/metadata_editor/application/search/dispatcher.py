"""Search dispatcher – resolves a match kind to its strategy instance."""
from __future__ import annotations

from typing import Iterable

from metadata_editor.application.search.errors import UnsupportedMatchKindError
from metadata_editor.application.search.fields import MatchKind, SearchFieldConfig
from metadata_editor.application.search.strategies import DEFAULT_STRATEGIES, MatchStrategy


class StrategyDispatcher:
    """One shared strategy instance per match kind.

    Strategies are stateless; the field's own path and value rule are passed
    in on every call, so a single instance serves every field of its kind.
    """

    def __init__(self, strategies: Iterable[MatchStrategy] | None = None) -> None:
        self._strategies: dict[MatchKind, MatchStrategy] = {
            s.match_kind: s for s in (DEFAULT_STRATEGIES if strategies is None else strategies)
        }

    @property
    def supported_kinds(self) -> frozenset[MatchKind]:
        return frozenset(self._strategies)

    def resolve(self, match_kind: MatchKind | str) -> MatchStrategy:
        try:
            return self._strategies[MatchKind(match_kind)]
        except (KeyError, ValueError):
            raise UnsupportedMatchKindError(match_kind) from None

    def for_field(self, config: SearchFieldConfig) -> MatchStrategy:
        return self.resolve(config.match_kind)


__all__ = ["StrategyDispatcher"]
