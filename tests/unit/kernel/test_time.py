"""Unit tests for the clock implementations."""

from __future__ import annotations

from datetime import UTC, datetime

from metadata_editor.kernel.time import Clock, FrozenClock, SystemClock


class TestSystemClock:
    def test_now_is_utc_aware(self) -> None:
        assert SystemClock().now().tzinfo is UTC


class TestFrozenClock:
    def test_fixed(self) -> None:
        fixed = datetime(2024, 1, 1, tzinfo=UTC)
        clock: Clock = FrozenClock(fixed)
        assert clock.now() == fixed
        assert clock.now() == fixed

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2024, 1, 1, tzinfo=UTC))
        clock.advance(days=1, minutes=30)
        assert clock.now() == datetime(2024, 1, 2, 0, 30, tzinfo=UTC)
