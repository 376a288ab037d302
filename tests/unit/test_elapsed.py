"""Tests for format_duration and ElapsedTimeTracker."""

from __future__ import annotations

import pytest

from taskecho.core.elapsed import DURATION_WIDTH, ElapsedTimeTracker, format_duration


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("milliseconds", "expected"),
        [
            (0, "   0 ms"),
            (1000, "1000 ms"),
            (1500, " 1.5  s"),
            (1000 * 60, "  60  s"),
            (1234 * 20, "24.7  s"),
            (1000 * 60 * 60, "  60min"),
            (1234 * 60 * 20, "24.7min"),
            (1000 * 60 * 60 * 24, "  24 hr"),
        ],
    )
    def test_boundary_table(self, milliseconds: int, expected: str):
        assert format_duration(milliseconds) == expected

    def test_thresholds_are_exclusive(self):
        assert format_duration(1001) == "   1  s"
        assert format_duration(60_001) == "  60  s"
        assert format_duration(61_000) == "   1min"

    def test_hours_is_the_ceiling_unit(self):
        assert format_duration(1000 * 60 * 60 * 24 * 365).endswith(" hr")

    def test_overflow_truncates_from_the_left(self):
        # 10**12 ms is 277777.8 hours
        assert format_duration(10**12) == "77.8 hr"

    def test_always_seven_characters(self):
        for ms in (0, 7, 999, 1000, 1049, 59_999, 3_599_999, 10**9, 10**13):
            assert len(format_duration(ms)) == DURATION_WIDTH

    def test_rounds_half_up(self):
        assert format_duration(1050) == " 1.1  s"


class TestElapsedTimeTracker:
    def test_read_measures_since_construction(self, clock):
        tracker = ElapsedTimeTracker(clock)
        clock.advance(0.25)
        assert tracker.read() == " 250 ms"

    def test_every_read_resets(self, clock):
        tracker = ElapsedTimeTracker(clock)
        clock.advance(1.5)
        assert tracker.read() == " 1.5  s"
        assert tracker.read() == "   0 ms"

    def test_reset_moves_reference(self, clock):
        tracker = ElapsedTimeTracker(clock)
        clock.advance(2)
        tracker.reset()
        clock.advance(0.1)
        assert tracker.read_ms() == 100

    def test_negative_delta_reads_zero(self, clock):
        tracker = ElapsedTimeTracker(clock)
        clock.advance(-5)
        assert tracker.read_ms() == 0
        assert tracker.reference == clock.now

    def test_real_clock_reads_in_milliseconds(self):
        tracker = ElapsedTimeTracker()
        first = tracker.read()
        second = tracker.read()

        assert len(first) == DURATION_WIDTH
        assert len(second) == DURATION_WIDTH
        assert first.endswith("ms")
        assert second.endswith("ms")
