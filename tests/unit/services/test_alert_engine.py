"""
Unit Tests for Alert Engine

Tests the low-intensity, concerning-mood and support rules over the
trailing window.
"""

import pytest

from bloom.domain.enums.clinical import AlertLevel
from bloom.services.clinical.alert_engine import (
    CONCERNING_MOOD_MESSAGE,
    LOW_MOOD_MESSAGE,
    AlertEngine,
)


@pytest.fixture
def engine() -> AlertEngine:
    return AlertEngine()


class TestLowIntensityRule:
    """Tests for the warning rule."""

    def test_three_low_entries_warn(self, engine, make_entry, now):
        entries = [make_entry(intensity=i, days_ago=d) for i, d in ((2, 1), (3, 2), (1, 3))]

        alerts = engine.compute_alerts(entries, now=now)

        assert [a.level for a in alerts] == [AlertLevel.WARNING]
        assert alerts[0].message == LOW_MOOD_MESSAGE
        assert alerts[0].timestamp == now

    def test_two_low_entries_do_not_warn(self, engine, make_entry, now):
        entries = [make_entry(intensity=2, days_ago=1), make_entry(intensity=3, days_ago=2)]

        assert engine.compute_alerts(entries, now=now) == []

    def test_old_entries_ignored(self, engine, make_entry, now):
        entries = [
            make_entry(intensity=2, days_ago=1),
            make_entry(intensity=2, days_ago=2),
            make_entry(intensity=2, days_ago=8),
        ]

        assert engine.compute_alerts(entries, now=now) == []

    def test_entry_exactly_at_window_start_excluded(self, engine, make_entry, now):
        entries = [
            make_entry(intensity=2, days_ago=1),
            make_entry(intensity=2, days_ago=2),
            make_entry(intensity=2, days_ago=7),
        ]

        assert engine.compute_alerts(entries, now=now) == []


class TestConcerningMoodRule:
    """Tests for the urgent rule."""

    def test_four_concerning_moods_urgent(self, engine, make_entry, now):
        entries = [
            make_entry(mood=mood, intensity=6, days_ago=day)
            for day, mood in enumerate(["sad", "angry", "worried", "sad"], start=1)
        ]

        alerts = engine.compute_alerts(entries, now=now)

        assert [a.level for a in alerts] == [AlertLevel.URGENT]
        assert alerts[0].message == CONCERNING_MOOD_MESSAGE

    def test_three_concerning_moods_quiet(self, engine, make_entry, now):
        entries = [make_entry(mood="sad", days_ago=d) for d in (1, 2, 3)]

        assert engine.compute_alerts(entries, now=now) == []


class TestSupportRule:
    """Tests for the info rule."""

    def test_support_request_counted(self, engine, make_entry, now):
        entries = [
            make_entry(support_needed=True, days_ago=1),
            make_entry(support_needed=True, days_ago=2),
            make_entry(support_needed=False, days_ago=3),
        ]

        alerts = engine.compute_alerts(entries, now=now)

        assert [a.level for a in alerts] == [AlertLevel.INFO]
        assert alerts[0].message == "Patient has requested support in 2 recent session(s)"


class TestCombinedRules:
    """Tests for several rules firing together."""

    def test_all_rules_in_order(self, engine, make_entry, now):
        entries = [
            make_entry(mood="sad", intensity=2, days_ago=1, support_needed=True),
            make_entry(mood="sad", intensity=2, days_ago=2),
            make_entry(mood="worried", intensity=3, days_ago=3),
            make_entry(mood="angry", intensity=5, days_ago=4),
        ]

        alerts = engine.compute_alerts(entries, now=now)

        assert [a.level for a in alerts] == [
            AlertLevel.WARNING,
            AlertLevel.URGENT,
            AlertLevel.INFO,
        ]
        assert [a.rule for a in alerts] == [
            "low_intensity",
            "concerning_moods",
            "support_requested",
        ]

    def test_empty_history(self, engine, now):
        assert engine.compute_alerts([], now=now) == []

    def test_custom_thresholds(self, make_entry, now):
        engine = AlertEngine(window_days=2, low_intensity_alert_count=1)
        entries = [make_entry(intensity=1, days_ago=1)]

        assert [a.level for a in engine.compute_alerts(entries, now=now)] == [AlertLevel.WARNING]
