"""
Unit Tests for Rule-Based Insight Provider

Tests each insight rule, confidence filtering and ordering.
"""

from datetime import timedelta, timezone

import pytest

from bloom.domain.enums.clinical import InsightSignificance
from bloom.services.insights import InsightProvider, RuleBasedInsightProvider


@pytest.fixture
def provider() -> RuleBasedInsightProvider:
    return RuleBasedInsightProvider()


def insight_types(insights) -> list[str]:
    return [i.insight_type for i in insights]


class TestTimeWindows:
    """Tests for time-of-day lookup."""

    @pytest.mark.parametrize(
        "hour,window",
        [(5, "morning"), (11, "morning"), (12, "afternoon"), (17, "evening"),
         (21, "night"), (0, "night"), (4, "night")],
    )
    def test_window_for(self, hour, window):
        assert RuleBasedInsightProvider.window_for(hour) == window

    @pytest.mark.parametrize("hour", [-1, 24, 99])
    def test_out_of_range_hour(self, hour):
        """Hours outside 0-23 are rejected rather than read as night."""
        with pytest.raises(ValueError):
            RuleBasedInsightProvider.window_for(hour)


class TestRules:
    """Tests for individual insight rules."""

    def test_short_history_yields_nothing(self, provider, make_entry):
        assert provider.analyze([make_entry(), make_entry()]) == []

    def test_difficult_feelings_in_morning(self, provider, make_entry):
        """Entries 1.25 days before noon fall at 6 AM."""
        entries = [
            make_entry(mood="worried", intensity=5, days_ago=d + 0.25)
            for d in (1, 2, 3)
        ]

        insights = provider.analyze(entries)

        time_of_day = [i for i in insights if i.insight_type == "time_of_day"]
        assert len(time_of_day) == 1
        assert "morning" in time_of_day[0].description
        assert time_of_day[0].confidence == 1.0

    def test_time_of_day_uses_utc_hour(self, provider, make_entry):
        """Entries at 08:00-05:00 fall at 13:00 UTC, in the afternoon."""
        eastern = timezone(timedelta(hours=-5))
        entries = [
            make_entry(mood="sad", intensity=5, days_ago=d)
            for d in (1, 2, 3)
        ]
        for entry in entries:
            entry.timestamp = entry.timestamp.replace(hour=13).astimezone(eastern)

        insights = [i for i in provider.analyze(entries) if i.insight_type == "time_of_day"]

        assert entries[0].timestamp.hour == 8
        assert "afternoon" in insights[0].description

    def test_recurring_trigger_case_insensitive(self, provider, make_entry):
        entries = [
            make_entry(days_ago=1, triggers=["Homework"]),
            make_entry(days_ago=2, triggers=["homework ", "bus"]),
            make_entry(days_ago=3),
        ]

        insights = [i for i in provider.analyze(entries) if i.insight_type == "recurring_trigger"]

        assert len(insights) == 1
        assert "'homework'" in insights[0].description
        assert insights[0].confidence == 1.0

    def test_single_mentions_not_recurring(self, provider, make_entry):
        entries = [
            make_entry(days_ago=1, triggers=["exams"]),
            make_entry(days_ago=2, triggers=["bus"]),
            make_entry(days_ago=3),
        ]

        assert "recurring_trigger" not in insight_types(provider.analyze(entries))

    def test_most_used_coping_strategy(self, provider, make_entry):
        entries = [
            make_entry(days_ago=1, coping_strategies=["Listen to music"]),
            make_entry(days_ago=2, coping_strategies=["Listen to music"]),
            make_entry(days_ago=3, coping_strategies=["Go outside"]),
        ]

        coping = [i for i in provider.analyze(entries) if i.insight_type == "coping_strategy"]

        assert "'Listen to music'" in coping[0].description
        assert coping[0].confidence == pytest.approx(2 / 3)
        assert coping[0].significance == InsightSignificance.LOW

    def test_declining_trend_is_high(self, make_entry):
        provider = RuleBasedInsightProvider(min_confidence=0.0)
        entries = [
            make_entry(intensity=8, days_ago=4),
            make_entry(intensity=8, days_ago=3),
            make_entry(intensity=3, days_ago=2),
            make_entry(intensity=2, days_ago=1),
        ]

        trend = [i for i in provider.analyze(entries) if i.insight_type == "trend"]

        assert trend[0].significance == InsightSignificance.HIGH
        assert trend[0].confidence == pytest.approx(0.4)

    def test_stable_trend_yields_nothing(self, make_entry):
        provider = RuleBasedInsightProvider(min_confidence=0.0)
        entries = [make_entry(intensity=6, days_ago=d) for d in (1, 2, 3, 4)]

        assert "trend" not in insight_types(provider.analyze(entries))


class TestFilteringAndOrder:
    """Tests for confidence filtering and significance ordering."""

    def test_low_confidence_dropped(self, provider, make_entry):
        """A four-entry trend has confidence 0.4, below the default 0.6."""
        entries = [
            make_entry(intensity=8, days_ago=4),
            make_entry(intensity=8, days_ago=3),
            make_entry(intensity=3, days_ago=2),
            make_entry(intensity=2, days_ago=1),
        ]

        assert "trend" not in insight_types(provider.analyze(entries))

    def test_most_significant_first(self, make_entry):
        provider = RuleBasedInsightProvider(min_confidence=0.0)
        entries = [
            make_entry(intensity=9, days_ago=6, coping_strategies=["Go outside"]),
            make_entry(intensity=9, days_ago=5),
            make_entry(intensity=9, days_ago=4),
            make_entry(intensity=2, days_ago=3),
            make_entry(intensity=2, days_ago=2),
            make_entry(intensity=2, days_ago=1),
        ]

        insights = provider.analyze(entries)
        order = [provider.SIGNIFICANCE_ORDER[i.significance] for i in insights]

        assert insights[0].insight_type == "trend"
        assert order == sorted(order)

    def test_is_an_insight_provider(self, provider):
        assert isinstance(provider, InsightProvider)
