"""
Unit Tests for Trend Analyzer

Tests the half-split trend and its defaults.
"""

import pytest

from bloom.domain.enums.clinical import TrendDirection
from bloom.services.clinical.trend_analyzer import TrendAnalyzer, most_common_mood


@pytest.fixture
def analyzer() -> TrendAnalyzer:
    return TrendAnalyzer()


class TestComputeTrend:
    """Tests for trend direction."""

    def test_empty_history_default(self, analyzer):
        summary = analyzer.compute_trend([])

        assert summary.direction == TrendDirection.STABLE
        assert summary.average_intensity == 5.0
        assert summary.most_common_mood == "calm"
        assert summary.entry_count == 0

    def test_single_entry_is_stable(self, analyzer, make_entry):
        summary = analyzer.compute_trend([make_entry(intensity=9)])

        assert summary.direction == TrendDirection.STABLE
        assert summary.average_intensity == 9

    def test_improving(self, analyzer, make_entry):
        entries = [
            make_entry(intensity=3, days_ago=4),
            make_entry(intensity=4, days_ago=3),
            make_entry(intensity=7, days_ago=2),
            make_entry(intensity=8, days_ago=1),
        ]

        assert analyzer.compute_trend(entries).direction == TrendDirection.IMPROVING

    def test_declining(self, analyzer, make_entry):
        entries = [
            make_entry(intensity=8, days_ago=4),
            make_entry(intensity=7, days_ago=3),
            make_entry(intensity=4, days_ago=2),
            make_entry(intensity=3, days_ago=1),
        ]

        assert analyzer.compute_trend(entries).direction == TrendDirection.DECLINING

    def test_input_order_ignored(self, analyzer, make_entry):
        """Entries are ordered by timestamp before splitting."""
        entries = [
            make_entry(intensity=3, days_ago=1),
            make_entry(intensity=8, days_ago=4),
            make_entry(intensity=4, days_ago=2),
            make_entry(intensity=7, days_ago=3),
        ]

        assert analyzer.compute_trend(entries).direction == TrendDirection.DECLINING

    def test_difference_at_threshold_is_stable(self, analyzer, make_entry):
        entries = [
            make_entry(intensity=5, days_ago=2),
            make_entry(intensity=5, days_ago=2),
            make_entry(intensity=5, days_ago=1),
            make_entry(intensity=6, days_ago=1),
        ]

        assert analyzer.compute_trend(entries).direction == TrendDirection.STABLE

    def test_odd_count_puts_extra_in_later_half(self, analyzer, make_entry):
        """Three entries split 1 / 2."""
        entries = [
            make_entry(intensity=5, days_ago=3),
            make_entry(intensity=5, days_ago=2),
            make_entry(intensity=7, days_ago=1),
        ]

        assert analyzer.compute_trend(entries).direction == TrendDirection.IMPROVING

    def test_average_over_all_entries(self, analyzer, make_entry):
        entries = [make_entry(intensity=i, days_ago=i) for i in (2, 4, 9)]

        assert analyzer.compute_trend(entries).average_intensity == pytest.approx(5.0)


class TestMostCommonMood:
    """Tests for the most frequent mood."""

    def test_most_frequent_wins(self, make_entry):
        entries = [
            make_entry(mood="sad", days_ago=3),
            make_entry(mood="happy", days_ago=2),
            make_entry(mood="happy", days_ago=1),
        ]

        assert most_common_mood(entries) == "happy"

    def test_tie_goes_to_earliest(self, make_entry):
        entries = [
            make_entry(mood="happy", days_ago=1),
            make_entry(mood="sad", days_ago=3),
        ]

        assert most_common_mood(entries) == "sad"
