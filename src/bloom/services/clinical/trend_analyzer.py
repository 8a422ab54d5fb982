"""
Mood Trend Analyzer

Summarizes the direction of mood intensity across a history.

CLINICAL_VALIDATION_REQUIRED: The half-split comparison is a coarse
heuristic and is not a validated outcome measure.
"""

from collections import Counter
from statistics import fmean
from typing import Sequence

from bloom.domain.enums.clinical import TrendDirection
from bloom.domain.models.clinical_output import TrendSummary
from bloom.domain.models.mood_entry import MoodEntry
from bloom.domain.timeutils import as_utc


def chronological(entries: Sequence[MoodEntry]) -> list[MoodEntry]:
    """Entries sorted by timestamp, oldest first. Stable for equal timestamps."""
    return sorted(entries, key=lambda entry: as_utc(entry.timestamp))


def most_common_mood(entries: Sequence[MoodEntry]) -> str:
    """
    Most frequent primary mood.

    Ties go to the mood that appeared first chronologically.
    """
    counts = Counter(entry.mood for entry in chronological(entries))
    return max(counts, key=counts.__getitem__)


class TrendAnalyzer:
    """
    Computes mood trends.

    Entries are split at floor(n/2) into an earlier and a later half.
    The later half's mean intensity is compared to the earlier one's.
    A single entry leaves the earlier half empty and reads as stable.
    """

    # Mean difference needed before a trend is called
    THRESHOLD: float = 0.5

    DEFAULT_AVERAGE_INTENSITY: float = 5.0
    DEFAULT_MOOD: str = "calm"

    def __init__(self, threshold: float = THRESHOLD) -> None:
        self._threshold = threshold

    def compute_trend(self, entries: Sequence[MoodEntry]) -> TrendSummary:
        """
        Compute the trend over a set of entries.

        Args:
            entries: Entries in any order

        Returns:
            TrendSummary; a neutral default when entries is empty
        """
        if not entries:
            return TrendSummary(
                direction=TrendDirection.STABLE,
                average_intensity=self.DEFAULT_AVERAGE_INTENSITY,
                most_common_mood=self.DEFAULT_MOOD,
                entry_count=0,
            )

        ordered = chronological(entries)
        midpoint = len(ordered) // 2
        first_half, second_half = ordered[:midpoint], ordered[midpoint:]

        return TrendSummary(
            direction=self._direction(first_half, second_half),
            average_intensity=fmean(entry.intensity for entry in ordered),
            most_common_mood=most_common_mood(ordered),
            entry_count=len(ordered),
        )

    def _direction(
        self,
        first_half: Sequence[MoodEntry],
        second_half: Sequence[MoodEntry],
    ) -> TrendDirection:
        if not first_half or not second_half:
            return TrendDirection.STABLE

        difference = (
            fmean(entry.intensity for entry in second_half)
            - fmean(entry.intensity for entry in first_half)
        )
        if difference > self._threshold:
            return TrendDirection.IMPROVING
        if difference < -self._threshold:
            return TrendDirection.DECLINING
        return TrendDirection.STABLE
