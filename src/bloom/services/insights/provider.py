"""
Insight Providers

Derive readable observations from a child's mood history.

ARCHITECTURE: Insight generation sits behind InsightProvider so the
rule-based provider can be swapped without touching callers. Nothing
in the check-in core depends on it.

CLINICAL_VALIDATION_REQUIRED: Insights are descriptive summaries for
guardians and care teams, not assessments.
"""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Sequence

from bloom.domain.enums.clinical import InsightSignificance, TrendDirection
from bloom.domain.models.catalog import CONCERNING_MOODS
from bloom.domain.models.clinical_output import Insight
from bloom.domain.models.mood_entry import MoodEntry
from bloom.domain.timeutils import as_utc
from bloom.services.clinical.trend_analyzer import TrendAnalyzer
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)


class InsightProvider(ABC):
    """Interface for insight generation over a mood history."""

    @abstractmethod
    def analyze(self, history: Sequence[MoodEntry]) -> list[Insight]:
        """
        Analyze a history.

        Args:
            history: Entries in any order

        Returns:
            Insights, most significant first
        """
        ...


class RuleBasedInsightProvider(InsightProvider):
    """
    Deterministic insights from counting rules.

    Detects:
    - Difficult moods clustering at one time of day
    - Triggers named in several check-ins
    - The coping strategy chosen most often
    - An improving or declining intensity trend
    """

    # Time-of-day windows over the UTC hour of each entry
    TEMPORAL_WINDOWS: dict[str, tuple[int, int]] = {
        "morning": (5, 12),      # 5 AM - 12 PM
        "afternoon": (12, 17),   # 12 PM - 5 PM
        "evening": (17, 21),     # 5 PM - 9 PM
        "night": (21, 5),        # 9 PM - 5 AM
    }

    # Fewer entries than this yield no insights
    MIN_HISTORY: int = 3

    # Insights below this confidence are dropped
    MIN_CONFIDENCE: float = 0.6

    # Mentions needed before a trigger counts as recurring
    RECURRING_TRIGGER_COUNT: int = 2

    # Entries at which trend confidence saturates
    TREND_FULL_CONFIDENCE_ENTRIES: int = 10

    SIGNIFICANCE_ORDER: dict[InsightSignificance, int] = {
        InsightSignificance.HIGH: 0,
        InsightSignificance.MEDIUM: 1,
        InsightSignificance.LOW: 2,
    }

    def __init__(
        self,
        min_confidence: float = MIN_CONFIDENCE,
        trend_analyzer: TrendAnalyzer | None = None,
    ) -> None:
        self._min_confidence = min_confidence
        self._trends = trend_analyzer or TrendAnalyzer()

    def analyze(self, history: Sequence[MoodEntry]) -> list[Insight]:
        if len(history) < self.MIN_HISTORY:
            return []

        insights = [
            *self._time_of_day(history),
            *self._recurring_triggers(history),
            *self._coping(history),
            *self._trend(history),
        ]
        insights = [i for i in insights if i.confidence >= self._min_confidence]
        insights.sort(key=lambda i: self.SIGNIFICANCE_ORDER[i.significance])

        logger.debug("Insights generated", entry_count=len(history), insight_count=len(insights))
        return insights

    @classmethod
    def window_for(cls, hour: int) -> str:
        """Name of the time-of-day window containing an hour (0-23)."""
        if not 0 <= hour < 24:
            raise ValueError(f"Hour out of range: {hour}")
        for name, (start, end) in cls.TEMPORAL_WINDOWS.items():
            if start <= end:
                if start <= hour < end:
                    return name
            elif hour >= start or hour < end:  # Wraps around midnight
                return name
        raise LookupError(f"No window covers hour {hour}")

    def _time_of_day(self, history: Sequence[MoodEntry]) -> list[Insight]:
        concerning = [e for e in history if e.mood in CONCERNING_MOODS]
        if len(concerning) < self.MIN_HISTORY:
            return []

        windows = Counter(self.window_for(as_utc(e.timestamp).hour) for e in concerning)
        window, count = windows.most_common(1)[0]
        return [Insight(
            insight_type="time_of_day",
            description=f"Difficult feelings come up most in the {window}",
            confidence=count / len(concerning),
            significance=InsightSignificance.MEDIUM,
        )]

    def _recurring_triggers(self, history: Sequence[MoodEntry]) -> list[Insight]:
        with_triggers = [e for e in history if e.triggers]
        if not with_triggers:
            return []

        mentions = Counter(
            trigger
            for e in with_triggers
            for trigger in {t.strip().lower() for t in e.triggers}
        )
        return [
            Insight(
                insight_type="recurring_trigger",
                description=f"'{trigger}' named as a cause in {count} check-ins",
                confidence=count / len(with_triggers),
                significance=InsightSignificance.MEDIUM,
            )
            for trigger, count in mentions.most_common()
            if count >= self.RECURRING_TRIGGER_COUNT
        ]

    def _coping(self, history: Sequence[MoodEntry]) -> list[Insight]:
        with_coping = [e for e in history if e.coping_strategies]
        if not with_coping:
            return []

        strategies = Counter(s for e in with_coping for s in set(e.coping_strategies))
        strategy, count = strategies.most_common(1)[0]
        return [Insight(
            insight_type="coping_strategy",
            description=f"'{strategy}' is the coping strategy chosen most often",
            confidence=count / len(with_coping),
            significance=InsightSignificance.LOW,
        )]

    def _trend(self, history: Sequence[MoodEntry]) -> list[Insight]:
        summary = self._trends.compute_trend(history)
        if summary.direction == TrendDirection.STABLE:
            return []

        declining = summary.direction == TrendDirection.DECLINING
        return [Insight(
            insight_type="trend",
            description=f"Mood intensity {summary.direction.value} across {summary.entry_count} check-ins",
            confidence=min(1.0, summary.entry_count / self.TREND_FULL_CONFIDENCE_ENTRIES),
            significance=InsightSignificance.HIGH if declining else InsightSignificance.MEDIUM,
        )]
