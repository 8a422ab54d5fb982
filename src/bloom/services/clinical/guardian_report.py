"""
Guardian Report Builder

Periodic wellness summary for guardians and care teams.

CLINICAL_REVIEW_REQUIRED: Pattern thresholds and recommendation
wording are placeholders pending care team review.

PRIVACY: Reports summarize a child's check-ins. Share only with the
child's authorized guardians and care team.
"""

from collections import Counter
from datetime import datetime, timedelta
from statistics import fmean
from typing import Optional, Sequence

from bloom.domain.enums.clinical import AlertLevel, TrendDirection
from bloom.domain.models.catalog import CONCERNING_MOODS
from bloom.domain.models.clinical_output import GuardianReport, MoodTrendPoint
from bloom.domain.models.mood_entry import LOW_INTENSITY_MAX, MoodEntry
from bloom.domain.timeutils import as_utc, utc_now
from bloom.services.clinical.alert_engine import AlertEngine
from bloom.services.clinical.trend_analyzer import TrendAnalyzer, chronological, most_common_mood
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)

POSITIVE_MOODS: frozenset[str] = frozenset({"happy", "excited", "calm"})


class GuardianReportBuilder:
    """
    Builds guardian reports over a trailing period.

    Usage:
        builder = GuardianReportBuilder()
        report = builder.build("patient-1", history, period_days=7)
    """

    PERIOD_DAYS: int = 7

    # Share of sessions a mood group needs before it counts as a pattern
    PATTERN_SHARE: float = 0.5

    # Low-intensity sessions needed before they count as a pattern
    LOW_INTENSITY_PATTERN_COUNT: int = 3

    def __init__(
        self,
        trend_analyzer: Optional[TrendAnalyzer] = None,
        alert_engine: Optional[AlertEngine] = None,
    ) -> None:
        self._trends = trend_analyzer or TrendAnalyzer()
        self._alerts = alert_engine or AlertEngine()

    def build(
        self,
        patient_id: str,
        entries: Sequence[MoodEntry],
        period_days: int = PERIOD_DAYS,
        now: Optional[datetime] = None,
    ) -> GuardianReport:
        """
        Build a report for the period ending now.

        Args:
            patient_id: Child the report covers
            entries: Child's history in any order
            period_days: Length of the reporting window
            now: End of the window, defaults to the current time

        Returns:
            GuardianReport
        """
        now = as_utc(now) if now else utc_now()
        start = now - timedelta(days=period_days)
        in_period = [
            entry for entry in chronological(entries)
            if start < as_utc(entry.timestamp) <= now
        ]

        report = GuardianReport(
            patient_id=patient_id,
            period_start=start,
            period_end=now,
            generated_at=now,
            clinical_alerts=self._alerts.compute_alerts(entries, now=now),
        )

        if in_period:
            trend = self._trends.compute_trend(in_period)
            report.total_sessions = len(in_period)
            report.average_mood_score = fmean(e.intensity for e in in_period)
            report.most_frequent_mood = most_common_mood(in_period)
            report.trend = trend.direction
            report.mood_trends = [
                MoodTrendPoint(
                    date=as_utc(e.timestamp).date().isoformat(),
                    mood=e.mood,
                    intensity=e.intensity,
                )
                for e in in_period
            ]
            report.concerning_patterns = self._concerning_patterns(in_period, trend.direction)
            report.positive_patterns = self._positive_patterns(in_period, trend.direction)

        report.recommendations = self._recommendations(report, in_period)

        logger.info(
            "Guardian report built",
            total_sessions=report.total_sessions,
            trend=report.trend.value,
            alert_count=len(report.clinical_alerts),
        )
        return report

    def _concerning_patterns(
        self,
        entries: Sequence[MoodEntry],
        direction: TrendDirection,
    ) -> list[str]:
        total = len(entries)
        patterns = []

        concerning = sum(1 for e in entries if e.mood in CONCERNING_MOODS)
        if concerning / total >= self.PATTERN_SHARE:
            patterns.append(f"Sad, angry or worried moods in {concerning} of {total} sessions")

        low = sum(1 for e in entries if e.intensity <= LOW_INTENSITY_MAX)
        if low >= self.LOW_INTENSITY_PATTERN_COUNT:
            patterns.append(f"Low mood intensity in {low} sessions")

        if direction == TrendDirection.DECLINING:
            patterns.append("Mood intensity declining over the period")

        support = sum(1 for e in entries if e.support_needed)
        if support:
            patterns.append(f"Asked to talk to someone in {support} session(s)")

        return patterns

    def _positive_patterns(
        self,
        entries: Sequence[MoodEntry],
        direction: TrendDirection,
    ) -> list[str]:
        total = len(entries)
        patterns = []

        positive = sum(1 for e in entries if e.mood in POSITIVE_MOODS)
        if positive / total >= self.PATTERN_SHARE:
            patterns.append(f"Happy, excited or calm moods in {positive} of {total} sessions")

        if direction == TrendDirection.IMPROVING:
            patterns.append("Mood intensity improving over the period")

        coping = sum(1 for e in entries if e.coping_strategies)
        if coping:
            patterns.append(f"Named a coping strategy in {coping} session(s)")

        return patterns

    def _recommendations(
        self,
        report: GuardianReport,
        entries: Sequence[MoodEntry],
    ) -> list[str]:
        if not entries:
            return ["Encourage a check-in this week"]

        recommendations = []
        levels = {alert.level for alert in report.clinical_alerts}

        if AlertLevel.URGENT in levels:
            recommendations.append("Schedule a clinical review with the care team")
        if any(e.support_needed for e in entries):
            recommendations.append("Follow up on the request to talk to someone")
        if report.trend == TrendDirection.DECLINING or AlertLevel.WARNING in levels:
            recommendations.append("Check in more often over the coming week")

        strategies = Counter(
            strategy for e in entries for strategy in (e.coping_strategies or [])
        )
        if strategies:
            favourite, _ = strategies.most_common(1)[0]
            recommendations.append(f"Encourage the coping strategy that is used most: {favourite}")

        if not recommendations:
            recommendations.append("Keep up the regular check-ins")

        return recommendations
