"""
Clinical Summary Builder

Single entry point for the guardian and clinician views: coded
observations, trends, alerts and periodic reports.

ARCHITECTURE: Never performs I/O. Callers pass in entry histories
and receive derived summaries; storage stays outside the core.
"""

from datetime import datetime
from typing import Optional, Sequence

from bloom.config.settings import CheckInSettings
from bloom.domain.models.clinical_output import (
    ClinicalAlert,
    GuardianReport,
    ObservationRecord,
    TrendSummary,
)
from bloom.domain.models.mood_entry import MoodEntry
from bloom.services.clinical.alert_engine import AlertEngine
from bloom.services.clinical.guardian_report import GuardianReportBuilder
from bloom.services.clinical.observation_builder import ObservationBuilder
from bloom.services.clinical.trend_analyzer import TrendAnalyzer


class ClinicalSummaryBuilder:
    """
    Clinical summary facade.

    Usage:
        builder = ClinicalSummaryBuilder()
        observation = builder.to_observation(entry)
        trend = builder.compute_trend(history)
        alerts = builder.compute_alerts(history)
    """

    def __init__(
        self,
        observation_builder: Optional[ObservationBuilder] = None,
        trend_analyzer: Optional[TrendAnalyzer] = None,
        alert_engine: Optional[AlertEngine] = None,
        report_builder: Optional[GuardianReportBuilder] = None,
        report_period_days: int = GuardianReportBuilder.PERIOD_DAYS,
    ) -> None:
        self._observations = observation_builder or ObservationBuilder()
        self._trends = trend_analyzer or TrendAnalyzer()
        self._alerts = alert_engine or AlertEngine()
        self._reports = report_builder or GuardianReportBuilder(self._trends, self._alerts)
        self._report_period_days = report_period_days

    @classmethod
    def from_settings(cls, settings: CheckInSettings) -> "ClinicalSummaryBuilder":
        """Build with thresholds taken from check-in settings."""
        return cls(
            trend_analyzer=TrendAnalyzer(threshold=settings.trend_threshold),
            alert_engine=AlertEngine(
                window_days=settings.alert_window_days,
                low_intensity_threshold=settings.low_intensity_threshold,
                low_intensity_alert_count=settings.low_intensity_alert_count,
                concerning_mood_alert_count=settings.concerning_mood_alert_count,
            ),
            report_period_days=settings.report_period_days,
        )

    def to_observation(self, entry: MoodEntry) -> ObservationRecord:
        return self._observations.to_observation(entry)

    def compute_trend(self, entries: Sequence[MoodEntry]) -> TrendSummary:
        return self._trends.compute_trend(entries)

    def compute_alerts(
        self,
        entries: Sequence[MoodEntry],
        now: Optional[datetime] = None,
    ) -> list[ClinicalAlert]:
        return self._alerts.compute_alerts(entries, now=now)

    def build_report(
        self,
        patient_id: str,
        entries: Sequence[MoodEntry],
        period_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> GuardianReport:
        """Guardian report over the configured period unless one is given."""
        return self._reports.build(
            patient_id,
            entries,
            period_days=period_days or self._report_period_days,
            now=now,
        )
