"""Clinical summary services: observations, trends, alerts and reports."""

from bloom.services.clinical.observation_builder import ObservationBuilder
from bloom.services.clinical.trend_analyzer import TrendAnalyzer
from bloom.services.clinical.alert_engine import AlertEngine
from bloom.services.clinical.guardian_report import GuardianReportBuilder
from bloom.services.clinical.summary_builder import ClinicalSummaryBuilder

__all__ = [
    "ObservationBuilder",
    "TrendAnalyzer",
    "AlertEngine",
    "GuardianReportBuilder",
    "ClinicalSummaryBuilder",
]
