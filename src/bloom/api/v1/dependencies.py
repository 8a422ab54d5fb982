"""
API Dependencies

Service factories injected into endpoints with FastAPI's Depends.
Override them in tests through app.dependency_overrides.
"""

from bloom.config import get_settings
from bloom.services.checkin import AgeProfileResolver
from bloom.services.clinical import ClinicalSummaryBuilder
from bloom.services.insights import InsightProvider, RuleBasedInsightProvider


def get_resolver() -> AgeProfileResolver:
    """Resolver bounded by the configured age range."""
    checkin = get_settings().checkin
    return AgeProfileResolver(min_age=checkin.min_age, max_age=checkin.max_age)


def get_summary_builder() -> ClinicalSummaryBuilder:
    """Summary builder using the configured alert and trend thresholds."""
    return ClinicalSummaryBuilder.from_settings(get_settings().checkin)


def get_insight_provider() -> InsightProvider:
    return RuleBasedInsightProvider()
