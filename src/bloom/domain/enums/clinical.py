"""
Clinical Summary Enumerations

Trend directions, alert levels and entry severities used in the
guardian and clinician views.

CLINICAL_REVIEW_REQUIRED: Level semantics should be agreed with
the care team before alerts are routed to clinicians.
"""

from enum import StrEnum


class TrendDirection(StrEnum):
    """Direction of mood intensity across a history."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class AlertLevel(StrEnum):
    """
    Clinical alert urgency.

    Ordered from least to most urgent.
    """

    INFO = "info"
    """Informational, no action required."""

    WARNING = "warning"
    """Worth a guardian's attention."""

    URGENT = "urgent"
    """
    Clinical review recommended.

    SAFETY_NOTE: Urgent alerts are a prompt for human review,
    never a diagnosis.
    """


class EntrySeverity(StrEnum):
    """Severity flag attached to a single mood entry."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InsightSignificance(StrEnum):
    """How much weight an insight deserves in a review."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
