"""Domain enums package."""

from bloom.domain.enums.checkin import (
    CheckInState,
    ComplexityTier,
    ExpressionMode,
    ExpressionType,
    FeatureId,
    PromptStyle,
    PromptType,
    SpaceCategory,
)
from bloom.domain.enums.clinical import (
    AlertLevel,
    EntrySeverity,
    InsightSignificance,
    TrendDirection,
)

__all__ = [
    # Check-in
    "CheckInState",
    "ComplexityTier",
    "ExpressionMode",
    "ExpressionType",
    "FeatureId",
    "PromptStyle",
    "PromptType",
    "SpaceCategory",
    # Clinical
    "AlertLevel",
    "EntrySeverity",
    "InsightSignificance",
    "TrendDirection",
]
