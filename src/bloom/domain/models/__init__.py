"""Domain models package."""

from bloom.domain.models.age_profile import AgeProfile
from bloom.domain.models.selections import (
    AdaptivePromptResponse,
    ColorSelection,
    DrawingExpression,
    ExpressionRecord,
    MoodSelection,
    PhotoExpression,
    SafeSpaceSelection,
    TextExpression,
    VoiceExpression,
)
from bloom.domain.models.prompt import Prompt, PromptWalkthroughResult
from bloom.domain.models.session import CheckInSession
from bloom.domain.models.mood_entry import ClinicalFlags, MoodEntry
from bloom.domain.models.clinical_output import (
    ClinicalAlert,
    CodeableConcept,
    Coding,
    GuardianReport,
    Insight,
    MoodTrendPoint,
    ObservationComponent,
    ObservationRecord,
    Quantity,
    TrendSummary,
)

__all__ = [
    # Age profile
    "AgeProfile",
    # Selections
    "AdaptivePromptResponse",
    "ColorSelection",
    "DrawingExpression",
    "ExpressionRecord",
    "MoodSelection",
    "PhotoExpression",
    "SafeSpaceSelection",
    "TextExpression",
    "VoiceExpression",
    # Prompts
    "Prompt",
    "PromptWalkthroughResult",
    # Session and history
    "CheckInSession",
    "ClinicalFlags",
    "MoodEntry",
    # Clinical output
    "ClinicalAlert",
    "CodeableConcept",
    "Coding",
    "GuardianReport",
    "Insight",
    "MoodTrendPoint",
    "ObservationComponent",
    "ObservationRecord",
    "Quantity",
    "TrendSummary",
]
