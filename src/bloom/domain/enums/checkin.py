"""
Check-In Enumerations

Feature tags, age tiers and selection categories used by the
emotion check-in flow.

CLINICAL_REVIEW_REQUIRED: Minimum ages per feature and expression
mode were chosen by the product team and should be validated with
child development specialists.
"""

from enum import StrEnum


class FeatureId(StrEnum):
    """
    Check-in activities a child can use.

    Declaration order is the order features are presented in.
    """

    MOOD = "mood"
    """Pick a mood and its intensity."""

    COLORS = "colors"
    """Pick color clouds that match the feeling."""

    EXPRESS = "express"
    """Draw, photograph, record or write about the feeling."""

    SPACE = "space"
    """Build a safe space out of comforting items."""

    PROMPTS = "prompts"
    """Adaptive follow-up questions."""

    JOURNAL = "journal"
    """Review past check-ins."""

    @property
    def min_age(self) -> int:
        """Youngest age this feature is offered to."""
        return _FEATURE_MIN_AGES[self]


_FEATURE_MIN_AGES: dict[FeatureId, int] = {
    FeatureId.MOOD: 4,
    FeatureId.COLORS: 4,
    FeatureId.EXPRESS: 8,
    FeatureId.SPACE: 8,
    FeatureId.PROMPTS: 13,
    FeatureId.JOURNAL: 4,
}


class ComplexityTier(StrEnum):
    """Interaction complexity for an age band."""

    SIMPLE = "simple"
    MEDIUM = "medium"
    ADVANCED = "advanced"


class PromptStyle(StrEnum):
    """How questions are presented to an age band."""

    VISUAL = "visual"
    INTERACTIVE = "interactive"
    CONVERSATIONAL = "conversational"


class ExpressionMode(StrEnum):
    """
    Creative expression modes offered by the express feature.

    Each mode maps to the kind of record it produces.
    """

    DRAW = "draw"
    PHOTO = "photo"
    VOICE = "voice"
    WRITE = "write"

    @property
    def min_age(self) -> int:
        """Youngest age this mode is offered to."""
        return _EXPRESSION_MIN_AGES[self]

    @property
    def record_type(self) -> "ExpressionType":
        """Record variant produced by this mode."""
        return _EXPRESSION_RECORD_TYPES[self]


class ExpressionType(StrEnum):
    """Variants of a stored expression record."""

    DRAWING = "drawing"
    PHOTO = "photo"
    VOICE = "voice"
    TEXT = "text"


_EXPRESSION_MIN_AGES: dict[ExpressionMode, int] = {
    ExpressionMode.DRAW: 8,
    ExpressionMode.PHOTO: 10,
    ExpressionMode.VOICE: 12,
    ExpressionMode.WRITE: 13,
}

_EXPRESSION_RECORD_TYPES: dict[ExpressionMode, ExpressionType] = {
    ExpressionMode.DRAW: ExpressionType.DRAWING,
    ExpressionMode.PHOTO: ExpressionType.PHOTO,
    ExpressionMode.VOICE: ExpressionType.VOICE,
    ExpressionMode.WRITE: ExpressionType.TEXT,
}


class SpaceCategory(StrEnum):
    """Categories of safe-space items."""

    FURNITURE = "furniture"
    DECORATION = "decoration"
    NATURE = "nature"
    COMFORT = "comfort"


class PromptType(StrEnum):
    """Answer shape of an adaptive prompt."""

    CHOICE = "choice"
    """Pick one of the listed options."""

    SCALE = "scale"
    """Integer from 1 to 10."""

    TEXT = "text"
    """Free text."""


class CheckInState(StrEnum):
    """Lifecycle of a check-in session."""

    ACTIVE = "active"
    """Session in progress."""

    COMPLETED = "completed"
    """User finished the check-in."""

    ABANDONED = "abandoned"
    """User left before finishing."""
