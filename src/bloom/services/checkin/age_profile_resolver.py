"""
Age Profile Resolver

Maps a child's age to the features and limits offered in a check-in.

ARCHITECTURE: Pure lookup over three fixed age bands. Results are
never cached; callers re-resolve whenever the age setting changes.

CLINICAL_REVIEW_REQUIRED: Band boundaries and per-band limits should
be validated with child development specialists.
"""

from dataclasses import dataclass

from bloom.domain.enums.checkin import ComplexityTier, FeatureId, PromptStyle
from bloom.domain.models.age_profile import AgeProfile
from bloom.domain.models.selections import AUTO_FINALIZE_MAX_AGE, max_space_items_for_age
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AgeBand:
    """One row of the age band table."""

    min_age: int
    max_age: int
    title: str
    features: frozenset[FeatureId]
    complexity_tier: ComplexityTier
    max_color_selections: int
    prompt_style: PromptStyle
    icon_size_hint: int

    @property
    def label(self) -> str:
        return f"{self.min_age}-{self.max_age}"


class AgeProfileResolver:
    """
    Resolves age profiles.

    Ages outside the supported range are clamped to its nearest end.

    Usage:
        resolver = AgeProfileResolver()
        profile = resolver.resolve(6)
        profile.allows(FeatureId.EXPRESS)  # False
    """

    MIN_AGE: int = 4
    MAX_AGE: int = 16

    # Ages at or below this have entries routed to a guardian
    GUARDIAN_REVIEW_MAX_AGE: int = 12

    BANDS: tuple[AgeBand, ...] = (
        AgeBand(
            min_age=4,
            max_age=7,
            title="Early Childhood",
            features=frozenset({FeatureId.MOOD, FeatureId.COLORS, FeatureId.JOURNAL}),
            complexity_tier=ComplexityTier.SIMPLE,
            max_color_selections=3,
            prompt_style=PromptStyle.VISUAL,
            icon_size_hint=48,
        ),
        AgeBand(
            min_age=8,
            max_age=12,
            title="Middle Childhood",
            features=frozenset({
                FeatureId.MOOD, FeatureId.COLORS, FeatureId.EXPRESS,
                FeatureId.SPACE, FeatureId.JOURNAL,
            }),
            complexity_tier=ComplexityTier.MEDIUM,
            max_color_selections=5,
            prompt_style=PromptStyle.INTERACTIVE,
            icon_size_hint=40,
        ),
        AgeBand(
            min_age=13,
            max_age=16,
            title="Adolescence",
            features=frozenset(FeatureId),
            complexity_tier=ComplexityTier.ADVANCED,
            max_color_selections=8,
            prompt_style=PromptStyle.CONVERSATIONAL,
            icon_size_hint=36,
        ),
    )

    def __init__(self, min_age: int = MIN_AGE, max_age: int = MAX_AGE) -> None:
        """
        Initialize resolver.

        Args:
            min_age: Youngest supported age
            max_age: Oldest supported age
        """
        if min_age > max_age:
            raise ValueError(f"min_age ({min_age}) must not exceed max_age ({max_age})")
        self._min_age = min_age
        self._max_age = max_age

    def clamp(self, age: int) -> int:
        """Clamp an age into the supported range."""
        if isinstance(age, bool) or not isinstance(age, int):
            raise TypeError(f"Age must be an integer, got {type(age).__name__}")
        return max(self._min_age, min(self._max_age, age))

    def band_for(self, age: int) -> AgeBand:
        """Get the band an already-clamped age falls into."""
        for band in self.BANDS:
            if age <= band.max_age:
                return band
        return self.BANDS[-1]

    def resolve(self, age: int) -> AgeProfile:
        """
        Resolve the profile for an age.

        Args:
            age: Child's age in years

        Returns:
            AgeProfile for the clamped age
        """
        clamped = self.clamp(age)
        if clamped != age:
            logger.warning(
                "Age outside supported range, clamping",
                requested_age=age,
                resolved_age=clamped,
            )

        band = self.band_for(clamped)
        return AgeProfile(
            age_years=clamped,
            age_range=band.label,
            feature_set=band.features,
            complexity_tier=band.complexity_tier,
            max_color_selections=band.max_color_selections,
            max_space_items=max_space_items_for_age(clamped),
            prompt_style=band.prompt_style,
            icon_size_hint=band.icon_size_hint,
            auto_advance=clamped <= AUTO_FINALIZE_MAX_AGE,
            requires_guardian_review=clamped <= self.GUARDIAN_REVIEW_MAX_AGE,
        )
