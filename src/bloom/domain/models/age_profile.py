"""
Age Profile Domain Model

Derived configuration of enabled features and limits for a child's
age. Never stored; recomputed whenever the age changes.
"""

from dataclasses import dataclass

from bloom.domain.enums.checkin import ComplexityTier, FeatureId, PromptStyle


@dataclass(frozen=True)
class AgeProfile:
    """
    Feature set and UI limits for one age.

    Attributes:
        age_years: Age the profile was resolved for (4-16)
        age_range: Label of the age band, e.g. "8-12"
        feature_set: Features offered at this age
        complexity_tier: Interaction complexity
        max_color_selections: Cap on color clouds per check-in
        max_space_items: Cap on safe-space items per check-in
        prompt_style: Presentation style for questions
        icon_size_hint: Suggested icon size in points
        auto_advance: Whether mood selection moves on without a continue step
        requires_guardian_review: Whether entries are routed to a guardian
    """

    age_years: int
    age_range: str
    feature_set: frozenset[FeatureId]
    complexity_tier: ComplexityTier
    max_color_selections: int
    max_space_items: int
    prompt_style: PromptStyle
    icon_size_hint: int
    auto_advance: bool = False
    requires_guardian_review: bool = False

    def allows(self, feature: FeatureId) -> bool:
        """Check whether a feature is offered at this age."""
        return feature in self.feature_set

    @property
    def ordered_features(self) -> list[FeatureId]:
        """Available features in presentation order."""
        return [feature for feature in FeatureId if feature in self.feature_set]

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "age_years": self.age_years,
            "age_range": self.age_range,
            "features": [feature.value for feature in self.ordered_features],
            "complexity_tier": self.complexity_tier.value,
            "max_color_selections": self.max_color_selections,
            "max_space_items": self.max_space_items,
            "prompt_style": self.prompt_style.value,
            "icon_size_hint": self.icon_size_hint,
            "auto_advance": self.auto_advance,
            "requires_guardian_review": self.requires_guardian_review,
        }
