"""
Unit Tests for Age Profile Resolver

Tests band lookup, clamping and derived flags.
"""

import pytest

from bloom.domain.enums.checkin import ComplexityTier, FeatureId, PromptStyle
from bloom.services.checkin.age_profile_resolver import AgeProfileResolver


EARLY_FEATURES = {FeatureId.MOOD, FeatureId.COLORS, FeatureId.JOURNAL}
MIDDLE_FEATURES = EARLY_FEATURES | {FeatureId.EXPRESS, FeatureId.SPACE}
TEEN_FEATURES = set(FeatureId)


class TestAgeBands:
    """Tests for the three age bands."""

    @pytest.mark.parametrize("age", range(4, 8))
    def test_early_childhood(self, resolver, age):
        """Ages 4-7 get the simple profile with three colors."""
        profile = resolver.resolve(age)

        assert profile.feature_set == EARLY_FEATURES
        assert profile.max_color_selections == 3
        assert profile.complexity_tier == ComplexityTier.SIMPLE
        assert profile.prompt_style == PromptStyle.VISUAL
        assert profile.icon_size_hint == 48

    @pytest.mark.parametrize("age", range(8, 13))
    def test_middle_childhood(self, resolver, age):
        """Ages 8-12 add expression and safe space."""
        profile = resolver.resolve(age)

        assert profile.feature_set == MIDDLE_FEATURES
        assert profile.max_color_selections == 5
        assert profile.complexity_tier == ComplexityTier.MEDIUM
        assert profile.prompt_style == PromptStyle.INTERACTIVE

    @pytest.mark.parametrize("age", range(13, 17))
    def test_adolescence(self, resolver, age):
        """Ages 13-16 get every feature."""
        profile = resolver.resolve(age)

        assert profile.feature_set == TEEN_FEATURES
        assert profile.max_color_selections == 8
        assert profile.complexity_tier == ComplexityTier.ADVANCED
        assert profile.prompt_style == PromptStyle.CONVERSATIONAL

    def test_feature_min_ages_match_bands(self, resolver):
        """Every feature is offered exactly from its minimum age."""
        for feature in FeatureId:
            assert resolver.resolve(feature.min_age).allows(feature)
            if feature.min_age > 4:
                assert not resolver.resolve(feature.min_age - 1).allows(feature)


class TestDerivedFlags:
    """Tests for flags derived alongside the band."""

    def test_auto_advance_only_for_young_children(self, resolver):
        assert resolver.resolve(7).auto_advance is True
        assert resolver.resolve(8).auto_advance is False

    def test_guardian_review_up_to_twelve(self, resolver):
        assert resolver.resolve(12).requires_guardian_review is True
        assert resolver.resolve(13).requires_guardian_review is False

    def test_space_item_cap(self, resolver):
        assert resolver.resolve(12).max_space_items == 6
        assert resolver.resolve(13).max_space_items == 8

    def test_age_range_label(self, resolver):
        assert resolver.resolve(10).age_range == "8-12"

    def test_ordered_features_follow_presentation_order(self, resolver):
        profile = resolver.resolve(10)

        assert profile.ordered_features == [
            FeatureId.MOOD,
            FeatureId.COLORS,
            FeatureId.EXPRESS,
            FeatureId.SPACE,
            FeatureId.JOURNAL,
        ]


class TestClamping:
    """Tests for ages outside the supported range."""

    def test_below_range_clamps_to_youngest(self, resolver):
        profile = resolver.resolve(2)

        assert profile.age_years == 4
        assert profile.feature_set == EARLY_FEATURES

    def test_above_range_clamps_to_oldest(self, resolver):
        profile = resolver.resolve(30)

        assert profile.age_years == 16
        assert profile.feature_set == TEEN_FEATURES

    def test_custom_bounds(self):
        """Configured bounds narrow the range."""
        resolver = AgeProfileResolver(min_age=6, max_age=12)

        assert resolver.resolve(4).age_years == 6
        assert resolver.resolve(15).age_years == 12

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            AgeProfileResolver(min_age=12, max_age=6)

    @pytest.mark.parametrize("age", [7.5, "8", None, True])
    def test_non_integer_age_rejected(self, resolver, age):
        with pytest.raises(TypeError):
            resolver.resolve(age)

    def test_resolution_is_pure(self, resolver):
        """Re-resolving gives an equal profile."""
        assert resolver.resolve(9) == resolver.resolve(9)
