"""
Unit Tests for Session Aggregator

Tests feature gating, payload checks, soft caps and auto-advance.
"""

from dataclasses import replace

import pytest

from bloom.domain.enums.checkin import ExpressionMode, FeatureId
from bloom.domain.exceptions import (
    FeatureNotAvailableError,
    InvalidPayloadError,
    SessionClosedError,
)
from bloom.domain.models.prompt import PromptWalkthroughResult
from bloom.domain.models.selections import (
    AdaptivePromptResponse,
    ColorSelection,
    ExpressionRecord,
    MoodSelection,
    SafeSpaceSelection,
)
from bloom.domain.models.session import CheckInSession


def make_session(age: int) -> CheckInSession:
    return CheckInSession(patient_id="patient-1", age_at_session=age)


class TestPolicyViolations:
    """Tests for features outside the age profile."""

    @pytest.mark.parametrize(
        "age,feature",
        [
            (6, FeatureId.EXPRESS),
            (6, FeatureId.SPACE),
            (6, FeatureId.PROMPTS),
            (12, FeatureId.PROMPTS),
        ],
    )
    def test_unavailable_feature_rejected(self, aggregator, age, feature):
        session = make_session(age)

        with pytest.raises(FeatureNotAvailableError):
            aggregator.record_feature_completion(session, feature, None)

    def test_rejection_leaves_session_unchanged(self, aggregator):
        """A rejected call mutates nothing."""
        session = make_session(6)
        aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("happy", age=6)
        )
        before = session.to_dict()

        with pytest.raises(FeatureNotAvailableError):
            aggregator.record_feature_completion(
                session,
                FeatureId.EXPRESS,
                ExpressionRecord.create(ExpressionMode.DRAW, "drawing://1"),
            )

        after = session.to_dict()
        before.pop("duration_seconds")
        after.pop("duration_seconds")
        assert after == before
        assert session.expression is None

    def test_expression_mode_below_min_age_rejected(self, aggregator):
        """Age 9 may draw but not record voice notes."""
        session = make_session(9)
        voice = ExpressionRecord.create(ExpressionMode.VOICE, "audio://1", duration_seconds=4)

        with pytest.raises(FeatureNotAvailableError):
            aggregator.record_feature_completion(session, FeatureId.EXPRESS, voice)

        assert FeatureId.EXPRESS not in session.completed_features

    def test_closed_session_rejected(self, aggregator):
        session = make_session(10)
        session.complete()

        with pytest.raises(SessionClosedError):
            aggregator.record_feature_completion(session, FeatureId.JOURNAL)


class TestPayloadChecks:
    """Tests for payload shape per feature."""

    def test_wrong_payload_type_rejected(self, aggregator):
        session = make_session(10)

        with pytest.raises(InvalidPayloadError):
            aggregator.record_feature_completion(
                session, FeatureId.MOOD, ColorSelection(max_selections=5)
            )

    def test_journal_takes_no_payload(self, aggregator):
        session = make_session(10)

        with pytest.raises(InvalidPayloadError):
            aggregator.record_feature_completion(
                session, FeatureId.JOURNAL, MoodSelection.create("calm", age=10)
            )

    def test_plain_string_feature_accepted(self, aggregator):
        session = make_session(10)

        completion = aggregator.record_feature_completion(session, "journal")

        assert FeatureId.JOURNAL in completion.session.completed_features


class TestMerging:
    """Tests for merging payloads into the session."""

    def test_mood_sets_summarizable(self, aggregator):
        session = make_session(10)
        assert not session.is_summarizable

        aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("calm", age=10, intensity=6)
        )

        assert session.is_summarizable
        assert session.mood.mood_id == "calm"

    def test_partial_session_is_valid(self, aggregator):
        """Only mood is needed; other features are optional."""
        session = make_session(14)

        aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("tired", age=14)
        )

        assert session.completed_features == {FeatureId.MOOD}
        assert session.colors is None

    def test_over_cap_colors_truncated(self, aggregator):
        """A payload built with a larger cap is cut to the profile's cap."""
        session = make_session(6)
        payload = ColorSelection.from_ids(["yellow", "blue", "green", "pink", "red"], max_selections=8)

        aggregator.record_feature_completion(session, FeatureId.COLORS, payload)

        assert session.colors.color_ids == ["yellow", "blue", "green"]
        assert session.colors.max_selections == 3

    def test_over_cap_space_truncated(self, aggregator):
        session = make_session(10)
        items = ["bed", "chair", "desk", "lamp", "books", "art", "plant", "flowers"]
        payload = SafeSpaceSelection.from_ids(items, max_items=8)

        aggregator.record_feature_completion(session, FeatureId.SPACE, payload)

        assert len(session.safe_space.item_ids) == 6

    def test_prompt_result_merged(self, aggregator):
        session = make_session(15)
        result = PromptWalkthroughResult(
            responses=(
                AdaptivePromptResponse("feeling_intensity", "How strong is this feeling right now?", 6),
            ),
            total_prompts=4,
            completion_rate=25.0,
        )

        aggregator.record_feature_completion(session, FeatureId.PROMPTS, result)

        assert len(session.prompt_responses) == 1
        assert session.prompt_completion_rate == 25.0


class TestAutoAdvance:
    """Tests for the suggested next feature."""

    def test_young_child_mood_suggests_colors(self, aggregator):
        session = make_session(6)

        completion = aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("happy", age=6)
        )

        assert completion.suggested_next_feature == FeatureId.COLORS

    def test_older_child_mood_suggests_nothing(self, aggregator):
        session = make_session(8)

        completion = aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("happy", age=8)
        )

        assert completion.suggested_next_feature is None

    def test_other_features_never_suggest(self, aggregator):
        session = make_session(5)

        completion = aggregator.record_feature_completion(
            session, FeatureId.COLORS, ColorSelection.from_ids(["blue"], max_selections=3)
        )

        assert completion.suggested_next_feature is None

    def test_suggestion_follows_profile_flag(self, aggregator, resolver):
        """The profile's auto_advance flag decides, not the raw age."""
        session = make_session(6)
        profile = replace(resolver.resolve(6), auto_advance=False)

        completion = aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("happy", age=6), profile=profile
        )

        assert completion.suggested_next_feature is None


class TestApplyProfileCaps:
    """Tests for refitting recorded selections to a new profile."""

    def test_caps_lowered(self, aggregator, resolver):
        session = make_session(14)
        session.colors = ColorSelection.from_ids(["yellow", "blue", "green", "pink"], max_selections=8)
        session.safe_space = SafeSpaceSelection.from_ids(
            ["bed", "chair", "desk", "lamp", "books", "art", "plant"], max_items=8
        )

        aggregator.apply_profile_caps(session, resolver.resolve(5))

        assert session.colors.color_ids == ["yellow", "blue", "green"]
        assert session.colors.max_selections == 3
        assert len(session.safe_space.item_ids) == 6
        assert session.safe_space.max_items == 6

    def test_nothing_recorded_is_untouched(self, aggregator, resolver):
        session = make_session(14)

        aggregator.apply_profile_caps(session, resolver.resolve(5))

        assert session.colors is None
        assert session.safe_space is None
