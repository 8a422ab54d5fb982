"""
Unit Tests for Check-In Selections

Tests mood defaults, selection caps, expression variants and the
safe-space description.
"""

import pytest

from bloom.domain.enums.checkin import ExpressionMode, ExpressionType, SpaceCategory
from bloom.domain.exceptions import UnknownCatalogItemError
from bloom.domain.models.catalog import expression_modes_for_age
from bloom.domain.models.selections import (
    ColorSelection,
    ExpressionRecord,
    MoodSelection,
    SafeSpaceSelection,
    VoiceExpression,
    max_space_items_for_age,
)


class TestMoodSelection:
    """Tests for mood recording."""

    def test_young_child_gets_catalog_intensity(self):
        """Ages 7 and under ignore the given intensity."""
        mood = MoodSelection.create("happy", age=6, intensity=2)

        assert mood.intensity == 8
        assert mood.auto_finalized is True

    def test_older_child_keeps_chosen_intensity(self):
        mood = MoodSelection.create("sad", age=10, intensity=7)

        assert mood.intensity == 7
        assert mood.auto_finalized is False

    def test_older_child_without_intensity_gets_default(self):
        assert MoodSelection.create("angry", age=14).intensity == 2

    def test_unknown_mood_rejected(self):
        with pytest.raises(UnknownCatalogItemError):
            MoodSelection.create("grumpy", age=10)

    @pytest.mark.parametrize("intensity", [0, 11])
    def test_out_of_range_intensity_rejected(self, intensity):
        with pytest.raises(ValueError):
            MoodSelection(mood_id="calm", intensity=intensity)

    def test_mood_is_immutable(self):
        mood = MoodSelection.create("calm", age=10)

        with pytest.raises(AttributeError):
            mood.intensity = 3


class TestColorSelection:
    """Tests for the color cap."""

    def test_cap_never_exceeded(self):
        """Repeated adds past the cap are ignored."""
        selection = ColorSelection(max_selections=3)

        for color in ["yellow", "blue", "green", "purple", "pink", "red"]:
            selection.add(color)

        assert selection.color_ids == ["yellow", "blue", "green"]
        assert selection.is_full

    def test_add_past_cap_returns_false(self):
        selection = ColorSelection.from_ids(["yellow", "blue", "green"], max_selections=3)

        assert selection.add("purple") is False

    def test_duplicates_dropped(self):
        selection = ColorSelection.from_ids(["blue", "blue", "gray"], max_selections=5)

        assert selection.color_ids == ["blue", "gray"]

    def test_toggle_removes_selected_color(self):
        selection = ColorSelection.from_ids(["blue", "gray"], max_selections=5)

        assert selection.toggle("blue") is False
        assert selection.color_ids == ["gray"]
        assert selection.toggle("blue") is True

    def test_derived_emotions_map_one_to_one(self):
        selection = ColorSelection.from_ids(["yellow", "gray"], max_selections=3)

        assert selection.derived_emotions == ["Happy", "Quiet"]

    def test_unknown_color_rejected(self):
        with pytest.raises(UnknownCatalogItemError):
            ColorSelection.from_ids(["teal"], max_selections=3)


class TestExpressionRecord:
    """Tests for expression variants."""

    @pytest.mark.parametrize("mode", list(ExpressionMode))
    def test_variant_matches_mode(self, mode):
        record = ExpressionRecord.create(mode, "ref://1", duration_seconds=3.0)

        assert record.mode == mode
        assert record.expression_type == mode.record_type

    def test_drawing_serializes_type(self):
        record = ExpressionRecord.create(ExpressionMode.DRAW, "drawing://1")

        assert record.to_dict()["type"] == "drawing"

    def test_voice_carries_duration(self):
        record = ExpressionRecord.create(ExpressionMode.VOICE, "audio://1", duration_seconds=12.5)

        assert isinstance(record, VoiceExpression)
        assert record.to_dict()["duration_seconds"] == 12.5

    def test_voice_requires_duration(self):
        with pytest.raises(ValueError):
            ExpressionRecord.create(ExpressionMode.VOICE, "audio://1")

    def test_write_produces_text(self):
        record = ExpressionRecord.create(ExpressionMode.WRITE, "I had a long day")

        assert record.expression_type == ExpressionType.TEXT

    @pytest.mark.parametrize(
        "age,modes",
        [
            (7, []),
            (8, [ExpressionMode.DRAW]),
            (11, [ExpressionMode.DRAW, ExpressionMode.PHOTO]),
            (13, list(ExpressionMode)),
        ],
    )
    def test_modes_offered_by_age(self, age, modes):
        assert [info.mode for info in expression_modes_for_age(age)] == modes


class TestSafeSpaceSelection:
    """Tests for the safe-space builder."""

    def test_cap_by_age(self):
        assert max_space_items_for_age(9) == 6
        assert max_space_items_for_age(14) == 8

    def test_cap_never_exceeded(self):
        items = ["bed", "chair", "desk", "lamp", "books", "art", "plant", "flowers"]
        selection = SafeSpaceSelection.from_ids(items, max_items=6)

        assert len(selection.item_ids) == 6

    def test_categories_tagged(self):
        selection = SafeSpaceSelection.from_ids(["bed", "plant"], max_items=6)

        assert selection.categories == {
            "bed": SpaceCategory.FURNITURE,
            "plant": SpaceCategory.NATURE,
        }

    def test_description_lists_present_categories(self):
        selection = SafeSpaceSelection.from_ids(["blanket", "bed", "tree"], max_items=6)

        assert selection.description == (
            "A safe space with comfortable furniture, natural elements, cozy comfort items"
        )
