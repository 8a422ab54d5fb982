"""
Check-In Catalogs

Fixed, read-only tables of moods, color clouds, safe-space items and
expression modes. Loaded once at import and never mutated.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from bloom.domain.enums.checkin import ExpressionMode, SpaceCategory
from bloom.domain.exceptions import UnknownCatalogItemError


@dataclass(frozen=True)
class MoodOption:
    """A selectable mood with its default intensity (1-10)."""

    id: str
    label: str
    emoji: str
    default_intensity: int


@dataclass(frozen=True)
class ColorCloud:
    """A color cloud and the emotion it stands for."""

    id: str
    hex_color: str
    emotion: str
    description: str


@dataclass(frozen=True)
class SpaceItem:
    """An item that can be placed in a safe space."""

    id: str
    name: str
    emoji: str
    category: SpaceCategory


@dataclass(frozen=True)
class ExpressionModeInfo:
    """Display metadata for an expression mode."""

    mode: ExpressionMode
    title: str
    description: str


def _index(items: tuple) -> Mapping:
    return MappingProxyType({item.id: item for item in items})


MOODS: Mapping[str, MoodOption] = _index((
    MoodOption("happy", "Happy", "\U0001F60A", 8),
    MoodOption("excited", "Excited", "\U0001F929", 9),
    MoodOption("calm", "Calm", "\U0001F60C", 6),
    MoodOption("sad", "Sad", "\U0001F622", 3),
    MoodOption("angry", "Angry", "\U0001F620", 2),
    MoodOption("worried", "Worried", "\U0001F630", 4),
    MoodOption("tired", "Tired", "\U0001F634", 5),
    MoodOption("confused", "Confused", "\U0001F615", 4),
))

COLOR_CLOUDS: Mapping[str, ColorCloud] = _index((
    ColorCloud("yellow", "#FEF08A", "Happy", "Sunshine and joy"),
    ColorCloud("blue", "#93C5FD", "Calm", "Peaceful like the sky"),
    ColorCloud("green", "#86EFAC", "Fresh", "Growing and new"),
    ColorCloud("purple", "#C4B5FD", "Creative", "Imaginative and dreamy"),
    ColorCloud("pink", "#F9A8D4", "Loving", "Warm and caring"),
    ColorCloud("orange", "#FDBA74", "Energetic", "Full of energy"),
    ColorCloud("red", "#FCA5A5", "Strong", "Powerful feelings"),
    ColorCloud("gray", "#D1D5DB", "Quiet", "Peaceful and still"),
))

SPACE_ITEMS: Mapping[str, SpaceItem] = _index((
    SpaceItem("bed", "Cozy Bed", "\U0001F6CF", SpaceCategory.FURNITURE),
    SpaceItem("chair", "Comfy Chair", "\U0001FA91", SpaceCategory.FURNITURE),
    SpaceItem("desk", "Study Desk", "\U0001FA91", SpaceCategory.FURNITURE),
    SpaceItem("lamp", "Warm Light", "\U0001F4A1", SpaceCategory.DECORATION),
    SpaceItem("books", "Favorite Books", "\U0001F4DA", SpaceCategory.DECORATION),
    SpaceItem("art", "Pretty Picture", "\U0001F5BC", SpaceCategory.DECORATION),
    SpaceItem("plant", "Green Plant", "\U0001FAB4", SpaceCategory.NATURE),
    SpaceItem("flowers", "Flowers", "\U0001F338", SpaceCategory.NATURE),
    SpaceItem("tree", "Big Tree", "\U0001F333", SpaceCategory.NATURE),
    SpaceItem("pillow", "Soft Pillows", "\U0001F6CB", SpaceCategory.COMFORT),
    SpaceItem("blanket", "Warm Blanket", "\U0001F9F8", SpaceCategory.COMFORT),
    SpaceItem("toy", "Favorite Toy", "\U0001F9F8", SpaceCategory.COMFORT),
))

EXPRESSION_MODES: Mapping[ExpressionMode, ExpressionModeInfo] = MappingProxyType({
    ExpressionMode.DRAW: ExpressionModeInfo(ExpressionMode.DRAW, "Draw It", "Draw how you feel"),
    ExpressionMode.PHOTO: ExpressionModeInfo(
        ExpressionMode.PHOTO, "Photo Story", "Take a picture that shows your mood"
    ),
    ExpressionMode.VOICE: ExpressionModeInfo(ExpressionMode.VOICE, "Voice Note", "Record how you feel"),
    ExpressionMode.WRITE: ExpressionModeInfo(ExpressionMode.WRITE, "Write It", "Write about your feelings"),
})

# Moods that count towards the concerning-mood alert
CONCERNING_MOODS: frozenset[str] = frozenset({"sad", "angry", "worried"})


def get_mood(mood_id: str) -> MoodOption:
    """Look up a mood or raise UnknownCatalogItemError."""
    try:
        return MOODS[mood_id]
    except KeyError:
        raise UnknownCatalogItemError("mood", mood_id) from None


def get_color(color_id: str) -> ColorCloud:
    """Look up a color cloud or raise UnknownCatalogItemError."""
    try:
        return COLOR_CLOUDS[color_id]
    except KeyError:
        raise UnknownCatalogItemError("color", color_id) from None


def get_space_item(item_id: str) -> SpaceItem:
    """Look up a safe-space item or raise UnknownCatalogItemError."""
    try:
        return SPACE_ITEMS[item_id]
    except KeyError:
        raise UnknownCatalogItemError("space item", item_id) from None


def expression_modes_for_age(age: int) -> list[ExpressionModeInfo]:
    """Expression modes offered at the given age, in display order."""
    return [info for mode, info in EXPRESSION_MODES.items() if age >= mode.min_age]
