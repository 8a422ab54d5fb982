"""
Check-In Selection Models

Per-feature payloads a child produces during a check-in: a mood,
color clouds, a creative expression and a safe space.

Caps on colors and safe-space items are soft: adding past the cap
is ignored, never an error.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from bloom.domain.enums.checkin import ExpressionMode, ExpressionType, SpaceCategory
from bloom.domain.models.catalog import get_color, get_mood, get_space_item
from bloom.domain.timeutils import utc_now

# Ages at or below this auto-finalize mood with the catalog intensity
AUTO_FINALIZE_MAX_AGE = 7

MIN_INTENSITY = 1
MAX_INTENSITY = 10


@dataclass(frozen=True)
class MoodSelection:
    """
    A recorded mood. Immutable once created.

    Attributes:
        mood_id: Catalog mood id
        intensity: Intensity on a 1-10 scale
        timestamp: When the mood was picked (UTC)
        auto_finalized: True when recorded without a confirm step
    """

    mood_id: str
    intensity: int
    timestamp: datetime = field(default_factory=utc_now)
    auto_finalized: bool = False

    def __post_init__(self) -> None:
        """Validate against the mood catalog and intensity scale."""
        get_mood(self.mood_id)
        if isinstance(self.intensity, bool) or not isinstance(self.intensity, int):
            raise ValueError(f"Intensity must be an integer, got {self.intensity!r}")
        if not MIN_INTENSITY <= self.intensity <= MAX_INTENSITY:
            raise ValueError(
                f"Intensity must be {MIN_INTENSITY}-{MAX_INTENSITY}, got {self.intensity}"
            )

    @classmethod
    def create(
        cls,
        mood_id: str,
        age: int,
        intensity: Optional[int] = None,
        timestamp: Optional[datetime] = None,
    ) -> "MoodSelection":
        """
        Record a mood the way the selector does for the given age.

        Young children never see the intensity slider, so their mood
        takes the catalog intensity and finalizes immediately. Older
        children start from the catalog intensity and may adjust it.
        """
        mood = get_mood(mood_id)
        auto_finalized = age <= AUTO_FINALIZE_MAX_AGE
        if auto_finalized or intensity is None:
            intensity = mood.default_intensity

        return cls(
            mood_id=mood_id,
            intensity=intensity,
            timestamp=timestamp or utc_now(),
            auto_finalized=auto_finalized,
        )

    @property
    def label(self) -> str:
        return get_mood(self.mood_id).label

    def to_dict(self) -> dict:
        return {
            "mood": self.mood_id,
            "label": self.label,
            "intensity": self.intensity,
            "timestamp": self.timestamp.isoformat(),
            "auto_finalized": self.auto_finalized,
        }


@dataclass
class ColorSelection:
    """
    Ordered, distinct color clouds, capped at max_selections.

    Attributes:
        max_selections: Cap taken from the age profile
        color_ids: Selected color ids in pick order
        timestamp: Last change (UTC)
    """

    max_selections: int
    color_ids: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.max_selections < 1:
            raise ValueError(f"max_selections must be positive, got {self.max_selections}")
        picked, timestamp = list(self.color_ids), self.timestamp
        self.color_ids = []
        for color_id in picked:
            self.add(color_id)
        self.timestamp = timestamp

    @classmethod
    def from_ids(cls, color_ids: Iterable[str], max_selections: int) -> "ColorSelection":
        """Build a selection, silently dropping duplicates and picks past the cap."""
        return cls(max_selections=max_selections, color_ids=list(color_ids))

    def add(self, color_id: str) -> bool:
        """
        Add a color.

        Returns:
            True if added; False if already selected or the cap is reached
        """
        get_color(color_id)
        if color_id in self.color_ids or self.is_full:
            return False
        self.color_ids.append(color_id)
        self.timestamp = utc_now()
        return True

    def remove(self, color_id: str) -> bool:
        """Remove a color. Returns True if it was selected."""
        if color_id not in self.color_ids:
            return False
        self.color_ids.remove(color_id)
        self.timestamp = utc_now()
        return True

    def toggle(self, color_id: str) -> bool:
        """Select or deselect a color. Returns whether it is now selected."""
        if self.remove(color_id):
            return False
        return self.add(color_id)

    @property
    def is_full(self) -> bool:
        return len(self.color_ids) >= self.max_selections

    @property
    def derived_emotions(self) -> list[str]:
        """Emotion labels, one per selected color."""
        return [get_color(color_id).emotion for color_id in self.color_ids]

    def to_dict(self) -> dict:
        return {
            "colors": list(self.color_ids),
            "emotions": self.derived_emotions,
            "max_selections": self.max_selections,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ExpressionRecord:
    """
    A creative expression. Use a concrete variant below.

    Attributes:
        expression_type: Variant tag
        mode: Expression mode that produced the record
        data: Reference to the stored drawing, photo, clip or text
        timestamp: When the expression was captured (UTC)
    """

    expression_type: ExpressionType
    mode: ExpressionMode
    data: str
    timestamp: datetime = field(default_factory=utc_now)

    @staticmethod
    def create(
        mode: ExpressionMode,
        data: str,
        duration_seconds: Optional[float] = None,
        timestamp: Optional[datetime] = None,
    ) -> "ExpressionRecord":
        """Build the record variant that matches the mode."""
        timestamp = timestamp or utc_now()
        if mode == ExpressionMode.DRAW:
            return DrawingExpression(data=data, timestamp=timestamp)
        if mode == ExpressionMode.PHOTO:
            return PhotoExpression(data=data, timestamp=timestamp)
        if mode == ExpressionMode.VOICE:
            if duration_seconds is None:
                raise ValueError("Voice expressions require duration_seconds")
            return VoiceExpression(data=data, duration_seconds=duration_seconds, timestamp=timestamp)
        return TextExpression(data=data, timestamp=timestamp)

    def to_dict(self) -> dict:
        return {
            "type": self.expression_type.value,
            "mode": self.mode.value,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class DrawingExpression(ExpressionRecord):
    expression_type: ExpressionType = ExpressionType.DRAWING
    mode: ExpressionMode = ExpressionMode.DRAW
    data: str = ""


@dataclass(frozen=True)
class PhotoExpression(ExpressionRecord):
    expression_type: ExpressionType = ExpressionType.PHOTO
    mode: ExpressionMode = ExpressionMode.PHOTO
    data: str = ""


@dataclass(frozen=True)
class TextExpression(ExpressionRecord):
    expression_type: ExpressionType = ExpressionType.TEXT
    mode: ExpressionMode = ExpressionMode.WRITE
    data: str = ""


@dataclass(frozen=True)
class VoiceExpression(ExpressionRecord):
    """Voice note with its clip duration."""

    expression_type: ExpressionType = ExpressionType.VOICE
    mode: ExpressionMode = ExpressionMode.VOICE
    data: str = ""
    duration_seconds: float = 0.0

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError(f"Duration must be non-negative, got {self.duration_seconds}")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["duration_seconds"] = self.duration_seconds
        return data


# Safe-space caps by age
SPACE_ITEMS_YOUNG_MAX = 6
SPACE_ITEMS_TEEN_MAX = 8
SPACE_YOUNG_MAX_AGE = 12

_CATEGORY_PHRASES: dict[SpaceCategory, str] = {
    SpaceCategory.FURNITURE: "comfortable furniture",
    SpaceCategory.DECORATION: "beautiful decorations",
    SpaceCategory.NATURE: "natural elements",
    SpaceCategory.COMFORT: "cozy comfort items",
}


def max_space_items_for_age(age: int) -> int:
    """Safe-space item cap for an age."""
    return SPACE_ITEMS_YOUNG_MAX if age <= SPACE_YOUNG_MAX_AGE else SPACE_ITEMS_TEEN_MAX


@dataclass
class SafeSpaceSelection:
    """
    Ordered, distinct safe-space items, capped at max_items.

    Attributes:
        max_items: Cap for the child's age
        item_ids: Selected item ids in pick order
        timestamp: Last change (UTC)
    """

    max_items: int
    item_ids: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.max_items < 1:
            raise ValueError(f"max_items must be positive, got {self.max_items}")
        picked, timestamp = list(self.item_ids), self.timestamp
        self.item_ids = []
        for item_id in picked:
            self.add(item_id)
        self.timestamp = timestamp

    @classmethod
    def from_ids(cls, item_ids: Iterable[str], max_items: int) -> "SafeSpaceSelection":
        """Build a selection, silently dropping duplicates and picks past the cap."""
        return cls(max_items=max_items, item_ids=list(item_ids))

    def add(self, item_id: str) -> bool:
        """Add an item. Returns False if already present or the cap is reached."""
        get_space_item(item_id)
        if item_id in self.item_ids or len(self.item_ids) >= self.max_items:
            return False
        self.item_ids.append(item_id)
        self.timestamp = utc_now()
        return True

    def remove(self, item_id: str) -> bool:
        """Remove an item. Returns True if it was selected."""
        if item_id not in self.item_ids:
            return False
        self.item_ids.remove(item_id)
        self.timestamp = utc_now()
        return True

    def toggle(self, item_id: str) -> bool:
        """Select or deselect an item. Returns whether it is now selected."""
        if self.remove(item_id):
            return False
        return self.add(item_id)

    @property
    def categories(self) -> dict[str, SpaceCategory]:
        """Category of each selected item, keyed by item id."""
        return {item_id: get_space_item(item_id).category for item_id in self.item_ids}

    @property
    def description(self) -> str:
        """Readable summary of which categories the space contains."""
        present = set(self.categories.values())
        parts = [phrase for category, phrase in _CATEGORY_PHRASES.items() if category in present]
        return "A safe space with " + ", ".join(parts)

    def to_dict(self) -> dict:
        return {
            "items": list(self.item_ids),
            "categories": {k: v.value for k, v in self.categories.items()},
            "description": self.description,
            "max_items": self.max_items,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class AdaptivePromptResponse:
    """
    One committed answer in the prompt walkthrough.

    Attributes:
        prompt_id: Prompt answered
        question: Question text as shown
        response_value: Free text, choice text or 1-10 scale value
        timestamp: When the answer was committed (UTC)
    """

    prompt_id: str
    question: str
    response_value: str | int
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "prompt_id": self.prompt_id,
            "question": self.question,
            "response": self.response_value,
            "timestamp": self.timestamp.isoformat(),
        }
