"""
Mood Entry Domain Model

Historical record of one check-in, the unit consumed by trend,
alert, report and observation builders.

CLINICAL_REVIEW_REQUIRED: How triggers, coping strategies and the
support flag are read out of prompt answers, and the severity flag
rules, need review by the care team.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from bloom.domain.enums.clinical import EntrySeverity
from bloom.domain.models.catalog import CONCERNING_MOODS
from bloom.domain.models.selections import (
    MAX_INTENSITY,
    MIN_INTENSITY,
    AdaptivePromptResponse,
    ExpressionRecord,
)
from bloom.domain.models.session import CheckInSession
from bloom.domain.timeutils import utc_now

# Prompt answers read into entry fields
COPING_PROMPT_IDS: frozenset[str] = frozenset({"coping_strategy", "sad_support", "anger_management"})
TRIGGER_PROMPT_IDS: frozenset[str] = frozenset({"trigger_reflection", "worry_thoughts"})
SUPPORT_PROMPT_ID = "support_need"
SUPPORT_REQUEST_ANSWER = "Yes, right now"

LOW_INTENSITY_MAX = 3


@dataclass(frozen=True)
class ClinicalFlags:
    """
    Severity flag for a single entry.

    Attributes:
        severity: Low, medium or high
        requires_follow_up: Whether someone should check in with the child
        notes: Optional reviewer notes
    """

    severity: EntrySeverity
    requires_follow_up: bool
    notes: Optional[str] = None

    @classmethod
    def derive(
        cls,
        mood: str,
        intensity: int,
        support_needed: Optional[bool],
    ) -> "ClinicalFlags":
        """
        Flag an entry from its mood, intensity and support request.

        High when a concerning mood comes with low intensity,
        medium when only one of those holds, low otherwise.
        """
        concerning = mood in CONCERNING_MOODS
        low = intensity <= LOW_INTENSITY_MAX

        if concerning and low:
            severity = EntrySeverity.HIGH
        elif concerning or low:
            severity = EntrySeverity.MEDIUM
        else:
            severity = EntrySeverity.LOW

        return cls(
            severity=severity,
            requires_follow_up=severity == EntrySeverity.HIGH or bool(support_needed),
        )

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "requires_follow_up": self.requires_follow_up,
            "notes": self.notes,
        }


@dataclass
class MoodEntry:
    """
    One historical mood check-in.

    Attributes:
        id: Entry identifier
        patient_id: Child the entry belongs to
        timestamp: When the mood was recorded (UTC)
        mood: Primary mood id
        intensity: Intensity 1-10
        secondary_moods: Other moods named alongside the primary one
        colors: Selected color ids
        expression: Creative expression, if any
        safe_space_items: Safe-space item ids
        safe_space_description: Summary of the safe space
        adaptive_responses: Walkthrough answers
        triggers: What the child said caused the feeling
        coping_strategies: What the child said helps
        support_needed: Whether the child asked to talk to someone now
        guardian_notified: Whether a guardian has been told
        clinical_flags: Severity flag
    """

    patient_id: str
    mood: str
    intensity: int
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=utc_now)
    secondary_moods: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    expression: Optional[ExpressionRecord] = None
    safe_space_items: list[str] = field(default_factory=list)
    safe_space_description: Optional[str] = None
    adaptive_responses: list[AdaptivePromptResponse] = field(default_factory=list)
    triggers: Optional[list[str]] = None
    coping_strategies: Optional[list[str]] = None
    support_needed: Optional[bool] = None
    guardian_notified: bool = False
    clinical_flags: Optional[ClinicalFlags] = None

    def __post_init__(self) -> None:
        if not MIN_INTENSITY <= self.intensity <= MAX_INTENSITY:
            raise ValueError(
                f"Intensity must be {MIN_INTENSITY}-{MAX_INTENSITY}, got {self.intensity}"
            )

    @property
    def is_concerning(self) -> bool:
        return self.mood in CONCERNING_MOODS

    @classmethod
    def from_session(cls, session: CheckInSession) -> "MoodEntry":
        """
        Build a history entry from a session with a recorded mood.

        Raises:
            ValueError: If the session has no mood yet
        """
        if session.mood is None:
            raise ValueError(f"Session {session.id} has no mood to summarize")

        responses = list(session.prompt_responses)
        coping = [
            str(r.response_value) for r in responses
            if r.prompt_id in COPING_PROMPT_IDS
        ]
        triggers = [
            str(r.response_value).strip() for r in responses
            if r.prompt_id in TRIGGER_PROMPT_IDS and str(r.response_value).strip()
        ]
        support_answers = [r for r in responses if r.prompt_id == SUPPORT_PROMPT_ID]
        support_needed = (
            support_answers[-1].response_value == SUPPORT_REQUEST_ANSWER
            if support_answers else None
        )

        return cls(
            patient_id=session.patient_id,
            mood=session.mood.mood_id,
            intensity=session.mood.intensity,
            timestamp=session.mood.timestamp,
            colors=list(session.colors.color_ids) if session.colors else [],
            expression=session.expression,
            safe_space_items=list(session.safe_space.item_ids) if session.safe_space else [],
            safe_space_description=session.safe_space.description if session.safe_space else None,
            adaptive_responses=responses,
            triggers=triggers or None,
            coping_strategies=coping or None,
            support_needed=support_needed,
            clinical_flags=ClinicalFlags.derive(
                session.mood.mood_id,
                session.mood.intensity,
                support_needed,
            ),
        )

    def to_dict(self) -> dict:
        """Serialize entry to dictionary."""
        return {
            "id": str(self.id),
            "patient_id": self.patient_id,
            "timestamp": self.timestamp.isoformat(),
            "mood": {
                "primary": self.mood,
                "intensity": self.intensity,
                "secondary": self.secondary_moods,
            },
            "colors": self.colors,
            "expression": self.expression.to_dict() if self.expression else None,
            "safe_space": {
                "items": self.safe_space_items,
                "description": self.safe_space_description,
            } if self.safe_space_items else None,
            "adaptive_responses": [r.to_dict() for r in self.adaptive_responses],
            "triggers": self.triggers,
            "coping_strategies": self.coping_strategies,
            "support_needed": self.support_needed,
            "guardian_notified": self.guardian_notified,
            "clinical_flags": self.clinical_flags.to_dict() if self.clinical_flags else None,
        }
