"""
Check-In Session Domain Model

The aggregate root of one emotion check-in. Feature payloads are
merged in by the session aggregator as each activity completes.

PRIVACY: Sessions hold a child's free-text answers and expression
references. Share only with authorized guardians and care teams.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from bloom.domain.enums.checkin import CheckInState, FeatureId
from bloom.domain.models.selections import (
    AdaptivePromptResponse,
    ColorSelection,
    ExpressionRecord,
    MoodSelection,
    SafeSpaceSelection,
)
from bloom.domain.timeutils import utc_now


@dataclass
class CheckInSession:
    """
    One check-in's accumulated state across features.

    Attributes:
        id: Unique session identifier
        patient_id: Child the session belongs to
        age_at_session: Age the session was started (or last re-profiled) at
        state: Lifecycle state
        start_time: Session start (UTC)
        end_time: Set when completed or abandoned
        completed_features: Features that reported completion
        mood: Recorded mood, if any
        colors: Recorded color clouds, if any
        expression: Recorded creative expression, if any
        safe_space: Recorded safe space, if any
        prompt_responses: Committed walkthrough answers in order
        prompt_completion_rate: Walkthrough completion percentage, if finished
        notes: Free-form session notes
    """

    id: UUID = field(default_factory=uuid4)
    patient_id: str = ""
    age_at_session: int = 8
    state: CheckInState = CheckInState.ACTIVE
    start_time: datetime = field(default_factory=utc_now)
    end_time: Optional[datetime] = None
    completed_features: set[FeatureId] = field(default_factory=set)

    mood: Optional[MoodSelection] = None
    colors: Optional[ColorSelection] = None
    expression: Optional[ExpressionRecord] = None
    safe_space: Optional[SafeSpaceSelection] = None
    prompt_responses: list[AdaptivePromptResponse] = field(default_factory=list)
    prompt_completion_rate: Optional[float] = None

    notes: Optional[str] = None

    @property
    def is_closed(self) -> bool:
        """Check whether the session has ended."""
        return self.state != CheckInState.ACTIVE

    @property
    def is_summarizable(self) -> bool:
        """A session can be summarized once a mood is recorded."""
        return self.mood is not None

    @property
    def duration_seconds(self) -> int:
        """Session duration in seconds."""
        end = self.end_time or utc_now()
        return int((end - self.start_time).total_seconds())

    def complete(self, notes: Optional[str] = None) -> None:
        """
        Mark session as completed.

        Args:
            notes: Optional session notes
        """
        self.state = CheckInState.COMPLETED
        self.end_time = utc_now()
        if notes:
            self.notes = notes

    def abandon(self) -> None:
        """Mark session as abandoned before finishing."""
        self.state = CheckInState.ABANDONED
        self.end_time = utc_now()

    def to_dict(self) -> dict:
        """Serialize session to dictionary."""
        return {
            "id": str(self.id),
            "patient_id": self.patient_id,
            "age_at_session": self.age_at_session,
            "state": self.state.value,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "completed_features": [f.value for f in FeatureId if f in self.completed_features],
            "mood": self.mood.to_dict() if self.mood else None,
            "colors": self.colors.to_dict() if self.colors else None,
            "expression": self.expression.to_dict() if self.expression else None,
            "safe_space": self.safe_space.to_dict() if self.safe_space else None,
            "prompt_responses": [r.to_dict() for r in self.prompt_responses],
            "prompt_completion_rate": self.prompt_completion_rate,
            "duration_seconds": self.duration_seconds,
            "summarizable": self.is_summarizable,
        }
