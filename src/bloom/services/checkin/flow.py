"""
Check-In Flow

Flow controller for one check-in: owns the session, the child's
current age profile, the active feature and the prompt walkthrough.

ARCHITECTURE: Orchestrates the resolver, aggregator and prompt
engine. Acts on the aggregator's suggested next feature; the
aggregator itself never changes the active feature.
"""

from typing import Iterable, Optional
from uuid import UUID

from bloom.domain.enums.checkin import ExpressionMode, FeatureId
from bloom.domain.exceptions import FeatureNotAvailableError, SessionClosedError
from bloom.domain.models.age_profile import AgeProfile
from bloom.domain.models.mood_entry import MoodEntry
from bloom.domain.models.selections import (
    ColorSelection,
    ExpressionRecord,
    MoodSelection,
    SafeSpaceSelection,
)
from bloom.domain.models.session import CheckInSession
from bloom.services.checkin.age_profile_resolver import AgeProfileResolver
from bloom.services.checkin.prompt_engine import (
    AdaptivePromptEngine,
    PromptWalkthrough,
    ResponseValue,
)
from bloom.services.checkin.session_aggregator import (
    FeatureCompletion,
    FeaturePayload,
    SessionAggregator,
)
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)


class CheckInFlow:
    """
    Drives one check-in from first mood to completion.

    Usage:
        flow = CheckInFlow.start("patient-1", age=6)
        flow.record_mood("happy")
        flow.active_feature  # FeatureId.COLORS
        flow.record_colors(["yellow", "blue"])
        entry = flow.complete()
    """

    def __init__(
        self,
        session: CheckInSession,
        resolver: Optional[AgeProfileResolver] = None,
        aggregator: Optional[SessionAggregator] = None,
        prompt_engine: Optional[AdaptivePromptEngine] = None,
    ) -> None:
        """
        Initialize flow around an existing session.

        Args:
            session: Session the flow owns
            resolver: Age profile resolver
            aggregator: Session aggregator
            prompt_engine: Adaptive prompt engine
        """
        self._resolver = resolver or AgeProfileResolver()
        self._aggregator = aggregator or SessionAggregator(self._resolver)
        self._prompt_engine = prompt_engine or AdaptivePromptEngine()

        self._session = session
        self._profile = self._resolver.resolve(session.age_at_session)
        self._session.age_at_session = self._profile.age_years
        self._active_feature = FeatureId.MOOD
        self._walkthrough: Optional[PromptWalkthrough] = None

    @classmethod
    def start(
        cls,
        patient_id: str,
        age: int,
        resolver: Optional[AgeProfileResolver] = None,
    ) -> "CheckInFlow":
        """Start a new check-in for a child."""
        flow = cls(CheckInSession(patient_id=patient_id, age_at_session=age), resolver=resolver)
        logger.info(
            "Check-in started",
            session_id=str(flow.session_id),
            age=flow.profile.age_years,
            age_range=flow.profile.age_range,
        )
        return flow

    @property
    def session(self) -> CheckInSession:
        return self._session

    @property
    def session_id(self) -> UUID:
        return self._session.id

    @property
    def profile(self) -> AgeProfile:
        return self._profile

    @property
    def active_feature(self) -> FeatureId:
        return self._active_feature

    @property
    def walkthrough(self) -> Optional[PromptWalkthrough]:
        return self._walkthrough

    def set_age(self, age: int) -> AgeProfile:
        """
        Change the child's age mid-session.

        The profile is re-resolved. If the active feature is no longer
        offered the flow falls back to mood. Recorded colors and
        safe-space items are cut to the new caps.
        """
        self._ensure_open()
        self._profile = self._resolver.resolve(age)
        self._session.age_at_session = self._profile.age_years
        self._aggregator.apply_profile_caps(self._session, self._profile)

        if not self._profile.allows(self._active_feature):
            logger.info(
                "Active feature unavailable after age change",
                session_id=str(self.session_id),
                feature=self._active_feature.value,
                age=self._profile.age_years,
            )
            self._active_feature = FeatureId.MOOD

        if not self._profile.allows(FeatureId.PROMPTS):
            self._walkthrough = None

        return self._profile

    def select_feature(self, feature_id: FeatureId) -> FeatureId:
        """
        Switch the active feature.

        Raises:
            FeatureNotAvailableError: Feature not offered at this age
        """
        self._ensure_open()
        feature_id = FeatureId(feature_id)
        if not self._profile.allows(feature_id):
            raise FeatureNotAvailableError(feature_id.value, self._profile.age_years)
        self._active_feature = feature_id
        return feature_id

    def record(self, feature_id: FeatureId, payload: FeaturePayload = None) -> FeatureCompletion:
        """Record a feature payload and act on any suggested next feature."""
        completion = self._aggregator.record_feature_completion(
            self._session,
            feature_id,
            payload,
            profile=self._profile,
        )
        if completion.suggested_next_feature is not None:
            self._active_feature = completion.suggested_next_feature
        return completion

    def record_mood(self, mood_id: str, intensity: Optional[int] = None) -> FeatureCompletion:
        """Record the child's mood. Resets an unfinished walkthrough."""
        self._ensure_open()
        selection = MoodSelection.create(mood_id, age=self._profile.age_years, intensity=intensity)
        completion = self.record(FeatureId.MOOD, selection)
        if self._walkthrough is not None and not self._walkthrough.is_completed:
            self._walkthrough = None
        return completion

    def record_colors(self, color_ids: Iterable[str]) -> FeatureCompletion:
        self._ensure_open()
        selection = ColorSelection.from_ids(color_ids, self._profile.max_color_selections)
        return self.record(FeatureId.COLORS, selection)

    def record_expression(
        self,
        mode: ExpressionMode,
        data: str,
        duration_seconds: Optional[float] = None,
    ) -> FeatureCompletion:
        self._ensure_open()
        record = ExpressionRecord.create(ExpressionMode(mode), data, duration_seconds)
        return self.record(FeatureId.EXPRESS, record)

    def record_safe_space(self, item_ids: Iterable[str]) -> FeatureCompletion:
        self._ensure_open()
        selection = SafeSpaceSelection.from_ids(item_ids, self._profile.max_space_items)
        return self.record(FeatureId.SPACE, selection)

    def record_journal(self) -> FeatureCompletion:
        return self.record(FeatureId.JOURNAL)

    def start_prompts(self) -> PromptWalkthrough:
        """
        Open the prompt walkthrough, reusing one already in progress.

        Raises:
            FeatureNotAvailableError: Prompts not offered at this age
        """
        self._ensure_open()
        if not self._profile.allows(FeatureId.PROMPTS):
            raise FeatureNotAvailableError(FeatureId.PROMPTS.value, self._profile.age_years)

        if self._walkthrough is None:
            self._walkthrough = self._prompt_engine.start_walkthrough(self._session)
        self._active_feature = FeatureId.PROMPTS
        return self._walkthrough

    def answer_prompt(self, value: Optional[ResponseValue]) -> PromptWalkthrough:
        walkthrough = self.start_prompts()
        walkthrough.submit_response(value)
        return walkthrough

    def next_prompt(self) -> PromptWalkthrough:
        walkthrough = self.start_prompts()
        was_completed = walkthrough.is_completed
        walkthrough.advance()
        self._record_walkthrough(walkthrough, was_completed)
        return walkthrough

    def skip_prompt(self) -> PromptWalkthrough:
        walkthrough = self.start_prompts()
        was_completed = walkthrough.is_completed
        walkthrough.skip()
        self._record_walkthrough(walkthrough, was_completed)
        return walkthrough

    def complete(self, notes: Optional[str] = None) -> Optional[MoodEntry]:
        """
        Finish the check-in.

        Returns:
            The history entry, or None if no mood was recorded
        """
        self._ensure_open()
        self._session.complete(notes)
        logger.info(
            "Check-in completed",
            session_id=str(self.session_id),
            features=sorted(f.value for f in self._session.completed_features),
            duration_seconds=self._session.duration_seconds,
        )
        return self.to_mood_entry()

    def abandon(self) -> None:
        self._ensure_open()
        self._session.abandon()
        logger.info(
            "Check-in abandoned",
            session_id=str(self.session_id),
            features=sorted(f.value for f in self._session.completed_features),
        )

    def to_mood_entry(self) -> Optional[MoodEntry]:
        """History entry for the session, None until a mood is recorded."""
        if not self._session.is_summarizable:
            return None
        return MoodEntry.from_session(self._session)

    def to_dict(self) -> dict:
        return {
            "session": self._session.to_dict(),
            "profile": self._profile.to_dict(),
            "active_feature": self._active_feature.value,
            "prompts": self._walkthrough.to_dict() if self._walkthrough else None,
        }

    def _record_walkthrough(self, walkthrough: PromptWalkthrough, was_completed: bool) -> None:
        if walkthrough.is_completed and not was_completed:
            self.record(FeatureId.PROMPTS, walkthrough.result())

    def _ensure_open(self) -> None:
        if self._session.is_closed:
            raise SessionClosedError(str(self.session_id), self._session.state.value)
