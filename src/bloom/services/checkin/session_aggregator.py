"""
Session Aggregator

Merges per-feature completion payloads into a check-in session.

ARCHITECTURE: The aggregator never drives navigation. It returns the
updated session plus an optional suggested next feature, and the flow
controller decides whether to act on it.

SAFETY_NOTE: A feature outside the child's age profile is a hard
error. Selection caps are soft and only ever truncate.
"""

from dataclasses import dataclass
from typing import Optional, Union

from bloom.domain.enums.checkin import FeatureId
from bloom.domain.exceptions import (
    FeatureNotAvailableError,
    InvalidPayloadError,
    SessionClosedError,
)
from bloom.domain.models.age_profile import AgeProfile
from bloom.domain.models.prompt import PromptWalkthroughResult
from bloom.domain.models.selections import (
    ColorSelection,
    ExpressionRecord,
    MoodSelection,
    SafeSpaceSelection,
)
from bloom.domain.models.session import CheckInSession
from bloom.services.checkin.age_profile_resolver import AgeProfileResolver
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)


FeaturePayload = Union[
    MoodSelection,
    ColorSelection,
    ExpressionRecord,
    SafeSpaceSelection,
    PromptWalkthroughResult,
    None,
]


@dataclass(frozen=True)
class FeatureCompletion:
    """
    Result of recording a feature.

    Attributes:
        session: The updated session
        suggested_next_feature: Feature the flow should switch to, if any
    """

    session: CheckInSession
    suggested_next_feature: Optional[FeatureId] = None


class SessionAggregator:
    """
    Records feature completions into a session.

    Payload shape per feature:
    - mood: MoodSelection
    - colors: ColorSelection
    - express: ExpressionRecord
    - space: SafeSpaceSelection
    - prompts: PromptWalkthroughResult
    - journal: None (marks the journal as visited)

    Usage:
        aggregator = SessionAggregator()
        completion = aggregator.record_feature_completion(
            session, FeatureId.MOOD, MoodSelection.create("happy", age=6)
        )
        completion.suggested_next_feature  # FeatureId.COLORS
    """

    PAYLOAD_TYPES: dict[FeatureId, Optional[type]] = {
        FeatureId.MOOD: MoodSelection,
        FeatureId.COLORS: ColorSelection,
        FeatureId.EXPRESS: ExpressionRecord,
        FeatureId.SPACE: SafeSpaceSelection,
        FeatureId.PROMPTS: PromptWalkthroughResult,
        FeatureId.JOURNAL: None,
    }

    def __init__(self, resolver: Optional[AgeProfileResolver] = None) -> None:
        """
        Initialize aggregator.

        Args:
            resolver: Resolver used when no profile is passed in
        """
        self._resolver = resolver or AgeProfileResolver()

    def record_feature_completion(
        self,
        session: CheckInSession,
        feature_id: FeatureId,
        payload: FeaturePayload = None,
        profile: Optional[AgeProfile] = None,
    ) -> FeatureCompletion:
        """
        Merge a feature payload into the session.

        The session is only mutated after every check passes.

        Args:
            session: Session to update
            feature_id: Feature that completed
            payload: Feature-specific payload
            profile: Current age profile; resolved from the session age if omitted

        Returns:
            FeatureCompletion with the session and any suggested next feature

        Raises:
            SessionClosedError: Session already completed or abandoned
            FeatureNotAvailableError: Feature or expression mode not allowed at this age
            InvalidPayloadError: Payload does not match the feature
        """
        feature_id = FeatureId(feature_id)
        if session.is_closed:
            raise SessionClosedError(str(session.id), session.state.value)

        profile = profile or self._resolver.resolve(session.age_at_session)

        if not profile.allows(feature_id):
            logger.info(
                "Policy violation",
                session_id=str(session.id),
                feature=feature_id.value,
                age=profile.age_years,
            )
            raise FeatureNotAvailableError(feature_id.value, profile.age_years)

        self._check_payload(feature_id, payload)

        if feature_id == FeatureId.MOOD:
            session.mood = payload
        elif feature_id == FeatureId.COLORS:
            session.colors = self._cap_colors(payload, profile)
        elif feature_id == FeatureId.EXPRESS:
            self._check_expression_mode(payload, profile)
            session.expression = payload
        elif feature_id == FeatureId.SPACE:
            session.safe_space = self._cap_space(payload, profile)
        elif feature_id == FeatureId.PROMPTS:
            session.prompt_responses = list(payload.responses)
            session.prompt_completion_rate = payload.completion_rate

        session.completed_features.add(feature_id)

        suggested = None
        if feature_id == FeatureId.MOOD and profile.auto_advance:
            suggested = FeatureId.COLORS

        logger.debug(
            "Feature recorded",
            session_id=str(session.id),
            feature=feature_id.value,
            suggested_next=suggested.value if suggested else None,
        )

        return FeatureCompletion(session=session, suggested_next_feature=suggested)

    def apply_profile_caps(self, session: CheckInSession, profile: AgeProfile) -> CheckInSession:
        """
        Refit recorded colors and safe-space items to a profile's caps.

        Used after an age change. Picks past the new cap are dropped and
        later adds stop at the new cap.
        """
        if session.colors is not None:
            session.colors = self._cap_colors(session.colors, profile)
        if session.safe_space is not None:
            session.safe_space = self._cap_space(session.safe_space, profile)
        return session

    def _check_payload(self, feature_id: FeatureId, payload: FeaturePayload) -> None:
        expected = self.PAYLOAD_TYPES[feature_id]

        if expected is None:
            if payload is not None:
                raise InvalidPayloadError(feature_id.value, "no payload", type(payload).__name__)
            return

        if not isinstance(payload, expected):
            raise InvalidPayloadError(
                feature_id.value,
                expected.__name__,
                type(payload).__name__,
            )

    def _check_expression_mode(self, payload: ExpressionRecord, profile: AgeProfile) -> None:
        if profile.age_years < payload.mode.min_age:
            logger.info(
                "Policy violation",
                feature=FeatureId.EXPRESS.value,
                mode=payload.mode.value,
                age=profile.age_years,
            )
            raise FeatureNotAvailableError(
                f"{FeatureId.EXPRESS.value}:{payload.mode.value}",
                profile.age_years,
            )

    def _cap_colors(self, payload: ColorSelection, profile: AgeProfile) -> ColorSelection:
        cap = profile.max_color_selections
        if payload.max_selections == cap and len(payload.color_ids) <= cap:
            return payload
        return ColorSelection(
            max_selections=cap,
            color_ids=payload.color_ids[:cap],
            timestamp=payload.timestamp,
        )

    def _cap_space(self, payload: SafeSpaceSelection, profile: AgeProfile) -> SafeSpaceSelection:
        cap = profile.max_space_items
        if payload.max_items == cap and len(payload.item_ids) <= cap:
            return payload
        return SafeSpaceSelection(
            max_items=cap,
            item_ids=payload.item_ids[:cap],
            timestamp=payload.timestamp,
        )
