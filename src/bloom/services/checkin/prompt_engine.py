"""
Adaptive Prompt Engine

Builds the follow-up questions shown after a mood is picked and
drives the one-question-at-a-time walkthrough.

CLINICAL_REVIEW_REQUIRED: Question wording and answer options are
child-facing and should be reviewed by the care team.
"""

from typing import Optional, Union

from bloom.domain.enums.checkin import PromptType
from bloom.domain.exceptions import InvalidPromptResponseError
from bloom.domain.models.prompt import Prompt, PromptWalkthroughResult
from bloom.domain.models.selections import (
    MAX_INTENSITY,
    MIN_INTENSITY,
    AdaptivePromptResponse,
)
from bloom.domain.models.session import CheckInSession
from bloom.domain.timeutils import utc_now
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)

ResponseValue = Union[str, int]


BASE_PROMPTS: tuple[Prompt, ...] = (
    Prompt(
        id="feeling_intensity",
        question="How strong is this feeling right now?",
        prompt_type=PromptType.SCALE,
        follow_up="That helps me understand better.",
    ),
    Prompt(
        id="trigger_reflection",
        question="What do you think might have caused this feeling?",
        prompt_type=PromptType.TEXT,
        follow_up="Thank you for sharing that with me.",
    ),
    Prompt(
        id="coping_strategy",
        question="What usually helps you feel better?",
        prompt_type=PromptType.CHOICE,
        options=(
            "Talk to someone",
            "Listen to music",
            "Go outside",
            "Draw or write",
            "Take deep breaths",
        ),
        follow_up="That sounds like a good strategy.",
    ),
    Prompt(
        id="support_need",
        question="Would you like to talk to someone about how you're feeling?",
        prompt_type=PromptType.CHOICE,
        options=("Yes, right now", "Maybe later", "No, I'm okay"),
        follow_up="I understand, and that's perfectly okay.",
    ),
)

MOOD_PROMPTS: dict[str, tuple[Prompt, ...]] = {
    "sad": (
        Prompt(
            id="sad_support",
            question="When you feel sad, what makes you feel a little better?",
            prompt_type=PromptType.CHOICE,
            options=(
                "Hugs",
                "Favorite music",
                "Talking",
                "Being alone for a bit",
                "Doing something creative",
            ),
            follow_up="Those are really good ways to take care of yourself.",
        ),
    ),
    "angry": (
        Prompt(
            id="anger_management",
            question="When you feel angry, what helps you calm down?",
            prompt_type=PromptType.CHOICE,
            options=(
                "Count to 10",
                "Take deep breaths",
                "Go for a walk",
                "Talk it out",
                "Listen to music",
            ),
            follow_up="Those are excellent ways to handle anger.",
        ),
    ),
    "worried": (
        Prompt(
            id="worry_thoughts",
            question="What are you most worried about right now?",
            prompt_type=PromptType.TEXT,
            follow_up="Thank you for trusting me with your worries.",
        ),
    ),
    "happy": (
        Prompt(
            id="happiness_share",
            question="What made you feel happy today?",
            prompt_type=PromptType.TEXT,
            follow_up="I'm so glad you're feeling happy!",
        ),
    ),
}


class AdaptivePromptEngine:
    """
    Generates mood-adapted prompt sequences.

    Mood-specific prompts come first, followed by the fixed base
    sequence. Moods without a dedicated prompt get the base sequence.
    """

    def generate_prompts(self, session: CheckInSession) -> list[Prompt]:
        """
        Build the ordered prompt list for a session.

        Args:
            session: Session whose mood drives the branch

        Returns:
            Prompts in the order they are shown
        """
        mood_id = session.mood.mood_id if session.mood else None
        prompts = list(MOOD_PROMPTS.get(mood_id, ())) + list(BASE_PROMPTS)

        logger.debug(
            "Prompts generated",
            session_id=str(session.id),
            mood=mood_id,
            prompt_count=len(prompts),
        )
        return prompts

    def start_walkthrough(self, session: CheckInSession) -> "PromptWalkthrough":
        """Generate prompts for the session and start a walkthrough over them."""
        return PromptWalkthrough(self.generate_prompts(session))


class PromptWalkthrough:
    """
    One-question-at-a-time walkthrough over a prompt list.

    States are presenting prompt i or completed. An answer is held
    as pending until next; skip moves on without committing it.
    Once completed every operation is a no-op.

    Usage:
        walkthrough = PromptWalkthrough(prompts)
        walkthrough.submit_response(7)
        walkthrough.advance()
        walkthrough.skip()
    """

    def __init__(self, prompts: list[Prompt]) -> None:
        """
        Initialize walkthrough.

        Args:
            prompts: Prompts to present, in order
        """
        self._prompts = list(prompts)
        self._index = 0
        self._pending: Optional[ResponseValue] = None
        self._responses: list[AdaptivePromptResponse] = []
        self._completed = not self._prompts
        self._completed_at = utc_now() if self._completed else None

    @property
    def prompts(self) -> list[Prompt]:
        return list(self._prompts)

    @property
    def total_prompts(self) -> int:
        return len(self._prompts)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_prompt(self) -> Optional[Prompt]:
        """Prompt being presented, None once completed."""
        if self._completed:
            return None
        return self._prompts[self._index]

    @property
    def pending_response(self) -> Optional[ResponseValue]:
        return self._pending

    @property
    def is_completed(self) -> bool:
        return self._completed

    @property
    def responses(self) -> list[AdaptivePromptResponse]:
        return list(self._responses)

    @property
    def completion_rate(self) -> float:
        """Recorded answers as a percentage of all prompts."""
        if not self._prompts:
            return 0.0
        return len(self._responses) / len(self._prompts) * 100

    def submit_response(self, value: Optional[ResponseValue]) -> None:
        """
        Hold an answer for the current prompt without advancing.

        Submitting None clears the pending answer.

        Raises:
            InvalidPromptResponseError: Value does not fit the prompt
        """
        prompt = self.current_prompt
        if prompt is None:
            return
        if value is not None:
            self._validate(prompt, value)
        self._pending = value

    def advance(self) -> None:
        """Commit the pending answer and move on. No-op without an answer."""
        prompt = self.current_prompt
        if prompt is None or self._pending is None:
            return

        self._responses.append(
            AdaptivePromptResponse(
                prompt_id=prompt.id,
                question=prompt.question,
                response_value=self._pending,
            )
        )
        logger.debug("Prompt answered", prompt_id=prompt.id, response_value=self._pending)
        self._move_on()

    def skip(self) -> None:
        """Move on without recording an answer for the current prompt."""
        prompt = self.current_prompt
        if prompt is None:
            return
        logger.debug("Prompt skipped", prompt_id=prompt.id)
        self._move_on()

    def result(self) -> Optional[PromptWalkthroughResult]:
        """Summary of a completed walkthrough, None while still in progress."""
        if not self._completed:
            return None
        return PromptWalkthroughResult(
            responses=tuple(self._responses),
            total_prompts=self.total_prompts,
            completion_rate=self.completion_rate,
            timestamp=self._completed_at,
        )

    def to_dict(self) -> dict:
        prompt = self.current_prompt
        return {
            "prompts": [p.to_dict() for p in self._prompts],
            "current_index": self._index,
            "current_prompt": prompt.to_dict() if prompt else None,
            "pending_response": self._pending,
            "responses": [r.to_dict() for r in self._responses],
            "completed": self._completed,
            "completion_rate": round(self.completion_rate, 2),
        }

    def _move_on(self) -> None:
        self._pending = None
        if self._index >= len(self._prompts) - 1:
            self._completed = True
            self._completed_at = utc_now()
            logger.info(
                "Prompt walkthrough completed",
                answered=len(self._responses),
                total=len(self._prompts),
            )
            return
        self._index += 1

    @staticmethod
    def _validate(prompt: Prompt, value: ResponseValue) -> None:
        if prompt.prompt_type == PromptType.SCALE:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidPromptResponseError(prompt.id, "scale answers must be integers")
            if not MIN_INTENSITY <= value <= MAX_INTENSITY:
                raise InvalidPromptResponseError(
                    prompt.id,
                    f"scale answers must be {MIN_INTENSITY}-{MAX_INTENSITY}",
                )
        elif prompt.prompt_type == PromptType.CHOICE:
            if value not in (prompt.options or ()):
                raise InvalidPromptResponseError(prompt.id, f"'{value}' is not an option")
        elif not isinstance(value, str):
            raise InvalidPromptResponseError(prompt.id, "text answers must be strings")
