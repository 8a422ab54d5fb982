"""
Adaptive Prompt Models

Questions shown in the prompt walkthrough and the summary produced
when the walkthrough finishes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bloom.domain.enums.checkin import PromptType
from bloom.domain.models.selections import AdaptivePromptResponse
from bloom.domain.timeutils import utc_now


@dataclass(frozen=True)
class Prompt:
    """
    A single follow-up question.

    Attributes:
        id: Stable prompt identifier
        question: Question text
        prompt_type: Expected answer shape
        options: Choices for CHOICE prompts
        follow_up: Acknowledgment shown after an answer
    """

    id: str
    question: str
    prompt_type: PromptType
    options: Optional[tuple[str, ...]] = None
    follow_up: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.question,
            "type": self.prompt_type.value,
            "options": list(self.options) if self.options else None,
            "follow_up": self.follow_up,
        }


@dataclass(frozen=True)
class PromptWalkthroughResult:
    """
    Outcome of a finished prompt walkthrough.

    Attributes:
        responses: Committed answers in order
        total_prompts: Number of prompts presented
        completion_rate: Percentage of prompts answered (0-100)
        timestamp: When the walkthrough finished (UTC)
    """

    responses: tuple[AdaptivePromptResponse, ...]
    total_prompts: int
    completion_rate: float
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "responses": [response.to_dict() for response in self.responses],
            "total_prompts": self.total_prompts,
            "completion_rate": round(self.completion_rate, 2),
            "timestamp": self.timestamp.isoformat(),
        }
