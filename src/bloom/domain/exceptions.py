"""
Check-In Domain Errors

Only hard failures are raised. Soft limits (selection caps, advancing
a prompt without an answer) are silent no-ops and never reach here.
"""

from typing import Optional


class CheckInError(Exception):
    """Base exception for check-in domain errors."""

    def __init__(
        self,
        message: str,
        context: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict:
        """Serialize for API error bodies."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "context": self.context,
        }


class FeatureNotAvailableError(CheckInError):
    """A feature or expression mode is not offered at the child's age."""

    def __init__(self, feature: str, age: int) -> None:
        super().__init__(
            f"Feature '{feature}' is not available at age {age}",
            context={"feature": feature, "age": age},
        )
        self.feature = feature
        self.age = age


class UnknownCatalogItemError(CheckInError, ValueError):
    """An id does not exist in the mood, color or safe-space catalog."""

    def __init__(self, catalog: str, item_id: str) -> None:
        super().__init__(
            f"Unknown {catalog} id: {item_id}",
            context={"catalog": catalog, "item_id": item_id},
        )
        self.catalog = catalog
        self.item_id = item_id


class InvalidPayloadError(CheckInError, TypeError):
    """A completion payload does not match the feature it is recorded for."""

    def __init__(self, feature: str, expected: str, received: str) -> None:
        super().__init__(
            f"Feature '{feature}' expects {expected}, got {received}",
            context={"feature": feature, "expected": expected, "received": received},
        )
        self.feature = feature


class InvalidPromptResponseError(CheckInError, ValueError):
    """A prompt answer does not fit the prompt's type or options."""

    def __init__(self, prompt_id: str, reason: str) -> None:
        super().__init__(
            f"Invalid response for prompt '{prompt_id}': {reason}",
            context={"prompt_id": prompt_id},
        )
        self.prompt_id = prompt_id


class SessionClosedError(CheckInError):
    """The session already ended and accepts no more input."""

    def __init__(self, session_id: str, state: str) -> None:
        super().__init__(
            f"Session {session_id} is {state} and cannot be changed",
            context={"session_id": session_id, "state": state},
        )


class SessionNotFoundError(CheckInError, LookupError):
    """No live check-in session with the given id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            f"Session {session_id} not found",
            context={"session_id": session_id},
        )
