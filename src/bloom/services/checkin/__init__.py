"""Check-in services: age profiles, session aggregation, prompts and flow control."""

from bloom.services.checkin.age_profile_resolver import AgeProfileResolver
from bloom.services.checkin.session_aggregator import FeatureCompletion, SessionAggregator
from bloom.services.checkin.prompt_engine import AdaptivePromptEngine, PromptWalkthrough
from bloom.services.checkin.flow import CheckInFlow
from bloom.services.checkin.registry import CheckInRegistry

__all__ = [
    "AgeProfileResolver",
    "FeatureCompletion",
    "SessionAggregator",
    "AdaptivePromptEngine",
    "PromptWalkthrough",
    "CheckInFlow",
    "CheckInRegistry",
]
