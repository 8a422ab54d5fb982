"""
Bloom Domain Layer

Check-in entities, catalogs and clinical output shapes.
These models carry no infrastructure concerns.
"""

from bloom.domain.models.age_profile import AgeProfile
from bloom.domain.models.session import CheckInSession
from bloom.domain.models.mood_entry import MoodEntry
from bloom.domain.enums.checkin import FeatureId
from bloom.domain.exceptions import CheckInError, FeatureNotAvailableError

__all__ = [
    "AgeProfile",
    "CheckInSession",
    "MoodEntry",
    "FeatureId",
    "CheckInError",
    "FeatureNotAvailableError",
]
