"""Tests configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest

from bloom.config import Settings
from bloom.domain.models.mood_entry import ClinicalFlags, MoodEntry
from bloom.services.checkin import AgeProfileResolver, CheckInRegistry, SessionAggregator


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        env="development",
        debug=True,
    )


@pytest.fixture
def resolver() -> AgeProfileResolver:
    return AgeProfileResolver()


@pytest.fixture
def aggregator(resolver) -> SessionAggregator:
    return SessionAggregator(resolver)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_entry(now) -> Callable[..., MoodEntry]:
    """Factory for history entries, placed days_ago before the fixed time."""

    def _make(
        mood: str = "calm",
        intensity: int = 6,
        days_ago: float = 1,
        patient_id: str = "patient-1",
        support_needed: Optional[bool] = None,
        **kwargs,
    ) -> MoodEntry:
        return MoodEntry(
            patient_id=patient_id,
            mood=mood,
            intensity=intensity,
            timestamp=now - timedelta(days=days_ago),
            support_needed=support_needed,
            clinical_flags=ClinicalFlags.derive(mood, intensity, support_needed),
            **kwargs,
        )

    return _make


@pytest.fixture(autouse=True)
def clear_registry():
    """Isolate the in-memory registry between tests."""
    CheckInRegistry.clear()
    yield
    CheckInRegistry.clear()
