"""
Check-In Registry

Process-local storage for live check-in flows and each child's
mood entry history.

NOTE: In-memory only. Closed flows stay readable until restart.
Contents are lost on restart and are not shared between worker
processes.
"""

from typing import Optional
from uuid import UUID

from bloom.domain.exceptions import SessionNotFoundError
from bloom.domain.models.mood_entry import MoodEntry
from bloom.services.checkin.flow import CheckInFlow


class CheckInRegistry:
    """
    Registry for check-in flows and mood histories.

    Provides singleton-like access to flows by session ID and to
    histories by patient ID.
    """

    _flows: dict[UUID, CheckInFlow] = {}
    _histories: dict[str, list[MoodEntry]] = {}

    @classmethod
    def add(cls, flow: CheckInFlow) -> CheckInFlow:
        """Register a flow."""
        cls._flows[flow.session_id] = flow
        return flow

    @classmethod
    def get(cls, session_id: UUID) -> Optional[CheckInFlow]:
        """Get flow if exists."""
        return cls._flows.get(session_id)

    @classmethod
    def require(cls, session_id: UUID) -> CheckInFlow:
        """
        Get flow or raise.

        Raises:
            SessionNotFoundError: No flow with this ID
        """
        flow = cls._flows.get(session_id)
        if flow is None:
            raise SessionNotFoundError(str(session_id))
        return flow

    @classmethod
    def active_count(cls) -> int:
        return sum(1 for flow in cls._flows.values() if not flow.session.is_closed)

    @classmethod
    def add_entry(cls, entry: MoodEntry) -> MoodEntry:
        """Append an entry to its patient's history."""
        cls._histories.setdefault(entry.patient_id, []).append(entry)
        return entry

    @classmethod
    def history(cls, patient_id: str) -> list[MoodEntry]:
        """Patient's entries in chronological order."""
        return sorted(cls._histories.get(patient_id, []), key=lambda e: e.timestamp)

    @classmethod
    def clear(cls) -> None:
        """Clear all flows and histories."""
        cls._flows.clear()
        cls._histories.clear()
