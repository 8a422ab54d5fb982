"""
Clinical Alert Engine

Evaluates alert rules over a trailing window of mood entries.

SAFETY_NOTE: Alerts flag entries for human review. They never
replace a clinician's judgement and are recomputed on every request.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from bloom.domain.enums.clinical import AlertLevel
from bloom.domain.models.catalog import CONCERNING_MOODS
from bloom.domain.models.clinical_output import ClinicalAlert
from bloom.domain.models.mood_entry import MoodEntry
from bloom.domain.timeutils import as_utc, utc_now
from bloom.config.logging_config import get_logger

logger = get_logger(__name__)


LOW_MOOD_MESSAGE = "Patient has reported low mood intensity for 3+ recent sessions"
CONCERNING_MOOD_MESSAGE = (
    "Multiple concerning mood reports in recent sessions - clinical review recommended"
)
SUPPORT_REQUEST_MESSAGE = "Patient has requested support in {count} recent session(s)"


class AlertEngine:
    """
    Rule-based clinical alerts.

    Rules are independent and every rule that fires emits one alert:
    - warning: 3+ entries with intensity at or below 3
    - urgent: 4+ entries with a sad, angry or worried mood
    - info: 1+ entries where the child asked for support

    Alerts are stamped with the evaluation time.
    """

    WINDOW_DAYS: int = 7
    LOW_INTENSITY_THRESHOLD: int = 3
    LOW_INTENSITY_ALERT_COUNT: int = 3
    CONCERNING_MOOD_ALERT_COUNT: int = 4

    def __init__(
        self,
        window_days: int = WINDOW_DAYS,
        low_intensity_threshold: int = LOW_INTENSITY_THRESHOLD,
        low_intensity_alert_count: int = LOW_INTENSITY_ALERT_COUNT,
        concerning_mood_alert_count: int = CONCERNING_MOOD_ALERT_COUNT,
    ) -> None:
        """
        Initialize alert engine.

        Args:
            window_days: Trailing window considered
            low_intensity_threshold: Intensity at or below which an entry counts as low
            low_intensity_alert_count: Low entries needed for a warning
            concerning_mood_alert_count: Concerning entries needed for an urgent alert
        """
        self._window = timedelta(days=window_days)
        self._low_threshold = low_intensity_threshold
        self._low_count = low_intensity_alert_count
        self._concerning_count = concerning_mood_alert_count

    def recent(
        self,
        entries: Sequence[MoodEntry],
        now: Optional[datetime] = None,
    ) -> list[MoodEntry]:
        """Entries strictly newer than the window start."""
        now = as_utc(now) if now else utc_now()
        cutoff = now - self._window
        return [entry for entry in entries if as_utc(entry.timestamp) > cutoff]

    def compute_alerts(
        self,
        entries: Sequence[MoodEntry],
        now: Optional[datetime] = None,
    ) -> list[ClinicalAlert]:
        """
        Evaluate all rules.

        Args:
            entries: Entry history in any order
            now: Evaluation time, defaults to the current time

        Returns:
            Alerts in rule order: warning, urgent, info
        """
        now = as_utc(now) if now else utc_now()
        recent = self.recent(entries, now)
        alerts: list[ClinicalAlert] = []

        low = [e for e in recent if e.intensity <= self._low_threshold]
        if len(low) >= self._low_count:
            alerts.append(ClinicalAlert(
                level=AlertLevel.WARNING,
                message=LOW_MOOD_MESSAGE,
                timestamp=now,
                rule="low_intensity",
            ))

        concerning = [e for e in recent if e.mood in CONCERNING_MOODS]
        if len(concerning) >= self._concerning_count:
            alerts.append(ClinicalAlert(
                level=AlertLevel.URGENT,
                message=CONCERNING_MOOD_MESSAGE,
                timestamp=now,
                rule="concerning_moods",
            ))

        support = [e for e in recent if e.support_needed]
        if support:
            alerts.append(ClinicalAlert(
                level=AlertLevel.INFO,
                message=SUPPORT_REQUEST_MESSAGE.format(count=len(support)),
                timestamp=now,
                rule="support_requested",
            ))

        if alerts:
            logger.info(
                "Alerts evaluated",
                window_entries=len(recent),
                levels=[alert.level.value for alert in alerts],
            )

        return alerts
