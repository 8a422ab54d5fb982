"""Metrics infrastructure package."""

from bloom.infrastructure.metrics.prometheus_metrics import (
    # Session metrics
    CHECKIN_SESSIONS_TOTAL,
    CHECKIN_SESSION_DURATION,
    ACTIVE_CHECKIN_SESSIONS,
    # Feature metrics
    FEATURE_COMPLETIONS_TOTAL,
    POLICY_VIOLATIONS_TOTAL,
    PROMPT_ACTIONS_TOTAL,
    # Clinical metrics
    CLINICAL_ALERTS_TOTAL,
    MOOD_ENTRIES_TOTAL,
    # Helpers
    track_session_started,
    track_session_finished,
    track_feature_completion,
    track_policy_violation,
    track_prompt_action,
    track_alerts,
    track_mood_entry,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "CHECKIN_SESSIONS_TOTAL",
    "CHECKIN_SESSION_DURATION",
    "ACTIVE_CHECKIN_SESSIONS",
    "FEATURE_COMPLETIONS_TOTAL",
    "POLICY_VIOLATIONS_TOTAL",
    "PROMPT_ACTIONS_TOTAL",
    "CLINICAL_ALERTS_TOTAL",
    "MOOD_ENTRIES_TOTAL",
    "track_session_started",
    "track_session_finished",
    "track_feature_completion",
    "track_policy_violation",
    "track_prompt_action",
    "track_alerts",
    "track_mood_entry",
    "update_system_info",
    "metrics_router",
]
