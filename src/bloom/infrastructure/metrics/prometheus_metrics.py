"""
Prometheus Metrics

Check-in and clinical summary metrics for Bloom observability.
Exposes metrics at /metrics endpoint for Prometheus scraping.

ARCHITECTURE: Metrics are recorded at the API edge, never inside the
check-in core. Only increment/observe; never block on metrics.

PRIVACY: Labels carry feature names, outcomes and levels only.
Never label with patient or session identifiers.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

from bloom import __version__

# =============================================================================
# CHECK-IN SESSION METRICS
# =============================================================================

CHECKIN_SESSIONS_TOTAL = Counter(
    "bloom_checkin_sessions_total",
    "Check-in sessions by outcome",
    ["outcome"],  # started, completed, abandoned
)

CHECKIN_SESSION_DURATION = Histogram(
    "bloom_checkin_session_duration_seconds",
    "Duration of finished check-in sessions",
    ["outcome"],
    buckets=[15, 30, 60, 120, 300, 600, 1200],  # 15s to 20m
)

ACTIVE_CHECKIN_SESSIONS = Gauge(
    "bloom_active_checkin_sessions",
    "Number of check-in sessions currently open",
)

# =============================================================================
# FEATURE METRICS
# =============================================================================

FEATURE_COMPLETIONS_TOTAL = Counter(
    "bloom_feature_completions_total",
    "Feature completions recorded into sessions",
    ["feature", "age_range"],
)

POLICY_VIOLATIONS_TOTAL = Counter(
    "bloom_policy_violations_total",
    "Attempts to use a feature not offered at the child's age",
    ["feature"],
)

PROMPT_ACTIONS_TOTAL = Counter(
    "bloom_prompt_actions_total",
    "Prompt walkthrough actions",
    ["action"],  # answer, next, skip
)

# =============================================================================
# CLINICAL METRICS
# =============================================================================

CLINICAL_ALERTS_TOTAL = Counter(
    "bloom_clinical_alerts_total",
    "Clinical alerts raised by level",
    ["level"],  # info, warning, urgent
)

MOOD_ENTRIES_TOTAL = Counter(
    "bloom_mood_entries_total",
    "Mood entries added to histories",
    ["source"],  # checkin, import
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "bloom_system",
    "Bloom system information",
)

SYSTEM_INFO.info({
    "version": __version__,
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_session_started() -> None:
    """Record a new check-in session."""
    CHECKIN_SESSIONS_TOTAL.labels(outcome="started").inc()
    ACTIVE_CHECKIN_SESSIONS.inc()


def track_session_finished(outcome: str, duration_seconds: float) -> None:
    """Record a completed or abandoned check-in session."""
    CHECKIN_SESSIONS_TOTAL.labels(outcome=outcome).inc()
    CHECKIN_SESSION_DURATION.labels(outcome=outcome).observe(duration_seconds)
    ACTIVE_CHECKIN_SESSIONS.dec()


def track_feature_completion(feature: str, age_range: str) -> None:
    """Record a feature completion."""
    FEATURE_COMPLETIONS_TOTAL.labels(feature=feature, age_range=age_range).inc()


def track_policy_violation(feature: str) -> None:
    """Record a rejected feature use."""
    POLICY_VIOLATIONS_TOTAL.labels(feature=feature).inc()


def track_prompt_action(action: str) -> None:
    """Record a prompt walkthrough action."""
    PROMPT_ACTIONS_TOTAL.labels(action=action).inc()


def track_alerts(levels: list[str]) -> None:
    """Record alert levels raised by one evaluation."""
    for level in levels:
        CLINICAL_ALERTS_TOTAL.labels(level=level).inc()


def track_mood_entry(source: str) -> None:
    """Record a mood entry added to a history."""
    MOOD_ENTRIES_TOTAL.labels(source=source).inc()


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, version: str = __version__) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
