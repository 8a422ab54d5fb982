"""
Clinical Endpoints

Guardian and clinician views over a child's mood history: entries,
coded observations, trends, alerts, periodic reports and insights.

PRIVACY: Every response here describes a specific child. Access
control is expected in front of these routes.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from bloom.api.v1.dependencies import get_insight_provider, get_summary_builder
from bloom.config.logging_config import get_logger
from bloom.domain.models.mood_entry import ClinicalFlags, MoodEntry
from bloom.domain.timeutils import as_utc, utc_now
from bloom.infrastructure.metrics import track_alerts, track_mood_entry
from bloom.services.checkin import CheckInRegistry
from bloom.services.clinical import ClinicalSummaryBuilder
from bloom.services.insights import InsightProvider

logger = get_logger(__name__)
router = APIRouter()


# Request/Response Models

class MoodEntryRequest(BaseModel):
    """A history entry recorded outside the check-in flow."""

    mood: str = Field(..., min_length=1, description="Primary mood id")
    intensity: int = Field(..., ge=1, le=10)
    timestamp: Optional[datetime] = Field(default=None, description="Defaults to now; naive values are UTC")
    secondary_moods: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    triggers: Optional[list[str]] = None
    coping_strategies: Optional[list[str]] = None
    support_needed: Optional[bool] = None


class TrendResponse(BaseModel):
    trend: str
    average_intensity: float
    most_common_mood: str
    entry_count: int


class AlertResponse(BaseModel):
    level: str
    message: str
    timestamp: str
    rule: str


class InsightResponse(BaseModel):
    type: str
    description: str
    confidence: float
    significance: str


# Endpoints

@router.get(
    "/patients/{patient_id}/entries",
    summary="List a child's mood entries",
)
async def list_entries(patient_id: str) -> list[dict]:
    """Entries oldest first."""
    return [entry.to_dict() for entry in CheckInRegistry.history(patient_id)]


@router.post(
    "/patients/{patient_id}/entries",
    status_code=status.HTTP_201_CREATED,
    summary="Add a mood entry to a child's history",
)
async def add_entry(patient_id: str, request: MoodEntryRequest) -> dict:
    entry = MoodEntry(
        patient_id=patient_id,
        mood=request.mood,
        intensity=request.intensity,
        timestamp=as_utc(request.timestamp) if request.timestamp else utc_now(),
        secondary_moods=request.secondary_moods,
        colors=request.colors,
        triggers=request.triggers,
        coping_strategies=request.coping_strategies,
        support_needed=request.support_needed,
        clinical_flags=ClinicalFlags.derive(request.mood, request.intensity, request.support_needed),
    )
    CheckInRegistry.add_entry(entry)
    track_mood_entry("import")

    logger.info("Mood entry added", entry_id=str(entry.id))
    return entry.to_dict()


@router.get(
    "/patients/{patient_id}/observations",
    summary="Coded observations for a child's entries",
)
async def list_observations(
    patient_id: str,
    builder: ClinicalSummaryBuilder = Depends(get_summary_builder),
) -> list[dict]:
    return [
        builder.to_observation(entry).to_dict()
        for entry in CheckInRegistry.history(patient_id)
    ]


@router.get(
    "/patients/{patient_id}/trend",
    response_model=TrendResponse,
    summary="Mood trend across a child's history",
)
async def get_trend(
    patient_id: str,
    builder: ClinicalSummaryBuilder = Depends(get_summary_builder),
) -> TrendResponse:
    """Returns a neutral default when there are no entries."""
    summary = builder.compute_trend(CheckInRegistry.history(patient_id))
    return TrendResponse(**summary.to_dict())


@router.get(
    "/patients/{patient_id}/alerts",
    response_model=list[AlertResponse],
    summary="Clinical alerts over the trailing window",
)
async def get_alerts(
    patient_id: str,
    builder: ClinicalSummaryBuilder = Depends(get_summary_builder),
) -> list[AlertResponse]:
    alerts = builder.compute_alerts(CheckInRegistry.history(patient_id))
    track_alerts([alert.level.value for alert in alerts])
    return [AlertResponse(**alert.to_dict()) for alert in alerts]


@router.get(
    "/patients/{patient_id}/report",
    summary="Guardian report for a period",
)
async def get_report(
    patient_id: str,
    period_days: Optional[int] = Query(default=None, ge=1, le=365),
    builder: ClinicalSummaryBuilder = Depends(get_summary_builder),
) -> dict:
    report = builder.build_report(
        patient_id,
        CheckInRegistry.history(patient_id),
        period_days=period_days,
    )
    return report.to_dict()


@router.get(
    "/patients/{patient_id}/insights",
    response_model=list[InsightResponse],
    summary="Rule-derived insights over a child's history",
)
async def get_insights(
    patient_id: str,
    provider: InsightProvider = Depends(get_insight_provider),
) -> list[InsightResponse]:
    insights = provider.analyze(CheckInRegistry.history(patient_id))
    return [InsightResponse(**insight.to_dict()) for insight in insights]
