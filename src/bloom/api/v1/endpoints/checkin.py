"""
Check-In Endpoints

Drives a child's emotion check-in from the mobile client:
age profiles, session lifecycle, feature completions and the
adaptive prompt walkthrough.
"""

from typing import Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, model_validator

from bloom.api.v1.dependencies import get_resolver, get_summary_builder
from bloom.config.logging_config import get_logger
from bloom.domain.enums.checkin import ExpressionMode, FeatureId
from bloom.domain.models.age_profile import AgeProfile
from bloom.domain.models.catalog import expression_modes_for_age
from bloom.infrastructure.metrics import (
    track_feature_completion,
    track_mood_entry,
    track_prompt_action,
    track_session_finished,
    track_session_started,
)
from bloom.infrastructure.monitoring import set_session_context
from bloom.services.checkin import AgeProfileResolver, CheckInFlow, CheckInRegistry, FeatureCompletion
from bloom.services.clinical import ClinicalSummaryBuilder

logger = get_logger(__name__)
router = APIRouter()


# Request/Response Models

class ProfileResponse(BaseModel):
    """Features and limits for an age."""

    age_years: int
    age_range: str
    features: list[str]
    complexity_tier: str
    max_color_selections: int
    max_space_items: int
    prompt_style: str
    icon_size_hint: int
    auto_advance: bool
    requires_guardian_review: bool
    expression_modes: list[str] = Field(default_factory=list)


class CreateSessionRequest(BaseModel):
    """Request to start a check-in."""

    patient_id: str = Field(..., min_length=1, max_length=128, description="Child's patient ID")
    age: int = Field(..., description="Child's age in years")


class UpdateAgeRequest(BaseModel):
    age: int = Field(..., description="Child's age in years")


class ActiveFeatureRequest(BaseModel):
    feature: FeatureId


class MoodRequest(BaseModel):
    """Mood pick. Intensity is ignored for children 7 and under."""

    mood: str = Field(..., description="Mood catalog id")
    intensity: Optional[int] = Field(default=None, ge=1, le=10)


class ColorsRequest(BaseModel):
    colors: list[str] = Field(..., description="Color catalog ids in pick order")


class ExpressionRequest(BaseModel):
    """Creative expression reference."""

    mode: ExpressionMode
    data: str = Field(..., min_length=1, description="Reference to the stored drawing, photo, clip or text")
    duration_seconds: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_voice_duration(self) -> "ExpressionRequest":
        """Voice notes must carry their duration."""
        if self.mode == ExpressionMode.VOICE and self.duration_seconds is None:
            raise ValueError("duration_seconds is required for voice expressions")
        return self


class SafeSpaceRequest(BaseModel):
    items: list[str] = Field(..., description="Safe-space item ids in pick order")


class PromptAnswerRequest(BaseModel):
    """Pending answer for the current prompt. Null clears it."""

    value: Union[int, str, None] = None


class CompleteSessionRequest(BaseModel):
    notes: Optional[str] = Field(default=None, max_length=2000)


class FlowStateResponse(BaseModel):
    """Current state of a check-in."""

    session: dict
    profile: ProfileResponse
    active_feature: str
    prompts: Optional[dict] = None
    suggested_next_feature: Optional[str] = None


class CompletionResponse(BaseModel):
    """Finished check-in with its history entry, if a mood was recorded."""

    session: dict
    entry: Optional[dict] = None
    observation: Optional[dict] = None


# Dependencies

def get_flow(session_id: UUID) -> CheckInFlow:
    """Get live flow by ID or raise 404."""
    flow = CheckInRegistry.require(session_id)
    set_session_context(
        str(session_id),
        age_range=flow.profile.age_range,
        active_feature=flow.active_feature.value,
    )
    return flow


def _profile(profile: AgeProfile) -> ProfileResponse:
    return ProfileResponse(
        **profile.to_dict(),
        expression_modes=[info.mode.value for info in expression_modes_for_age(profile.age_years)],
    )


def _state(flow: CheckInFlow, completion: Optional[FeatureCompletion] = None) -> FlowStateResponse:
    data = flow.to_dict()
    suggested = completion.suggested_next_feature if completion else None
    return FlowStateResponse(
        session=data["session"],
        profile=_profile(flow.profile),
        active_feature=data["active_feature"],
        prompts=data["prompts"],
        suggested_next_feature=suggested.value if suggested else None,
    )


def _recorded(flow: CheckInFlow, feature: FeatureId, completion: FeatureCompletion) -> FlowStateResponse:
    track_feature_completion(feature.value, flow.profile.age_range)
    return _state(flow, completion)


# Profiles

@router.get(
    "/profiles/{age}",
    response_model=ProfileResponse,
    summary="Resolve the feature profile for an age",
)
async def get_profile(
    age: int,
    resolver: AgeProfileResolver = Depends(get_resolver),
) -> ProfileResponse:
    """Out-of-range ages are clamped to the supported range."""
    return _profile(resolver.resolve(age))


# Session lifecycle

@router.post(
    "/sessions",
    response_model=FlowStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a check-in",
)
async def create_session(
    request: CreateSessionRequest,
    resolver: AgeProfileResolver = Depends(get_resolver),
) -> FlowStateResponse:
    flow = CheckInRegistry.add(
        CheckInFlow.start(request.patient_id, request.age, resolver=resolver)
    )
    track_session_started()
    return _state(flow)


@router.get(
    "/sessions/{session_id}",
    response_model=FlowStateResponse,
    summary="Get check-in state",
)
async def get_session(flow: CheckInFlow = Depends(get_flow)) -> FlowStateResponse:
    return _state(flow)


@router.put(
    "/sessions/{session_id}/age",
    response_model=FlowStateResponse,
    summary="Change the child's age mid-session",
)
async def update_age(
    request: UpdateAgeRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    flow.set_age(request.age)
    return _state(flow)


@router.put(
    "/sessions/{session_id}/active-feature",
    response_model=FlowStateResponse,
    summary="Switch the active feature",
)
async def select_feature(
    request: ActiveFeatureRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    flow.select_feature(request.feature)
    return _state(flow)


# Feature completions

@router.post(
    "/sessions/{session_id}/mood",
    response_model=FlowStateResponse,
    summary="Record the child's mood",
)
async def record_mood(
    request: MoodRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    """
    Children 7 and under get the catalog intensity and are moved on
    to colors straight away; the response carries the suggestion.
    """
    completion = flow.record_mood(request.mood, request.intensity)
    return _recorded(flow, FeatureId.MOOD, completion)


@router.post(
    "/sessions/{session_id}/colors",
    response_model=FlowStateResponse,
    summary="Record color clouds",
)
async def record_colors(
    request: ColorsRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    """Picks past the age cap are dropped."""
    completion = flow.record_colors(request.colors)
    return _recorded(flow, FeatureId.COLORS, completion)


@router.post(
    "/sessions/{session_id}/expression",
    response_model=FlowStateResponse,
    summary="Record a creative expression",
)
async def record_expression(
    request: ExpressionRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    completion = flow.record_expression(request.mode, request.data, request.duration_seconds)
    return _recorded(flow, FeatureId.EXPRESS, completion)


@router.post(
    "/sessions/{session_id}/space",
    response_model=FlowStateResponse,
    summary="Record a safe space",
)
async def record_safe_space(
    request: SafeSpaceRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    completion = flow.record_safe_space(request.items)
    return _recorded(flow, FeatureId.SPACE, completion)


@router.post(
    "/sessions/{session_id}/journal",
    response_model=FlowStateResponse,
    summary="Mark the journal as visited",
)
async def record_journal(flow: CheckInFlow = Depends(get_flow)) -> FlowStateResponse:
    completion = flow.record_journal()
    return _recorded(flow, FeatureId.JOURNAL, completion)


# Prompt walkthrough

@router.get(
    "/sessions/{session_id}/prompts",
    response_model=FlowStateResponse,
    summary="Open the prompt walkthrough",
)
async def get_prompts(flow: CheckInFlow = Depends(get_flow)) -> FlowStateResponse:
    """Generated from the current mood; reused while in progress."""
    flow.start_prompts()
    return _state(flow)


@router.post(
    "/sessions/{session_id}/prompts/answer",
    response_model=FlowStateResponse,
    summary="Hold an answer for the current prompt",
)
async def answer_prompt(
    request: PromptAnswerRequest,
    flow: CheckInFlow = Depends(get_flow),
) -> FlowStateResponse:
    flow.answer_prompt(request.value)
    track_prompt_action("answer")
    return _state(flow)


@router.post(
    "/sessions/{session_id}/prompts/next",
    response_model=FlowStateResponse,
    summary="Commit the held answer and move on",
)
async def next_prompt(flow: CheckInFlow = Depends(get_flow)) -> FlowStateResponse:
    """Does nothing when no answer is held."""
    flow.next_prompt()
    track_prompt_action("next")
    return _state(flow)


@router.post(
    "/sessions/{session_id}/prompts/skip",
    response_model=FlowStateResponse,
    summary="Skip the current prompt",
)
async def skip_prompt(flow: CheckInFlow = Depends(get_flow)) -> FlowStateResponse:
    flow.skip_prompt()
    track_prompt_action("skip")
    return _state(flow)


# Finishing

@router.post(
    "/sessions/{session_id}/complete",
    response_model=CompletionResponse,
    summary="Finish the check-in",
)
async def complete_session(
    request: CompleteSessionRequest,
    flow: CheckInFlow = Depends(get_flow),
    summary_builder: ClinicalSummaryBuilder = Depends(get_summary_builder),
) -> CompletionResponse:
    """
    Close the session. When a mood was recorded the resulting
    entry is added to the child's history and coded.
    """
    entry = flow.complete(request.notes)
    track_session_finished("completed", flow.session.duration_seconds)

    observation = None
    if entry is not None:
        CheckInRegistry.add_entry(entry)
        track_mood_entry("checkin")
        observation = summary_builder.to_observation(entry).to_dict()

    logger.info(
        "Check-in closed",
        session_id=str(flow.session_id),
        summarized=entry is not None,
    )

    return CompletionResponse(
        session=flow.session.to_dict(),
        entry=entry.to_dict() if entry else None,
        observation=observation,
    )


@router.post(
    "/sessions/{session_id}/abandon",
    response_model=FlowStateResponse,
    summary="Abandon the check-in",
)
async def abandon_session(flow: CheckInFlow = Depends(get_flow)) -> FlowStateResponse:
    """Abandoned sessions are never added to the history."""
    flow.abandon()
    track_session_finished("abandoned", flow.session.duration_seconds)
    return _state(flow)
