"""
Clinical Output Models

Shapes handed to guardian and clinician views: a coded observation
per mood entry, trend summaries, alerts, periodic reports and
rule-derived insights.

The observation shape follows the fields of a FHIR Observation
resource as an interchange format. It is not a certified profile.

CLINICAL_VALIDATION_REQUIRED: Codes and alert wording need review
before records are exchanged with clinical systems.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bloom.domain.enums.clinical import AlertLevel, InsightSignificance, TrendDirection
from bloom.domain.timeutils import utc_now


@dataclass(frozen=True)
class Coding:
    """A code from a code system."""

    system: str
    code: str
    display: str

    def to_dict(self) -> dict:
        return {"system": self.system, "code": self.code, "display": self.display}


@dataclass(frozen=True)
class CodeableConcept:
    """One or more codings plus optional text."""

    coding: tuple[Coding, ...]
    text: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"coding": [c.to_dict() for c in self.coding]}
        if self.text is not None:
            data["text"] = self.text
        return data


@dataclass(frozen=True)
class Quantity:
    """A measured value with its unit."""

    value: float
    unit: str
    system: str
    code: str

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "unit": self.unit,
            "system": self.system,
            "code": self.code,
        }


@dataclass(frozen=True)
class ObservationComponent:
    """A coded sub-observation carrying either a quantity or a string."""

    code: CodeableConcept
    value_quantity: Optional[Quantity] = None
    value_string: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"code": self.code.to_dict()}
        if self.value_quantity is not None:
            data["valueQuantity"] = self.value_quantity.to_dict()
        if self.value_string is not None:
            data["valueString"] = self.value_string
        return data


@dataclass(frozen=True)
class ObservationRecord:
    """
    Coded export of one mood entry.

    Attributes:
        id: Observation id (the mood entry id)
        status: Observation status
        category: Observation category
        code: What was observed (emotional state)
        subject_reference: Patient reference, e.g. "Patient/123"
        effective_date_time: When the mood was recorded
        value_codeable_concept: Coded primary mood, absent for uncoded moods
        components: Intensity, colors, coping strategies and triggers
    """

    id: str
    status: str
    category: tuple[CodeableConcept, ...]
    code: CodeableConcept
    subject_reference: str
    effective_date_time: datetime
    value_codeable_concept: Optional[CodeableConcept] = None
    components: tuple[ObservationComponent, ...] = ()

    resource_type: str = "Observation"

    def component_for(self, code: str) -> Optional[ObservationComponent]:
        """Find the component coded with the given code."""
        for component in self.components:
            if any(c.code == code for c in component.code.coding):
                return component
        return None

    def to_dict(self) -> dict:
        """Serialize using the interchange field names."""
        data: dict = {
            "resourceType": self.resource_type,
            "id": self.id,
            "status": self.status,
            "category": [c.to_dict() for c in self.category],
            "code": self.code.to_dict(),
            "subject": {"reference": self.subject_reference},
            "effectiveDateTime": self.effective_date_time.isoformat(),
        }
        if self.value_codeable_concept is not None:
            data["valueCodeableConcept"] = self.value_codeable_concept.to_dict()
        data["component"] = [c.to_dict() for c in self.components]
        return data


@dataclass(frozen=True)
class TrendSummary:
    """
    Mood trend over a set of entries.

    Attributes:
        direction: Improving, declining or stable
        average_intensity: Mean intensity across all entries
        most_common_mood: Most frequent primary mood
        entry_count: Number of entries considered
    """

    direction: TrendDirection
    average_intensity: float
    most_common_mood: str
    entry_count: int = 0

    def to_dict(self) -> dict:
        return {
            "trend": self.direction.value,
            "average_intensity": round(self.average_intensity, 2),
            "most_common_mood": self.most_common_mood,
            "entry_count": self.entry_count,
        }


@dataclass(frozen=True)
class ClinicalAlert:
    """
    Alert raised by rule evaluation over recent entries.

    Attributes:
        level: Info, warning or urgent
        message: Fixed rule message
        timestamp: When the rules were evaluated
        rule: Identifier of the rule that fired
    """

    level: AlertLevel
    message: str
    timestamp: datetime = field(default_factory=utc_now)
    rule: str = ""

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "rule": self.rule,
        }


@dataclass(frozen=True)
class MoodTrendPoint:
    """One entry as a point on the report's mood chart."""

    date: str
    mood: str
    intensity: int

    def to_dict(self) -> dict:
        return {"date": self.date, "mood": self.mood, "intensity": self.intensity}


@dataclass
class GuardianReport:
    """
    Periodic wellness summary for guardians and care teams.

    Attributes:
        patient_id: Child the report covers
        period_start: Start of the reporting window
        period_end: End of the reporting window
        generated_at: When the report was built
        total_sessions: Entries in the window
        average_mood_score: Mean intensity in the window
        most_frequent_mood: Most frequent primary mood
        trend: Direction across the window
        concerning_patterns: Patterns worth attention
        positive_patterns: Patterns worth encouraging
        recommendations: Suggested next steps
        clinical_alerts: Alerts evaluated at report time
        mood_trends: Chronological chart points
    """

    patient_id: str
    period_start: datetime
    period_end: datetime
    generated_at: datetime = field(default_factory=utc_now)
    total_sessions: int = 0
    average_mood_score: float = 0.0
    most_frequent_mood: str = ""
    trend: TrendDirection = TrendDirection.STABLE
    concerning_patterns: list[str] = field(default_factory=list)
    positive_patterns: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    clinical_alerts: list[ClinicalAlert] = field(default_factory=list)
    mood_trends: list[MoodTrendPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "patient_id": self.patient_id,
            "report_period": {
                "start": self.period_start.isoformat(),
                "end": self.period_end.isoformat(),
            },
            "generated_at": self.generated_at.isoformat(),
            "summary": {
                "total_sessions": self.total_sessions,
                "average_mood_score": round(self.average_mood_score, 2),
                "most_frequent_mood": self.most_frequent_mood,
                "trend": self.trend.value,
                "concerning_patterns": self.concerning_patterns,
                "positive_patterns": self.positive_patterns,
            },
            "recommendations": self.recommendations,
            "clinical_alerts": [a.to_dict() for a in self.clinical_alerts],
            "mood_trends": [p.to_dict() for p in self.mood_trends],
        }


@dataclass(frozen=True)
class Insight:
    """
    An observation about a mood history.

    Attributes:
        insight_type: Kind of insight, e.g. "time_of_day"
        description: Readable description
        confidence: Share of the history supporting the insight (0.0-1.0)
        significance: How much weight it deserves
    """

    insight_type: str
    description: str
    confidence: float
    significance: InsightSignificance = InsightSignificance.LOW

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be 0.0-1.0, got {self.confidence}")

    def to_dict(self) -> dict:
        return {
            "type": self.insight_type,
            "description": self.description,
            "confidence": round(self.confidence, 3),
            "significance": self.significance.value,
        }
