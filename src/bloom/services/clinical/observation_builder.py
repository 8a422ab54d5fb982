"""
Observation Builder

Codes a mood entry as an observation record for exchange with
clinical systems.

CLINICAL_VALIDATION_REQUIRED: The SNOMED mapping reuses codes across
several moods and has not been reviewed by a terminologist.
"""

from bloom.domain.models.clinical_output import (
    CodeableConcept,
    Coding,
    ObservationComponent,
    ObservationRecord,
    Quantity,
)
from bloom.domain.models.mood_entry import MoodEntry

LOINC_SYSTEM = "http://loinc.org"
SNOMED_SYSTEM = "http://snomed.info/sct"
UCUM_SYSTEM = "http://unitsofmeasure.org"
CATEGORY_SYSTEM = "http://terminology.hl7.org/CodeSystem/observation-category"
EMOTION_COLORS_SYSTEM = "http://example.org/emotion-colors"

# Field codes
LOINC_EMOTIONAL_STATE = "72133-2"
LOINC_MOOD_INTENSITY = "72136-5"
LOINC_COPING_STRATEGY = "72137-3"
LOINC_TRIGGER_EVENT = "72138-1"
MOOD_COLORS_CODE = "mood-colors"

# mood id -> (code, display)
EMOTION_CODES: dict[str, tuple[str, str]] = {
    "happy": ("112080002", "Happy"),
    "sad": ("224960004", "Sad"),
    "angry": ("48694002", "Angry"),
    "worried": ("48694002", "Anxious"),
    "excited": ("112080002", "Excited"),
    "calm": ("112080002", "Calm"),
    "tired": ("224960004", "Tired"),
    "confused": ("40917007", "Confused"),
}

SURVEY_CATEGORY = CodeableConcept(
    coding=(Coding(system=CATEGORY_SYSTEM, code="survey", display="Survey"),)
)


def _loinc(code: str, display: str) -> CodeableConcept:
    return CodeableConcept(coding=(Coding(system=LOINC_SYSTEM, code=code, display=display),))


class ObservationBuilder:
    """
    Maps mood entries to observation records.

    Deterministic: the same entry always yields the same record.
    Unmapped moods produce a record without a coded value. Empty
    colors, coping strategies and triggers are left out.
    """

    STATUS: str = "final"

    def to_observation(self, entry: MoodEntry) -> ObservationRecord:
        """
        Build the observation for a mood entry.

        Args:
            entry: Entry to code

        Returns:
            ObservationRecord
        """
        value = None
        mapped = EMOTION_CODES.get(entry.mood)
        if mapped is not None:
            code, display = mapped
            value = CodeableConcept(
                coding=(Coding(system=SNOMED_SYSTEM, code=code, display=display),),
                text=entry.mood,
            )

        components = [
            ObservationComponent(
                code=_loinc(LOINC_MOOD_INTENSITY, "Mood intensity"),
                value_quantity=Quantity(
                    value=entry.intensity,
                    unit="score",
                    system=UCUM_SYSTEM,
                    code="{score}",
                ),
            )
        ]

        if entry.colors:
            components.append(
                ObservationComponent(
                    code=CodeableConcept(coding=(
                        Coding(system=EMOTION_COLORS_SYSTEM, code=MOOD_COLORS_CODE, display="Mood colors"),
                    )),
                    value_string=", ".join(entry.colors),
                )
            )

        if entry.coping_strategies:
            components.append(
                ObservationComponent(
                    code=_loinc(LOINC_COPING_STRATEGY, "Coping strategy"),
                    value_string=", ".join(entry.coping_strategies),
                )
            )

        if entry.triggers:
            components.append(
                ObservationComponent(
                    code=_loinc(LOINC_TRIGGER_EVENT, "Trigger event"),
                    value_string=", ".join(entry.triggers),
                )
            )

        return ObservationRecord(
            id=str(entry.id),
            status=self.STATUS,
            category=(SURVEY_CATEGORY,),
            code=_loinc(LOINC_EMOTIONAL_STATE, "Emotional state"),
            subject_reference=f"Patient/{entry.patient_id}",
            effective_date_time=entry.timestamp,
            value_codeable_concept=value,
            components=tuple(components),
        )
