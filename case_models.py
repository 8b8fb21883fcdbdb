# case_models.py
# Immutable snapshot of one medico-legal case, as handed over by the case store.
# Keys arrive in camelCase (the store's JSON); snake_case names work too.
# A null or unreadable value falls back to the field's default; only a missing
# case as a whole is fatal.

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from report_errors import MissingCaseDataError

logger = logging.getLogger(__name__)


class _Section(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="wrap")
    @classmethod
    def _absorb_bad_values(cls, value: Any, handler, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if value is None:
            return default
        if isinstance(value, list):
            value = [item for item in value if item is not None]
        try:
            return handler(value)
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"] if exc.error_count() else "invalid value"
            logger.warning("Ignoring unreadable %s.%s: %s", cls.__name__, info.field_name, reason)
        if isinstance(default, list) and isinstance(value, list):
            # keep the entries that do validate
            kept = []
            for item in value:
                try:
                    kept.extend(handler([item]))
                except ValidationError:
                    continue
            return kept
        return default


def _aliases(*names: str) -> AliasChoices:
    return AliasChoices(*names)


# ---------- Claimant ----------
class Identification(_Section):
    type: Optional[str] = None


class ClaimantDetails(_Section):
    full_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    identification: Optional[Identification] = None
    accompanied_by: Optional[str] = None
    date_of_report: Optional[str] = None
    date_of_examination: Optional[str] = None
    time_spent: Optional[str] = None
    help_with_communication: bool = False
    interpreter_name: Optional[str] = None
    interpreter_relationship: Optional[str] = None
    place_of_examination: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    instructing_party: Optional[str] = None
    instructing_party_ref: Optional[str] = None
    solicitor_name: Optional[str] = None
    reference_number: Optional[str] = None
    medco_ref_number: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _flat_identification(cls, data: Any) -> Any:
        # Older forms send the identification type as a flat string.
        if isinstance(data, Mapping) and "identification" not in data:
            flat = data.get("identificationProvided") or data.get("identification_provided")
            if flat:
                data = dict(data)
                data["identification"] = {"type": flat}
        return data


# ---------- Accident ----------
class Witness(_Section):
    name: Optional[str] = None
    phone: Optional[str] = None
    statement: Optional[str] = None


class AccidentDetails(_Section):
    accident_date: Optional[str] = None
    time_of_day: Optional[str] = None
    vehicle_location: Optional[str] = None
    weather_conditions: Optional[str] = None
    accident_type: Optional[str] = None
    accident_description: Optional[str] = None
    vehicle_type: Optional[str] = None
    claimant_position: Optional[str] = Field(
        None, validation_alias=_aliases("claimantPosition", "vehiclePosition", "claimant_position")
    )
    speed: Optional[str] = None
    third_party_vehicle: Optional[str] = None
    impact_location: Optional[str] = Field(
        None, validation_alias=_aliases("impactLocation", "impactType", "impact_location")
    )
    vehicle_movement: Optional[str] = None
    was_moving: Optional[bool] = None
    damage_severity: Optional[str] = None
    collision_impact: Optional[str] = None
    seat_belt_worn: bool = Field(
        True, validation_alias=_aliases("seatBeltWorn", "wearingSeatbelt", "seat_belt_worn")
    )
    head_rest_fitted: bool = Field(
        True, validation_alias=_aliases("headRestFitted", "hadHeadrest", "head_rest_fitted")
    )
    air_bag_deployed: bool = Field(
        False, validation_alias=_aliases("airBagDeployed", "airbagDeployed", "air_bag_deployed")
    )
    police_attended: Optional[bool] = None
    police_report_number: Optional[str] = None
    police_station: Optional[str] = None
    witnesses: List[Witness] = Field(default_factory=list)


# ---------- Physical injury ----------
class Injury(_Section):
    type: Optional[str] = None
    description: Optional[str] = None
    onset_time: Optional[str] = Field(
        None, validation_alias=_aliases("onsetTime", "onsetTiming", "onset", "onset_time")
    )
    initial_severity: Optional[str] = None
    current_severity: Optional[str] = Field(
        None, validation_alias=_aliases("currentSeverity", "severityGrade", "current_severity")
    )
    resolution_days: Optional[str] = None
    # Stored values are kept for reference only; the report always re-derives them.
    mechanism: Optional[str] = None
    classification: Optional[str] = None
    needs_specialist_referral: bool = False
    wants_physiotherapy: Optional[bool] = None

    @property
    def name(self) -> str:
        """Display name; "Other" injuries use their free-text description."""
        if (self.type or "").strip().lower() == "other" and self.description:
            return self.description.strip()
        return (self.type or "").strip()


class PhysicalInjury(_Section):
    injuries: List[Injury] = Field(default_factory=list)
    other_injuries_description: Optional[str] = None
    additional_notes: Optional[str] = None
    physical_injury_summary: Optional[str] = None


# ---------- Psychological ----------
class Diagnosis(_Section):
    diagnosis: Optional[str] = None
    date: Optional[str] = None
    provider: Optional[str] = None


class PsychologicalInjuries(_Section):
    symptoms: List[str] = Field(default_factory=list)
    diagnoses: List[Diagnosis] = Field(default_factory=list)
    travel_anxiety_symptoms: List[str] = Field(default_factory=list)
    travel_anxiety_onset: Optional[str] = None
    travel_anxiety_initial_severity: Optional[str] = None
    travel_anxiety_current_severity: Optional[str] = None
    travel_anxiety_resolution_days: Optional[str] = None
    summary: Optional[str] = None


# ---------- Treatments ----------
class Treatments(_Section):
    received_treatment_at_scene: Optional[bool] = None
    scene_first_aid: Optional[bool] = None
    scene_neck_collar: Optional[bool] = None
    scene_ambulance_arrived: Optional[bool] = None
    scene_police_arrived: Optional[bool] = None
    scene_other_treatment: Optional[bool] = None
    scene_other_treatment_details: Optional[str] = None

    went_to_hospital: Optional[bool] = None
    hospital_name: Optional[str] = None
    hospital_no_treatment: Optional[bool] = None
    hospital_x_ray: Optional[bool] = None
    hospital_ct_scan: Optional[bool] = Field(
        None, validation_alias=_aliases("hospitalCTScan", "hospitalCtScan", "hospital_ct_scan")
    )
    hospital_bandage: Optional[bool] = None
    hospital_neck_collar: Optional[bool] = None
    hospital_other_treatment: Optional[bool] = None
    hospital_other_treatment_details: Optional[str] = None

    went_to_gp_walk_in: Optional[bool] = Field(
        None, validation_alias=_aliases("wentToGPWalkIn", "wentToGpWalkIn", "went_to_gp_walk_in")
    )
    days_to_gp_walk_in: Optional[str] = Field(
        None, validation_alias=_aliases("daysToGPWalkIn", "daysToGpWalkIn", "days_to_gp_walk_in")
    )

    taking_paracetamol: Optional[bool] = None
    taking_ibuprofen: Optional[bool] = None
    taking_codeine: Optional[bool] = None
    taking_other_medication: Optional[bool] = None
    other_medication_details: Optional[str] = None

    physiotherapy_sessions: Optional[str] = None
    treatment_summary: Optional[str] = None

    emergency_treatment: Optional[str] = None
    gp_visits: Optional[str] = None
    gp_treatment_details: Optional[str] = None
    hospital_treatment: Optional[str] = None
    physiotherapy: Optional[str] = None
    physiotherapy_details: Optional[str] = None
    other_treatments: Optional[str] = None
    current_medication: Optional[str] = None


# ---------- Lifestyle ----------
class LifestyleImpact(_Section):
    current_job_title: Optional[str] = None
    work_status: Optional[str] = None
    second_job: Optional[str] = None
    days_off_work: Optional[str] = None
    days_light_duties: Optional[str] = None
    work_difficulties: List[str] = Field(default_factory=list)
    work_other_details: Optional[str] = None

    has_sleep_disturbance: Optional[bool] = None
    sleep_disturbances: List[str] = Field(default_factory=list)
    sleep_other_details: Optional[str] = None

    has_domestic_impact: Optional[bool] = None
    domestic_activities: List[str] = Field(default_factory=list)
    domestic_other_details: Optional[str] = None
    lives_with_who: Optional[str] = None
    number_of_children: Optional[str] = None

    has_sport_leisure_impact: Optional[bool] = None
    sport_leisure_activities: List[str] = Field(default_factory=list)
    sport_leisure_other_details: Optional[str] = None

    has_social_impact: Optional[bool] = None
    social_activities: List[str] = Field(default_factory=list)
    social_other_details: Optional[str] = None

    lifestyle_summary: Optional[str] = None
    impact_summary: Optional[str] = None


# ---------- Family history ----------
class FamilyHistory(_Section):
    has_previous_accident: Optional[bool] = None
    previous_accident_year: Optional[str] = None
    previous_accident_recovery: Optional[str] = None
    has_previous_medical_condition: Optional[bool] = None
    previous_medical_condition_details: Optional[str] = None
    has_exceptional_severity: Optional[bool] = None
    has_exceptional_circumstances: Optional[bool] = None
    physiotherapy_preference: Optional[str] = None
    additional_notes: Optional[str] = None
    medical_history_summary: Optional[str] = None
    history_summary: Optional[str] = None


# ---------- Prognosis ----------
class Prognosis(_Section):
    overall_prognosis: Optional[str] = None
    expected_recovery_time: Optional[str] = None
    permanent_impairment: Optional[str] = None
    future_care_plans: Optional[str] = None
    treatment_recommendations: List[str] = Field(default_factory=list)
    additional_notes: Optional[str] = None


# ---------- Expert ----------
class ExpertDetails(_Section):
    examiner: Optional[str] = None
    credentials: Optional[str] = None
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    licensure_state: Optional[str] = None
    experience_years: Optional[str] = None
    contact_information: Optional[str] = None
    signature_date: Optional[str] = None
    date_of_report: Optional[str] = None


class Case(_Section):
    case_number: Optional[str] = None
    claimant_details: Optional[ClaimantDetails] = None
    accident_details: Optional[AccidentDetails] = None
    physical_injury: Optional[PhysicalInjury] = Field(
        None,
        validation_alias=_aliases("physicalInjuryDetails", "physicalInjury", "physical_injury"),
    )
    psychological_injuries: Optional[PsychologicalInjuries] = Field(
        None,
        validation_alias=_aliases(
            "psychologicalInjuries", "psychologicalInjury", "psychological_injuries"
        ),
    )
    treatments: Optional[Treatments] = None
    lifestyle_impact: Optional[LifestyleImpact] = None
    family_history: Optional[FamilyHistory] = None
    prognosis: Optional[Prognosis] = None
    expert_details: Optional[ExpertDetails] = None

    @property
    def claimant_name(self) -> Optional[str]:
        if self.claimant_details and self.claimant_details.full_name:
            return self.claimant_details.full_name.strip() or None
        return None

    @property
    def injuries(self) -> List[Injury]:
        return list(self.physical_injury.injuries) if self.physical_injury else []


def load_case(data: Union[Case, Mapping[str, Any], None]) -> Case:
    """
    Validate raw case data (parsed JSON from the case store) into a Case.
    A missing case, or one that is not a mapping, is the one structural failure
    a render can have; bad values inside it fall back to their defaults.
    """
    if data is None:
        raise MissingCaseDataError("No case data supplied; there is nothing to lay out.")
    if isinstance(data, Case):
        return data
    if not isinstance(data, Mapping):
        raise MissingCaseDataError(f"Case data must be a mapping, got {type(data).__name__}.")
    try:
        return Case.model_validate(dict(data))
    except ValidationError as exc:
        raise MissingCaseDataError(
            f"Case data could not be read ({exc.error_count()} invalid field(s))."
        ) from exc
