# narrative.py
# Rule tables that turn structured case fields into report prose.
# Every function returns a usable string for any input, including None.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from case_models import (
    AccidentDetails,
    ClaimantDetails,
    FamilyHistory,
    Injury,
    LifestyleImpact,
    PhysicalInjury,
    PsychologicalInjuries,
    Treatments,
)
from report_text import EXCEPTIONAL_CLAIMED, EXCEPTIONAL_NOT_CLAIMED, DEFAULT_HISTORY
from text_utils import NOT_PROVIDED, format_date, join_items, text_or_default


class InjuryClass(str, Enum):
    WHIPLASH = "Whiplash"
    WHIPLASH_ASSOCIATED = "Whiplash Associated"
    NON_WHIPLASH = "Non-whiplash"
    PSYCHOLOGICAL = "Psychological"

    @property
    def is_whiplash_family(self) -> bool:
        return self in (InjuryClass.WHIPLASH, InjuryClass.WHIPLASH_ASSOCIATED)


# Checked in order; the first keyword hit wins.
_CLASSIFICATION_RULES: Tuple[Tuple[Tuple[str, ...], InjuryClass], ...] = (
    (("neck", "shoulder", "back"), InjuryClass.WHIPLASH),
    (("headache",), InjuryClass.WHIPLASH_ASSOCIATED),
    (("bruising",), InjuryClass.NON_WHIPLASH),
    (("anxiety", "stress", "depression", "trauma"), InjuryClass.PSYCHOLOGICAL),
)

_PROGNOSIS_MONTHS = {"mild": 3, "moderate": 6, "severe": 9}

_ONSET_LABELS = {"immediate": "Same day", "delayed": "Next day"}

_PHYSIO_PREFERENCE = {
    "yes": True,
    "already ongoing": True,
    "no": False,
    "already recovered": False,
}

_SPECIALISTS = {
    InjuryClass.WHIPLASH: "Orthopaedic Specialist",
    InjuryClass.WHIPLASH_ASSOCIATED: "Orthopaedic Specialist",
    InjuryClass.NON_WHIPLASH: "Orthopaedic Specialist",
    InjuryClass.PSYCHOLOGICAL: "Clinical Psychologist",
}


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def is_resolved(severity: Optional[str]) -> bool:
    return _norm(severity) == "resolved"


# ---------- Classification & mechanism ----------
def classify_injury(name: Optional[str]) -> InjuryClass:
    """Keyword classification of an injury name; unknown names are non-whiplash."""
    lowered = _norm(name)
    for keywords, injury_class in _CLASSIFICATION_RULES:
        if any(k in lowered for k in keywords):
            return injury_class
    return InjuryClass.NON_WHIPLASH


def jolt_direction(impact: Optional[str]) -> str:
    lowered = _norm(impact)
    if "rear" in lowered:
        return "forward"
    if "front" in lowered:
        return "backward"
    if "side" in lowered:
        return "sideways"
    return "forward/backward"


def describe_mechanism(injury_class: InjuryClass, impact: Optional[str]) -> str:
    if injury_class.is_whiplash_family:
        return (
            f"Due to sudden jolt {jolt_direction(impact)} during the collision. "
            f"It is classified as a {injury_class.value} injury."
        )
    if injury_class is InjuryClass.PSYCHOLOGICAL:
        return (
            "Due to the psychological impact of the accident and its aftermath. "
            "It is classified as a psychological injury related to the accident."
        )
    return (
        "It was due to the direct trauma. It is classified as a non-whiplash injury and "
        "falls within subsection 1.3 of the Civil Liability Act 2018."
    )


def describe_examination(injury_class: InjuryClass, severity: Optional[str]) -> str:
    if is_resolved(severity):
        return "No findings upon examination as the injury has resolved."
    if injury_class is InjuryClass.PSYCHOLOGICAL:
        return "Based on patient interview and self-reported symptoms. No physical examination findings."

    tenderness = _norm(severity) if _norm(severity) in _PROGNOSIS_MONTHS else "mild"
    if injury_class.is_whiplash_family:
        return (
            f"Palpation: {tenderness} tenderness\n"
            "Range of Motion: Flexion and extension limited due to pain\n"
            "Neurological Assessment: normal."
        )
    return (
        f"Inspection: {tenderness} visible signs\n"
        f"Palpation: {tenderness} tenderness on palpation\n"
        "Neurological Assessment: normal."
    )


# ---------- Status, prognosis & treatment ----------
def current_status(severity: Optional[str]) -> str:
    if is_resolved(severity):
        return "Resolved"
    if not _norm(severity):
        return NOT_PROVIDED
    return f"{severity.strip()} symptoms currently present"


def prognosis_duration(severity: Optional[str], needs_specialist_referral: bool = False) -> str:
    """Short prognosis for the summary table. Resolved always wins."""
    if is_resolved(severity):
        return "Resolved"
    if needs_specialist_referral:
        return "Per specialist report"
    months = _PROGNOSIS_MONTHS.get(_norm(severity))
    if months is None:
        return "To be determined"
    return f"{months} months"


def prognosis_statement(
    severity: Optional[str],
    needs_specialist_referral: bool = False,
    resolution_days: Optional[str] = None,
) -> str:
    if is_resolved(severity):
        if resolution_days and str(resolution_days).strip():
            return f"Resolved. The injury resolved within {str(resolution_days).strip()} days of the accident."
        return "Resolved. The injury has resolved with no expected ongoing symptoms."
    if needs_specialist_referral:
        return "Prognosis to be provided by the referred expert in an additional report."
    months = _PROGNOSIS_MONTHS.get(_norm(severity))
    if months is None:
        return "Prognosis uncertain at this time and will depend on response to treatment."
    return f"Expected recovery within {months} months from the date of accident."


def physiotherapy_wanted(
    injury: Optional[Injury], family_history: Optional[FamilyHistory] = None
) -> Optional[bool]:
    """Injury-level preference first, then the case-wide physiotherapy preference."""
    if injury is not None and injury.wants_physiotherapy is not None:
        return injury.wants_physiotherapy
    if family_history is not None:
        return _PHYSIO_PREFERENCE.get(_norm(family_history.physiotherapy_preference))
    return None


def treatment_recommendation(severity: Optional[str], wants_physiotherapy: Optional[bool]) -> str:
    if is_resolved(severity):
        return "None needed"
    if wants_physiotherapy is True:
        return "Physiotherapy"
    if wants_physiotherapy is False:
        return "Pain medication"
    return "Standard care advised"


def treatment_statement(severity: Optional[str], wants_physiotherapy: Optional[bool]) -> str:
    short = treatment_recommendation(severity, wants_physiotherapy)
    if short == "None needed":
        return "No further treatment needed as the injury has resolved."
    if short == "Physiotherapy":
        return "Physiotherapy is recommended. Number of sessions to be advised by the referred expert."
    if short == "Pain medication":
        return (
            "Pain management with appropriate over-the-counter pain medication as the "
            "claimant does not want physiotherapy."
        )
    return "Standard care advised: rest, gradual return to normal activities and simple pain relief as required."


def additional_report(injury_class: InjuryClass, needs_specialist_referral: bool) -> str:
    if not needs_specialist_referral:
        return "No"
    return f"Yes ({_SPECIALISTS[injury_class]})"


def onset_label(onset: Optional[str]) -> str:
    lowered = _norm(onset)
    if not lowered:
        return NOT_PROVIDED
    return _ONSET_LABELS.get(lowered, onset.strip())


@dataclass(frozen=True)
class InjuryNarrative:
    name: str
    onset: str
    initial_severity: str
    current_severity: str
    classification: InjuryClass
    mechanism: str
    examination: str
    status: str
    prognosis: str
    prognosis_statement: str
    treatment: str
    treatment_statement: str
    additional_report: str


def narrate_injury(
    injury: Injury,
    accident: Optional[AccidentDetails] = None,
    family_history: Optional[FamilyHistory] = None,
    index: int = 1,
) -> InjuryNarrative:
    """Derive every prose field for one injury. Stored mechanism/classification are ignored."""
    name = injury.name or f"Injury {index}"
    injury_class = classify_injury(injury.name)
    impact = accident.impact_location if accident else None
    severity = injury.current_severity
    physio = physiotherapy_wanted(injury, family_history)
    return InjuryNarrative(
        name=name,
        onset=onset_label(injury.onset_time),
        initial_severity=text_or_default(injury.initial_severity),
        current_severity=text_or_default(severity),
        classification=injury_class,
        mechanism=describe_mechanism(injury_class, impact),
        examination=describe_examination(injury_class, severity),
        status=current_status(severity),
        prognosis=prognosis_duration(severity, injury.needs_specialist_referral),
        prognosis_statement=prognosis_statement(
            severity, injury.needs_specialist_referral, injury.resolution_days
        ),
        treatment=treatment_recommendation(severity, physio),
        treatment_statement=treatment_statement(severity, physio),
        additional_report=additional_report(injury_class, injury.needs_specialist_referral),
    )


# ---------- Section summaries ----------
def communication_help(claimant: Optional[ClaimantDetails]) -> str:
    if claimant is None or not claimant.help_with_communication:
        return "No"
    name = (claimant.interpreter_name or "").strip()
    relation = (claimant.interpreter_relationship or "").strip()
    if name and relation:
        return f"Yes - {name} ({relation})"
    if name:
        return f"Yes - {name}"
    return "Yes"


def exceptional_circumstances_text(family_history: Optional[FamilyHistory]) -> str:
    claimed = family_history is not None and (
        family_history.has_exceptional_circumstances is True
        or family_history.has_exceptional_severity is True
    )
    return EXCEPTIONAL_CLAIMED if claimed else EXCEPTIONAL_NOT_CLAIMED


def _moving_phrase(accident: AccidentDetails) -> Optional[str]:
    if accident.was_moving is not None:
        return "moving" if accident.was_moving else "stationary"
    movement = _norm(accident.vehicle_movement)
    if movement in ("stationary", "parked"):
        return "stationary"
    if movement == "moving":
        return "moving"
    return None


def accident_summary(accident: Optional[AccidentDetails]) -> str:
    if accident is None:
        return "No accident details were provided."

    when = format_date(accident.accident_date) if accident.accident_date else "the reported date"
    position = _norm(accident.claimant_position)
    vehicle = _norm(accident.vehicle_type) or "vehicle"
    role = f"the {position}" if position else "an occupant"
    impact = _norm(accident.impact_location).replace("-end", "")

    sentence = f"On {when}, the claimant was {role} of the {vehicle} when another vehicle hit the claimant's vehicle"
    if impact:
        sentence += f" in the {impact}"
    moving = _moving_phrase(accident)
    if moving:
        sentence += f" while it was {moving}"
    parts = [sentence + f". As a result the claimant was jolted {jolt_direction(accident.impact_location)}."]

    if accident.damage_severity:
        parts.append(f"The claimant's vehicle was {accident.damage_severity.strip().lower()}.")
    parts.append(
        "The claimant was {} a seat belt, the head rest was {} and the air bags {} deploy.".format(
            "wearing" if accident.seat_belt_worn else "not wearing",
            "fitted" if accident.head_rest_fitted else "not fitted",
            "did" if accident.air_bag_deployed else "did not",
        )
    )
    if accident.accident_description and accident.accident_description.strip():
        parts.append(accident.accident_description.strip())
    return " ".join(parts)


def injury_summary(
    physical: Optional[PhysicalInjury],
    accident: Optional[AccidentDetails] = None,
    family_history: Optional[FamilyHistory] = None,
) -> str:
    if physical is not None and physical.physical_injury_summary and physical.physical_injury_summary.strip():
        return physical.physical_injury_summary.strip()
    injuries = physical.injuries if physical else []
    if not injuries:
        return "No physical injuries were reported."
    described = []
    for i, injury in enumerate(injuries, 1):
        n = narrate_injury(injury, accident, family_history, i)
        described.append(f"{n.name} ({n.classification.value}, {n.status.lower()})")
    noun = "injury" if len(described) == 1 else "injuries"
    return f"The claimant sustained {len(described)} {noun}: {'; '.join(described)}."


def psychological_summary(psych: Optional[PsychologicalInjuries]) -> str:
    if psych is None:
        return "No psychological injuries were reported."
    if psych.summary and psych.summary.strip():
        return psych.summary.strip()
    parts = []
    if psych.symptoms:
        parts.append(f"The claimant reports {join_items(psych.symptoms).lower()}.")
    if psych.travel_anxiety_symptoms:
        parts.append(
            f"Travel anxiety: {join_items(psych.travel_anxiety_symptoms).lower()}, "
            f"currently {current_status(psych.travel_anxiety_current_severity).lower()}."
        )
    return " ".join(parts) or "No psychological symptoms were reported."


def scene_treatments(t: Treatments) -> List[str]:
    items = []
    if t.scene_first_aid:
        items.append("First aid")
    if t.scene_neck_collar:
        items.append("Neck collar")
    if t.scene_ambulance_arrived:
        items.append("Ambulance attendance")
    if t.scene_police_arrived:
        items.append("Police attendance")
    if t.scene_other_treatment and t.scene_other_treatment_details:
        items.append(t.scene_other_treatment_details.strip())
    return items


def hospital_treatments(t: Treatments) -> List[str]:
    if t.hospital_no_treatment:
        return ["No treatment given"]
    items = []
    if t.hospital_x_ray:
        items.append("X-Ray")
    if t.hospital_ct_scan:
        items.append("CT Scan")
    if t.hospital_bandage:
        items.append("Bandage")
    if t.hospital_neck_collar:
        items.append("Neck collar")
    if t.hospital_other_treatment and t.hospital_other_treatment_details:
        items.append(t.hospital_other_treatment_details.strip())
    return items


def medications(t: Treatments) -> List[str]:
    items = []
    if t.taking_paracetamol:
        items.append("Paracetamol")
    if t.taking_ibuprofen:
        items.append("Ibuprofen")
    if t.taking_codeine:
        items.append("Codeine")
    if t.taking_other_medication and t.other_medication_details:
        items.append(t.other_medication_details.strip())
    return items


def treatment_summary(t: Optional[Treatments]) -> str:
    if t is None:
        return "No treatment information was provided."
    if t.treatment_summary and t.treatment_summary.strip():
        return t.treatment_summary.strip()

    parts = ["The claimant reports the following treatment history:"]
    scene = scene_treatments(t)
    if t.emergency_treatment:
        parts.append(f"Emergency treatment: {t.emergency_treatment.strip()}.")
    elif t.received_treatment_at_scene or scene:
        parts.append(f"Treatment at the scene: {join_items(scene, 'unspecified')}.")
    else:
        parts.append("No emergency treatment was required at the time of the accident.")

    if t.gp_visits:
        parts.append(f"GP visits: {t.gp_visits.strip()}. {t.gp_treatment_details or ''}".strip())
    elif t.went_to_gp_walk_in:
        days = f" {t.days_to_gp_walk_in.strip()} days after the accident" if t.days_to_gp_walk_in else ""
        parts.append(f"The claimant attended a GP or walk-in centre{days}.")
    else:
        parts.append("No GP visits were required.")

    if t.hospital_treatment:
        parts.append(f"Hospital treatment: {t.hospital_treatment.strip()}.")
    elif t.went_to_hospital:
        where = f" at {t.hospital_name.strip()}" if t.hospital_name else ""
        parts.append(f"The claimant attended hospital{where} ({join_items(hospital_treatments(t), 'treatment unspecified')}).")
    else:
        parts.append("No hospital treatment was required.")

    if t.physiotherapy or t.physiotherapy_sessions:
        sessions = text_or_default(t.physiotherapy_sessions, "an unknown number of")
        parts.append(f"Physiotherapy: {sessions} sessions. {t.physiotherapy_details or ''}".strip())
    else:
        parts.append("No physiotherapy was received.")

    if t.other_treatments:
        parts.append(f"Other treatments: {t.other_treatments.strip()}.")

    meds = t.current_medication.strip() if t.current_medication else join_items(medications(t), "")
    parts.append(f"Current medication: {meds}." if meds else "No current medications reported.")
    return " ".join(parts)


def impact_line(flag: Optional[bool], activities: List[str], other: Optional[str] = None) -> str:
    if flag is None and not activities:
        return NOT_PROVIDED
    if flag is False:
        return "No impact reported"
    return join_items(list(activities) + ([other] if other else []), "Affected")


def lifestyle_summary(lifestyle: Optional[LifestyleImpact]) -> str:
    if lifestyle is None:
        return "No impact summary provided"
    for supplied in (lifestyle.impact_summary, lifestyle.lifestyle_summary):
        if supplied and supplied.strip():
            return supplied.strip()

    parts = []
    if lifestyle.days_off_work:
        parts.append(f"The claimant took {lifestyle.days_off_work.strip()} days off work.")
    if lifestyle.days_light_duties:
        parts.append(f"The claimant was on light duties for {lifestyle.days_light_duties.strip()} days.")
    areas = (
        ("Domestic", lifestyle.has_domestic_impact, lifestyle.domestic_activities),
        ("Sleep", lifestyle.has_sleep_disturbance, lifestyle.sleep_disturbances),
        ("Sport and leisure", lifestyle.has_sport_leisure_impact, lifestyle.sport_leisure_activities),
        ("Social", lifestyle.has_social_impact, lifestyle.social_activities),
    )
    for label, flag, activities in areas:
        if flag:
            parts.append(f"{label} life was affected ({join_items(activities, 'unspecified').lower()}).")
    return " ".join(parts) or "No impact on daily life was reported."


def history_summary(family_history: Optional[FamilyHistory]) -> str:
    if family_history is None:
        return DEFAULT_HISTORY
    for supplied in (family_history.history_summary, family_history.medical_history_summary):
        if supplied and supplied.strip():
            return supplied.strip()

    parts = []
    if family_history.has_previous_accident:
        year = f" in {family_history.previous_accident_year.strip()}" if family_history.previous_accident_year else ""
        recovery = _norm(family_history.previous_accident_recovery)
        tail = f" with {recovery} recovery" if recovery else ""
        parts.append(f"The claimant was involved in a previous road traffic accident{year}{tail}.")
    if family_history.has_previous_medical_condition:
        details = text_or_default(family_history.previous_medical_condition_details, "details not provided")
        parts.append(f"Pre-existing medical condition: {details}.")
    if family_history.additional_notes and family_history.additional_notes.strip():
        parts.append(family_history.additional_notes.strip())
    return " ".join(parts) or DEFAULT_HISTORY
