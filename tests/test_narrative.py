from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parent.parent))
from case_models import AccidentDetails, ClaimantDetails, FamilyHistory, Injury, LifestyleImpact, Treatments, load_case
from narrative import (
    InjuryClass,
    accident_summary,
    additional_report,
    classify_injury,
    communication_help,
    current_status,
    describe_mechanism,
    history_summary,
    impact_line,
    jolt_direction,
    lifestyle_summary,
    narrate_injury,
    onset_label,
    prognosis_duration,
    treatment_recommendation,
    treatment_summary,
)
from report_text import DEFAULT_HISTORY


def test_classification_rules():
    assert classify_injury("Neck") is InjuryClass.WHIPLASH
    assert classify_injury("Lower back") is InjuryClass.WHIPLASH
    assert classify_injury("Shoulder") is InjuryClass.WHIPLASH
    assert classify_injury("Headache") is InjuryClass.WHIPLASH_ASSOCIATED
    assert classify_injury("Bruising to left knee") is InjuryClass.NON_WHIPLASH
    assert classify_injury("Travel anxiety") is InjuryClass.PSYCHOLOGICAL
    assert classify_injury("Wrist") is InjuryClass.NON_WHIPLASH
    assert classify_injury(None) is InjuryClass.NON_WHIPLASH


def test_jolt_direction():
    assert jolt_direction("Rear") == "forward"
    assert jolt_direction("rear-end") == "forward"
    assert jolt_direction("Front") == "backward"
    assert jolt_direction("Driver side") == "sideways"
    assert jolt_direction(None) == "forward/backward"


def test_mechanism_wording():
    text = describe_mechanism(InjuryClass.WHIPLASH, "Rear")
    assert text == "Due to sudden jolt forward during the collision. It is classified as a Whiplash injury."
    assert "direct trauma" in describe_mechanism(InjuryClass.NON_WHIPLASH, "Rear")


def test_rear_impact_mild_neck():
    n = narrate_injury(
        Injury(type="Neck", current_severity="Mild"),
        AccidentDetails(impact_location="Rear"),
    )
    assert n.classification is InjuryClass.WHIPLASH
    assert "forward" in n.mechanism
    assert n.prognosis == "3 months"
    assert n.status == "Mild symptoms currently present"
    assert n.treatment == "Standard care advised"
    assert n.additional_report == "No"


def test_stored_classification_is_ignored():
    n = narrate_injury(Injury(type="Neck", classification="Non-whiplash", mechanism="stored"))
    assert n.classification is InjuryClass.WHIPLASH
    assert n.mechanism != "stored"


def test_resolved_wins_over_everything():
    injury = Injury(type="Back", current_severity="Resolved", needs_specialist_referral=True, wants_physiotherapy=True)
    n = narrate_injury(injury)
    assert n.prognosis == "Resolved"
    assert n.status == "Resolved"
    assert n.treatment == "None needed"
    assert n.additional_report == "Yes (Orthopaedic Specialist)"


def test_prognosis_table():
    assert prognosis_duration("Moderate") == "6 months"
    assert prognosis_duration("severe") == "9 months"
    assert prognosis_duration("Mild", needs_specialist_referral=True) == "Per specialist report"
    assert prognosis_duration("Unclear") == "To be determined"
    assert prognosis_duration(None) == "To be determined"


def test_treatment_preferences():
    ongoing = FamilyHistory(physiotherapy_preference="Already ongoing")
    declined = FamilyHistory(physiotherapy_preference="No")
    assert narrate_injury(Injury(type="Neck", current_severity="Mild"), None, ongoing).treatment == "Physiotherapy"
    assert narrate_injury(Injury(type="Neck", current_severity="Mild"), None, declined).treatment == "Pain medication"
    # The injury's own answer beats the case-wide preference.
    injury = Injury(type="Neck", current_severity="Mild", wants_physiotherapy=False)
    assert narrate_injury(injury, None, ongoing).treatment == "Pain medication"
    assert treatment_recommendation("Mild", None) == "Standard care advised"


def test_psychological_referral():
    assert additional_report(InjuryClass.PSYCHOLOGICAL, True) == "Yes (Clinical Psychologist)"


def test_status_and_onset():
    assert current_status("Moderate") == "Moderate symptoms currently present"
    assert current_status("resolved") == "Resolved"
    assert current_status("") == "Not provided"
    assert onset_label("immediate") == "Same day"
    assert onset_label("delayed") == "Next day"
    assert onset_label("Within a week") == "Within a week"
    assert onset_label(None) == "Not provided"


def test_other_injury_uses_description():
    n = narrate_injury(Injury(type="Other", description="Cut to forearm"))
    assert n.name == "Cut to forearm"
    assert narrate_injury(Injury(), index=3).name == "Injury 3"


def test_communication_help():
    assert communication_help(None) == "No"
    assert communication_help(ClaimantDetails(help_with_communication=True)) == "Yes"
    helped = ClaimantDetails(help_with_communication=True, interpreter_name="Ali", interpreter_relationship="Brother")
    assert communication_help(helped) == "Yes - Ali (Brother)"


def test_accident_summary():
    assert accident_summary(None) == "No accident details were provided."
    summary = accident_summary(
        AccidentDetails(accident_date="2024-03-15", claimant_position="Driver", vehicle_type="Car",
                        impact_location="Rear", vehicle_movement="Stationary")
    )
    assert summary.startswith("On 15/Mar/2024, the claimant was the driver of the car")
    assert "jolted forward" in summary
    assert "while it was stationary" in summary
    assert "wearing a seat belt" in summary


def test_summaries_prefer_supplied_text():
    assert treatment_summary(Treatments(treatment_summary=" Given. ")) == "Given."
    assert treatment_summary(None) == "No treatment information was provided."
    assert "No GP visits were required." in treatment_summary(Treatments())
    assert lifestyle_summary(LifestyleImpact(impact_summary="Some impact")) == "Some impact"
    assert lifestyle_summary(None) == "No impact summary provided"
    assert history_summary(None) == DEFAULT_HISTORY
    assert history_summary(FamilyHistory()) == DEFAULT_HISTORY
    assert "previous road traffic accident in 2019" in history_summary(
        FamilyHistory(has_previous_accident=True, previous_accident_year="2019")
    )


def test_impact_line():
    assert impact_line(None, []) == "Not provided"
    assert impact_line(False, ["Gym"]) == "No impact reported"
    assert impact_line(True, ["Gym"], "Swimming") == "Gym, Swimming"
    assert impact_line(True, []) == "Affected"


def test_same_day_onset_from_store_payload():
    case = load_case(
        {
            "accidentDetails": {"impactType": "rear-end"},
            "physicalInjury": {"injuries": [{"type": "Neck", "currentSeverity": "Mild", "onset": "Same Day"}]},
        }
    )
    n = narrate_injury(case.injuries[0], case.accident_details)
    assert n.onset == "Same Day"
    assert "forward" in n.mechanism
    assert n.classification is InjuryClass.WHIPLASH
    assert n.prognosis == "3 months"
