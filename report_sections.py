# report_sections.py
# One renderer per report section. Each takes the page flow, the case and the
# render options, draws its slice of the case and leaves the cursor below it.

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from fpdf.errors import FPDFException
from PIL import Image

from case_models import Case
from narrative import (
    accident_summary,
    communication_help,
    current_status,
    exceptional_circumstances_text,
    history_summary,
    hospital_treatments,
    impact_line,
    injury_summary,
    lifestyle_summary,
    medications,
    narrate_injury,
    onset_label,
    prognosis_duration,
    psychological_summary,
    scene_treatments,
    treatment_summary,
)
from pdf_layout import (
    CasePDF,
    Column,
    PageFlow,
    add_section_header,
)
from render_options import RenderOptions
from report_errors import AssetLoadError
import report_text as text
from text_utils import (
    NOT_PROVIDED,
    calculate_age,
    format_date,
    join_items,
    text_or_default,
    yes_no,
)

logger = logging.getLogger(__name__)

NONE_REPORTED = "None reported"
NO_INFORMATION = "No information"

SIGNATURE_WIDTH = 40
SIGNATURE_HEIGHT = 20

# Relative widths of the injury summary table; scaled to the page.
_INJURY_COLUMNS = (
    ("Injury Name", 35),
    ("Current Status", 40),
    ("Prognosis", 40),
    ("Treatment", 40),
    ("Classification", 30),
)


@dataclass(frozen=True)
class SectionContext:
    title: str
    number: Optional[int] = None

    def label(self, index: int, name: str) -> str:
        if self.number is None:
            return f"{name}:"
        return f"{self.number}.{index} {name}:"


def _report_date(case: Case, options: RenderOptions) -> Optional[str]:
    if options.report_date is not None:
        return options.report_date.isoformat()
    if case.claimant_details and case.claimant_details.date_of_report:
        return case.claimant_details.date_of_report
    if case.expert_details and case.expert_details.date_of_report:
        return case.expert_details.date_of_report
    return None


# ==========================================================
# Cover page and contents
# ==========================================================
def render_cover(pdf: CasePDF, case: Case, options: RenderOptions) -> None:
    sizes = options.font_size
    claimant = case.claimant_details
    expert = case.expert_details
    y = 60

    pdf.use_font("B", sizes.title)
    pdf.draw_centered(y, text.REPORT_TITLE)
    y += 30

    pdf.use_font("B", sizes.title + 6)
    pdf.set_text_color(*pdf.primary)
    pdf.draw_centered(y, text_or_default(case.claimant_name, "CLAIMANT NAME"))
    y += 20

    def labelled(label: str, value: str, value_size: float, gap: float) -> float:
        pdf.use_font("", sizes.subtitle)
        pdf.set_text_color(*pdf.primary)
        pdf.draw_centered(y, label)
        pdf.use_font("B", value_size)
        pdf.set_text_color(0, 0, 0)
        pdf.draw_centered(y + 10, value)
        return y + 10 + gap

    y = labelled(
        "MedCo Reference:",
        text_or_default(claimant.medco_ref_number if claimant else None),
        sizes.subtitle + 4,
        30,
    )
    y = labelled(
        "Medical Expert:",
        text_or_default(expert.examiner if expert else None, text.DEFAULT_EXPERT_NAME),
        sizes.subtitle + 4,
        10,
    )
    pdf.use_font("", sizes.subtitle - 2)
    pdf.draw_centered(y, text_or_default(expert.credentials if expert else None))

    y = pdf.h - 40
    pdf.use_font("", sizes.subtitle - 2)
    pdf.set_text_color(*pdf.primary)
    pdf.draw_centered(y, "Report Date:")
    pdf.set_text_color(0, 0, 0)
    pdf.draw_centered(y + 8, format_date(_report_date(case, options)))
    pdf.use_font()


def render_table_of_contents(pdf: CasePDF, sections: List[Tuple[str, int]], page_no: int) -> None:
    """Fill the reserved contents page once every section's page is known."""
    with pdf.on_page(page_no):
        pdf.force_fill_color(pdf.primary)
        y = add_section_header(pdf, "CONTENTS", pdf.t_margin)
        pdf.use_font()
        pdf.set_text_color(0, 0, 0)
        right = pdf.w - pdf.r_margin
        for title, page in sections:
            y += 2
            pdf.draw_text(pdf.l_margin + 3, y, title)
            number = str(page)
            pdf.text(right - pdf.get_string_width(number), y, number)
            y += pdf.line_height
    logger.debug("Contents page %d lists %d sections", page_no, len(sections))


# ==========================================================
# Numbered sections
# ==========================================================
def render_claimant(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    c = case.claimant_details
    accident = case.accident_details
    get = lambda attr: getattr(c, attr) if c else None  # noqa: E731

    identification = c.identification.type if c and c.identification else None
    accident_date = accident.accident_date if accident else None

    flow.begin_section(ctx.title)
    flow.field(ctx.label(1, "Claimant's Name"), get("full_name"))
    flow.field(ctx.label(2, "Date of Birth"), format_date(get("date_of_birth")))
    flow.field(ctx.label(3, "Address"), get("address"))
    flow.field(ctx.label(4, "Gender"), get("gender"))
    flow.field(
        ctx.label(5, "Age at Time of Incident"),
        str(calculate_age(get("date_of_birth"), accident_date)),
    )
    flow.field(ctx.label(6, "Date of Accident"), format_date(accident_date))
    flow.field(ctx.label(7, "Identification"), identification)
    flow.field(ctx.label(8, "Accompanied by"), get("accompanied_by"))
    flow.field(ctx.label(9, "Help with Communication"), communication_help(c))

    flow.skip(flow.line_height)
    flow.subheading("Instruction Details")
    flow.field("Agency Name:", get("instructing_party"))
    flow.field("Agency Reference Number:", get("instructing_party_ref"))
    flow.field("Solicitor Name:", get("solicitor_name"))
    flow.field("Solicitor Reference Number:", get("reference_number"))
    flow.field("MedCo Reference:", get("medco_ref_number"))
    flow.field("Review of Records:", text.RECORDS_REVIEW)

    flow.skip(flow.line_height)
    flow.subheading("Appointment Details")
    flow.field("Date of Appointment:", format_date(get("date_of_examination")))
    flow.field("Time Spent:", get("time_spent"))
    flow.field("Place of Examination:", get("place_of_examination"))

    flow.skip(flow.line_height)
    flow.subheading("Statement of Instruction")
    flow.paragraph(text.STATEMENT_OF_INSTRUCTION, indent=5)

    flow.skip(flow.line_height)
    flow.subheading("Exceptional Circumstances")
    flow.paragraph(exceptional_circumstances_text(case.family_history), indent=5)
    flow.end_section()
    return flow.y


def render_accident(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    a = case.accident_details
    get = lambda attr: getattr(a, attr) if a else None  # noqa: E731

    def flag(attr: str) -> str:
        return yes_no(getattr(a, attr)) if a else NOT_PROVIDED

    flow.begin_section(ctx.title)
    flow.paragraph(accident_summary(a))
    flow.skip(flow.line_height)

    flow.field(ctx.label(1, "Date of Accident"), format_date(get("accident_date")))
    flow.field(ctx.label(2, "Time of Day"), get("time_of_day"))
    flow.field(ctx.label(3, "Location"), get("vehicle_location"))
    flow.field(ctx.label(4, "Weather Conditions"), get("weather_conditions"))
    flow.field(ctx.label(5, "Accident Type"), get("accident_type"))
    flow.field(ctx.label(6, "Vehicle Type"), get("vehicle_type"))
    flow.field(ctx.label(7, "Claimant Position"), get("claimant_position"))
    flow.field(ctx.label(8, "Vehicle Movement"), get("vehicle_movement"))
    flow.field(ctx.label(9, "Impact Location"), get("impact_location"))
    flow.field(ctx.label(10, "Damage Severity"), get("damage_severity"))
    flow.field(ctx.label(11, "Seat Belt Worn"), flag("seat_belt_worn"))
    flow.field(ctx.label(12, "Head Rest Fitted"), flag("head_rest_fitted"))
    flow.field(ctx.label(13, "Air Bag Deployed"), flag("air_bag_deployed"))
    flow.field(ctx.label(14, "Police Attended"), flag("police_attended"))
    flow.field(ctx.label(15, "Police Report Number"), get("police_report_number"))
    flow.field(ctx.label(16, "Police Station"), get("police_station"))
    flow.field(ctx.label(17, "Description"), get("accident_description"))

    flow.skip(flow.line_height)
    flow.subheading("Witnesses")
    witnesses = a.witnesses if a else []
    if not witnesses:
        flow.paragraph("No witnesses reported.", indent=5)
    for i, witness in enumerate(witnesses, 1):
        flow.subheading(f"Witness {i}: {text_or_default(witness.name, 'Name not provided')}", indent=5)
        flow.field("Phone:", witness.phone, indent=5)
        flow.field("Statement:", text_or_default(witness.statement, NO_INFORMATION), indent=5)
    flow.end_section()
    return flow.y


def _injury_columns(flow: PageFlow) -> List[Column]:
    total = sum(w for _, w in _INJURY_COLUMNS)
    return [Column(title, flow.width * w / total) for title, w in _INJURY_COLUMNS]


def render_injury_table(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    rows = []
    for i, injury in enumerate(case.injuries, 1):
        n = narrate_injury(injury, case.accident_details, case.family_history, i)
        rows.append([n.name, n.status, n.prognosis, n.treatment, n.classification.value])

    flow.begin_section(ctx.title)
    flow.table(_injury_columns(flow), rows, text.NO_INJURIES_ROW)
    flow.paragraph(text.INJURY_TABLE_NOTE, style="I", color=flow.pdf.secondary)
    flow.skip(flow.line_height)
    flow.paragraph(text.NO_OTHER_INJURIES)
    flow.end_section()
    return flow.y


def render_injury_details(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    physical = case.physical_injury
    injuries = case.injuries

    flow.begin_section(ctx.title)
    flow.paragraph(text.INJURY_DETAIL_NOTE, style="I", color=flow.pdf.secondary)
    flow.skip(flow.line_height)
    if not injuries:
        flow.paragraph(text.NO_INJURY_DETAILS, indent=5)
    for i, injury in enumerate(injuries, 1):
        n = narrate_injury(injury, case.accident_details, case.family_history, i)
        flow.subheading(f"{n.name}:")
        flow.field("Injury Name:", n.name, indent=5)
        flow.field("When did this injury start:", n.onset, indent=5)
        flow.field("Initial Severity:", n.initial_severity, indent=5)
        flow.field("Current Severity:", n.current_severity, indent=5)
        flow.field("Classification:", n.classification.value, indent=5)
        flow.field("Mechanism:", n.mechanism, indent=5)
        flow.field("Examination:", n.examination, indent=5)
        flow.field("Treatment Recommendations:", n.treatment_statement, indent=5)
        flow.field("Prognosis:", n.prognosis_statement, indent=5)
        flow.field("Additional Report Required:", n.additional_report, indent=5)
        flow.skip(flow.line_height)

    flow.subheading("Summary of Physical Injuries")
    flow.paragraph(injury_summary(physical, case.accident_details, case.family_history), indent=5)
    if physical and physical.other_injuries_description:
        flow.field("Other Injuries:", physical.other_injuries_description, indent=5)
    flow.field("Additional Notes:", physical.additional_notes if physical else None, indent=5)
    flow.end_section()
    return flow.y


def render_psychological(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    p = case.psychological_injuries

    flow.begin_section(ctx.title)
    flow.paragraph(psychological_summary(p))
    flow.skip(flow.line_height)
    flow.field(ctx.label(1, "Symptoms"), join_items(p.symptoms if p else [], NONE_REPORTED))

    flow.subheading("Diagnoses")
    diagnoses = p.diagnoses if p else []
    if not diagnoses:
        flow.paragraph(NONE_REPORTED, indent=5)
    for i, d in enumerate(diagnoses, 1):
        flow.field(f"Diagnosis {i}:", d.diagnosis, indent=5)
        flow.field("Date:", format_date(d.date), indent=5)
        flow.field("Provider:", d.provider, indent=5)

    severity = p.travel_anxiety_current_severity if p else None
    flow.subheading("Travel Anxiety")
    flow.field("Symptoms:", join_items(p.travel_anxiety_symptoms if p else [], NONE_REPORTED), indent=5)
    flow.field("Onset:", onset_label(p.travel_anxiety_onset if p else None), indent=5)
    flow.field("Initial Severity:", p.travel_anxiety_initial_severity if p else None, indent=5)
    flow.field("Current Status:", current_status(severity), indent=5)
    flow.field("Prognosis:", prognosis_duration(severity), indent=5)
    if p and p.travel_anxiety_resolution_days:
        flow.field("Resolved After (days):", p.travel_anxiety_resolution_days, indent=5)
    flow.end_section()
    return flow.y


def render_treatments(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    t = case.treatments

    if t is None:
        scene = hospital = gp = meds = physio = NONE_REPORTED
    else:
        scene = join_items(scene_treatments(t), NONE_REPORTED)
        if t.went_to_hospital:
            hospital = join_items([text_or_default(t.hospital_name, "Hospital")] + hospital_treatments(t))
        else:
            hospital = yes_no(t.went_to_hospital, NONE_REPORTED)
        if t.went_to_gp_walk_in:
            gp = f"Yes, {t.days_to_gp_walk_in} days after the accident" if t.days_to_gp_walk_in else "Yes"
        else:
            gp = text_or_default(t.gp_visits, yes_no(t.went_to_gp_walk_in, NONE_REPORTED))
        meds = text_or_default(t.current_medication, join_items(medications(t), NONE_REPORTED))
        physio = text_or_default(t.physiotherapy_sessions, text_or_default(t.physiotherapy, NONE_REPORTED))

    flow.begin_section(ctx.title)
    flow.field(ctx.label(1, "Treatment at the Scene"), scene)
    flow.field(ctx.label(2, "Hospital Attendance"), hospital)
    flow.field(ctx.label(3, "GP / Walk-in Centre"), gp)
    flow.field(ctx.label(4, "Current Medication"), meds)
    flow.field(ctx.label(5, "Physiotherapy Sessions"), physio)
    flow.skip(flow.line_height)
    flow.subheading("Treatment Summary")
    flow.paragraph(treatment_summary(t), indent=5)
    flow.end_section()
    return flow.y


def render_lifestyle(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    life = case.lifestyle_impact
    get = lambda attr: getattr(life, attr) if life else None  # noqa: E731

    def impact(flag_attr: str, list_attr: str, other_attr: str) -> str:
        if life is None:
            return NOT_PROVIDED
        return impact_line(get(flag_attr), get(list_attr), get(other_attr))

    work = NOT_PROVIDED
    if life is not None and (life.work_difficulties or life.work_other_details):
        work = join_items(list(life.work_difficulties) + [life.work_other_details])

    flow.begin_section(ctx.title)
    flow.field(ctx.label(1, "Occupation"), get("current_job_title"))
    flow.field(ctx.label(2, "Work Status"), get("work_status"))
    flow.field(ctx.label(3, "Days Off Work"), get("days_off_work"))
    flow.field(ctx.label(4, "Days on Light Duties"), get("days_light_duties"))
    flow.field(ctx.label(5, "Work Difficulties"), work)
    flow.field(ctx.label(6, "Domestic Activities"), impact("has_domestic_impact", "domestic_activities", "domestic_other_details"))
    flow.field(ctx.label(7, "Sleep"), impact("has_sleep_disturbance", "sleep_disturbances", "sleep_other_details"))
    flow.field(
        ctx.label(8, "Sport and Leisure"),
        impact("has_sport_leisure_impact", "sport_leisure_activities", "sport_leisure_other_details"),
    )
    flow.field(ctx.label(9, "Social Life"), impact("has_social_impact", "social_activities", "social_other_details"))
    flow.skip(flow.line_height)
    flow.subheading("Impact Summary")
    flow.paragraph(lifestyle_summary(life), indent=5)
    flow.skip(flow.line_height)
    flow.subheading(text.JOB_MARKET_HEADING)
    flow.paragraph(text.JOB_MARKET_STATEMENT, indent=5)
    flow.end_section()
    return flow.y


def render_family_history(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    fh = case.family_history

    if fh is None:
        accidents = conditions = NO_INFORMATION
        preference = NOT_PROVIDED
    else:
        accidents = yes_no(fh.has_previous_accident, NO_INFORMATION)
        if fh.has_previous_accident:
            details = [fh.previous_accident_year, fh.previous_accident_recovery and f"{fh.previous_accident_recovery} recovery"]
            accidents = join_items(["Yes"] + details)
        conditions = yes_no(fh.has_previous_medical_condition, NO_INFORMATION)
        if fh.has_previous_medical_condition:
            conditions = join_items(["Yes", fh.previous_medical_condition_details])
        preference = text_or_default(fh.physiotherapy_preference)

    flow.begin_section(ctx.title)
    flow.field(ctx.label(1, "Previous Accidents"), accidents)
    flow.field(ctx.label(2, "Pre-existing Conditions"), conditions)
    flow.field(ctx.label(3, "Physiotherapy Preference"), preference)
    flow.skip(flow.line_height)
    flow.subheading("History Summary")
    flow.paragraph(history_summary(fh), indent=5)
    flow.end_section()
    return flow.y


def render_prognosis(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    p = case.prognosis
    get = lambda attr: getattr(p, attr) if p else None  # noqa: E731

    flow.begin_section(ctx.title)
    flow.field(ctx.label(1, "Overall Prognosis"), get("overall_prognosis"))
    flow.field(ctx.label(2, "Expected Recovery Time"), get("expected_recovery_time"))
    flow.field(ctx.label(3, "Permanent Impairment"), get("permanent_impairment"))
    flow.field(ctx.label(4, "Future Care Plans"), get("future_care_plans"))
    flow.skip(flow.line_height)
    flow.subheading("Treatment Recommendations")
    recommendations = [r.strip() for r in (p.treatment_recommendations if p else []) if r.strip()]
    if not recommendations:
        flow.paragraph(NONE_REPORTED, indent=5)
    for item in recommendations:
        flow.paragraph(f"- {item}", indent=5)
    if p and p.additional_notes and p.additional_notes.strip():
        flow.skip(flow.line_height)
        flow.subheading("Additional Notes")
        flow.paragraph(p.additional_notes.strip(), indent=5)
    flow.end_section()
    return flow.y


def render_expert(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    e = case.expert_details
    get = lambda attr: getattr(e, attr) if e else None  # noqa: E731

    flow.begin_section(ctx.title)
    flow.field(ctx.label(1, "Medical Expert Name"), get("examiner"))
    flow.field(ctx.label(2, "Credentials"), get("credentials"))
    flow.field(ctx.label(3, "GMC Number"), get("license_number"))
    flow.field(ctx.label(4, "MedCo Registration"), get("licensure_state"))
    flow.field(ctx.label(5, "Specialty"), get("specialty"))
    flow.field(ctx.label(6, "Years of Experience"), get("experience_years"))
    flow.field(ctx.label(7, "Contact Information"), get("contact_information"))
    flow.end_section()
    return flow.y


def render_declaration(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    flow.begin_section(ctx.title)
    flow.subheading("Case Classification:")
    for line in text.build_case_classification(case.accident_details):
        flow.paragraph(line, indent=10)
    flow.skip(flow.line_height)
    flow.subheading("Declaration:")
    flow.paragraph(text.DECLARATION)
    flow.skip(flow.line_height)
    flow.paragraph(text.AGREEMENT_OF_REPORT)
    flow.signature_line(text.expert_signature_caption(case.expert_details))
    flow.end_section()
    return flow.y


def render_statement_of_truth(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    flow.begin_section(ctx.title)
    flow.paragraph(text.STATEMENT_OF_TRUTH)
    flow.signature_line(text.expert_signature_caption(case.expert_details))
    flow.end_section()
    return flow.y


def render_cv(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    flow.begin_section(ctx.title)
    flow.paragraph(text.build_cv_text(case.expert_details))
    flow.signature_line(text.expert_signature_caption(case.expert_details))
    flow.end_section()
    return flow.y


# ---------- Signature ----------
def load_signature(source: Union[Path, str, bytes]) -> Image.Image:
    """Decode the signature image with Pillow; AssetLoadError when it can't be used."""
    label = "<bytes>" if isinstance(source, bytes) else str(source)
    try:
        stream = io.BytesIO(source) if isinstance(source, bytes) else source
        with Image.open(stream) as im:
            im.load()
            return im.convert("RGB")
    except (OSError, ValueError) as e:
        raise AssetLoadError(f"Signature image could not be loaded: {e}", source=label) from e


def render_signature(flow: PageFlow, case: Case, options: RenderOptions, ctx: SectionContext) -> float:
    pdf = flow.pdf
    expert = case.expert_details
    signed_on = None
    if expert:
        signed_on = expert.signature_date or expert.date_of_report
    signed_on = signed_on or _report_date(case, options)

    flow.begin_section(ctx.title)
    flow.ensure_space(SIGNATURE_HEIGHT + 25)
    pdf.use_font()
    pdf.draw_text(pdf.l_margin, flow.y, f"Date: {format_date(signed_on)}")
    top = flow.y + 3

    drawn = False
    if options.signature_image is not None:
        try:
            image = load_signature(options.signature_image)
            pdf.image(image, x=pdf.l_margin, y=top, w=SIGNATURE_WIDTH, h=SIGNATURE_HEIGHT)
            drawn = True
        except (AssetLoadError, FPDFException) as e:
            logger.warning("Using signature fallback text: %s", e)
    if not drawn:
        pdf.use_font("I")
        pdf.draw_text(pdf.l_margin, top + 10, text.SIGNATURE_FALLBACK)
        pdf.use_font()

    y = top + SIGNATURE_HEIGHT + 7
    pdf.draw_text(pdf.l_margin, y, text_or_default(expert.examiner if expert else None, text.DEFAULT_EXPERT_NAME))
    step = flow.line_height + 1
    pdf.draw_text(pdf.l_margin, y + step, text_or_default(expert.credentials if expert else None))
    flow.y = y + step + flow.line_height
    flow.end_section()
    return flow.y


# ==========================================================
# Registry, in report order
# ==========================================================
Renderer = Callable[[PageFlow, Case, RenderOptions, SectionContext], float]


@dataclass(frozen=True)
class ReportSection:
    key: str
    heading: str
    render: Renderer
    enabled: Callable[[RenderOptions], bool]


def _section(name: str) -> Callable[[RenderOptions], bool]:
    return lambda options: getattr(options.sections_to_include, name)


SECTION_RENDERERS: Tuple[ReportSection, ...] = (
    ReportSection("claimant_details", "CLAIMANT DETAILS", render_claimant, _section("claimant_details")),
    ReportSection("accident_details", "ACCIDENT DETAILS", render_accident, _section("accident_details")),
    ReportSection("injury_table", "SUMMARY OF INJURIES", render_injury_table, _section("physical_injury")),
    ReportSection("injury_details", "INJURIES / SYMPTOMS", render_injury_details, _section("physical_injury")),
    ReportSection("psychological_injury", "PSYCHOLOGICAL INJURIES", render_psychological, _section("psychological_injury")),
    ReportSection("treatments", "TREATMENTS", render_treatments, _section("treatments")),
    ReportSection("lifestyle_impact", "IMPACT ON DAILY LIFE", render_lifestyle, _section("lifestyle_impact")),
    ReportSection("family_history", "PAST HISTORY OF ACCIDENTS OR ILLNESS", render_family_history, _section("family_history")),
    ReportSection("prognosis", "OVERALL PROGNOSIS", render_prognosis, _section("prognosis")),
    ReportSection("expert_details", "EXPERT DETAILS", render_expert, _section("expert_details")),
    ReportSection("declaration", "CASE CLASSIFICATION AND DECLARATION", render_declaration, lambda o: o.include_declaration),
    ReportSection("statement_of_truth", "STATEMENT OF TRUTH", render_statement_of_truth, lambda o: o.include_declaration),
    ReportSection("expert_cv", "MEDICAL EXPERT'S CURRICULUM VITAE", render_cv, lambda o: o.include_expert_cv),
    ReportSection("signature", "SIGNATURE", render_signature, lambda o: True),
)
