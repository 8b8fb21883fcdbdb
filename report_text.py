# report_text.py
# Fixed wording used in the medico-legal report, plus the builders for the
# passages that splice case details into standard text.

from textwrap import dedent
from typing import List, Optional

from case_models import AccidentDetails, ExpertDetails
from text_utils import text_or_default


def _para(block: str) -> str:
    """Collapse a dedented block into single-line paragraphs separated by blank lines."""
    paragraphs = dedent(block).strip().split("\n\n")
    return "\n\n".join(" ".join(p.split()) for p in paragraphs)


# --- COVER / DETAILS ---
REPORT_TITLE = "MEDICO-LEGAL REPORT"
DEFAULT_EXPERT_NAME = "Medical Expert"
DEFAULT_FOOTER_NAME = "Claimant"
DEFAULT_FOOTER_CASE = "Medico-Legal Report"
RECORDS_REVIEW = "No medical records were provided for review"

STATEMENT_OF_INSTRUCTION = _para("""
    This report is entirely independent and is prepared for the injuries sustained in the
    accident. The instructing party has requested an examination to be conducted with a report
    to include the nature and extent of the claimant's injuries, treatment received, effects on
    lifestyle and whether any further treatment is appropriate.

    The report is produced for the Court based on the information provided by the client and
    the instructing party.
""")

EXCEPTIONAL_CLAIMED = _para("""
    Claimant has claimed for exceptional physical and exceptional psychological circumstances.
    I would agree considering history symptoms and examination.
""")

EXCEPTIONAL_NOT_CLAIMED = _para("""
    Claimant has not claimed for exceptional physical or exceptional psychological circumstances.
    I would agree considering history symptoms and examination.
""")

# --- INJURIES ---
INJURY_TABLE_NOTE = (
    "Note: The injuries listed above are based on the claimant's reported symptoms "
    "and clinical examination."
)
INJURY_DETAIL_NOTE = (
    "Note: The injuries listed below are based on the claimant's reported symptoms "
    "and clinical examination."
)
NO_OTHER_INJURIES = _para("""
    There were no other injuries / symptoms which were stated in the instructions other than
    those listed in the medical report suffered by the claimant as told to me during the
    examination after direct questioning.
""")
NO_INJURIES_ROW = "No injuries recorded"
NO_INJURY_DETAILS = "No specific injuries or symptoms have been recorded."

# --- LIFESTYLE ---
JOB_MARKET_HEADING = "PROSPECTS ON THE OPEN JOB MARKET:"
JOB_MARKET_STATEMENT = (
    "Employment prospects in the open job market would be unaffected because of the injuries."
)

# --- HISTORY ---
DEFAULT_HISTORY = _para("""
    No significant past medical history reported by the claimant. The claimant denies any
    previous accidents, injuries, or pre-existing medical conditions relevant to the current
    claim. Overall general health was reported as good prior to the accident.
""")

# --- DECLARATION ---
DECLARATION = _para("""
    I was able to obtain a good history. Claimant's injuries and recovery period were entirely
    consistent with the account of the accident. The treatment provided for the claimant has
    been appropriate. The problems reported in home life are consistent and reasonable. In my
    opinion, the time taken off work by the claimant is reasonable. Claimant is currently fit
    for work.

    Declaration: I have not provided treatment to the claimant. I am not associated with any
    person who has provided treatment. I have not recommended any treatment provider.
""")

AGREEMENT_OF_REPORT = (
    "Agreement of Report: I confirm that I have verified with the claimant the facts as "
    "referred to in this report."
)

STATEMENT_OF_TRUTH = _para("""
    I understand that my overriding duty is to the court, both in preparing reports and in
    giving oral evidence. I have complied and will continue to comply with that duty. I am aware
    of the requirements of Part 35 and practice direction 35, the protocol for instructing
    experts to give evidence in civil claims and the practice direction on pre-action conduct.
    I have set out in my report what I understand from those instructing me to be the questions
    in respect of which my opinion as an expert is required. I have done my best, in preparing
    this report, to be accurate and complete. I have mentioned all matters which I regard as
    relevant to the opinions I have expressed. I consider that all the matters on which I have
    expressed an opinion lie within my field of expertise. I have drawn to the attention of the
    court all matters, of which I am aware, which might adversely affect my opinion.
""")

CV_INTRODUCTION = _para("""
    I fully appreciate the time pressures associated with civil litigation, the limitations of
    expertise, and the imperative for independent, balanced consideration when instructed by
    solicitors. I am fully registered with the General Medical Council.
""")

SIGNATURE_FALLBACK = "Signature on file"


def expert_signature_caption(expert: Optional[ExpertDetails]) -> str:
    name = text_or_default(expert.examiner if expert else None, DEFAULT_EXPERT_NAME)
    credentials = expert.credentials if expert else None
    return f"{name}, {credentials.strip()}" if credentials and credentials.strip() else name


def build_case_classification(accident: Optional[AccidentDetails]) -> List[str]:
    """Standard classification questions; the seat belt answer comes from the accident data."""
    if accident is None:
        seat_belt = "Not provided"
    else:
        seat_belt = "Yes" if accident.seat_belt_worn else "No"
    return [
        f"Seatbelts: Was the claimant wearing a seat belt? {seat_belt}",
        "Soft-tissue Injury Claim: Yes",
        "Was the Claimant an occupant of a motor vehicle? Yes",
        "Is the client's most significant injury a soft-tissue injury? Yes",
        "Is this the first report in relation to the client's injuries from the index accident? Yes",
    ]


def build_cv_text(expert: Optional[ExpertDetails]) -> str:
    if expert is None:
        return f"{DEFAULT_EXPERT_NAME}\n\n{CV_INTRODUCTION}\n\nNo expert details were provided."

    lines = [expert_signature_caption(expert), "", CV_INTRODUCTION, "", "Professional Registration Details:"]
    lines.append(f"GMC: {text_or_default(expert.license_number)}")
    lines.append(f"MedCo Reg: {text_or_default(expert.licensure_state)}")
    lines.append("")
    lines.append("Qualification:")
    lines.append(text_or_default(expert.credentials))
    if expert.specialty:
        lines.append(f"Specialty: {expert.specialty.strip()}")
    lines.append("")
    lines.append("Experience:")
    if expert.experience_years and expert.experience_years.strip():
        lines.append(
            f"{expert.experience_years} years of clinical experience, including the assessment "
            "of whiplash and soft-tissue injuries from road traffic accidents."
        )
    else:
        lines.append("Not provided")
    if expert.contact_information:
        lines.append("")
        lines.append(f"Contact: {expert.contact_information.strip()}")
    return "\n".join(lines)
