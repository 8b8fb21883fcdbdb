# app.py
# Medico-Legal Report Generator (Streamlit)
# - Loads a case from an uploaded JSON export or the built-in sample case.
# - Options panel maps onto RenderOptions; defaults come from MEDCO_REPORT_* env vars.
# - Shows a layout summary and offers the finished PDF for download.

import json
import logging
import traceback
from datetime import date

import streamlit as st

from case_models import Case, load_case
from document_generator import describe_report_options, generate_report_pdf
from render_options import REPORT_STYLES, FontSizes, ReportSettings, SectionsToInclude, options_from_settings
from report_errors import ReportError
from sample_case import build_sample_case

# =========================
# Configuration
# =========================
settings = ReportSettings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

defaults = options_from_settings(settings)

SECTION_LABELS = {
    "claimant_details": "Claimant details",
    "accident_details": "Accident details",
    "physical_injury": "Physical injuries",
    "psychological_injury": "Psychological injuries",
    "treatments": "Treatments",
    "lifestyle_impact": "Impact on daily life",
    "family_history": "Past history",
    "prognosis": "Overall prognosis",
    "expert_details": "Expert details",
}


def _load_uploaded_case(uploaded) -> Case:
    """Parse the uploaded JSON export; a wrapper {"case": {...}} is accepted too."""
    data = json.loads(uploaded.getvalue().decode("utf-8"))
    if isinstance(data, dict) and isinstance(data.get("case"), dict):
        data = data["case"]
    return load_case(data)


# =========================
# Streamlit UI
# =========================
st.set_page_config(page_title="Medico-Legal Report Generator", layout="wide")
st.title("Medico-Legal Report Generator")

with st.sidebar:
    st.header("Layout")
    page_size = st.selectbox("Page size", ["a4", "letter"], index=["a4", "letter"].index(defaults.page_size))
    orientation = st.selectbox(
        "Orientation", ["portrait", "landscape"], index=["portrait", "landscape"].index(defaults.orientation)
    )
    font_family = st.selectbox(
        "Font", ["helvetica", "times", "courier"],
        index=["helvetica", "times", "courier"].index(defaults.font_family),
    )
    style_names = list(REPORT_STYLES)
    style = st.selectbox("Colour style", style_names, index=style_names.index(defaults.style))
    body_size = st.slider("Body text size (pt)", min_value=7, max_value=12, value=int(defaults.font_size.body_text))

    st.markdown("---")
    st.header("Blocks")
    include_cover_page = st.checkbox("Cover page", value=defaults.include_cover_page)
    include_toc = st.checkbox("Table of contents", value=defaults.include_table_of_contents)
    include_numbers = st.checkbox("Section numbers", value=defaults.include_section_numbers)
    include_footer = st.checkbox("Footer on every page", value=defaults.include_footer_on_every_page)
    include_declaration = st.checkbox("Declaration and statement of truth", value=defaults.include_declaration)
    include_cv = st.checkbox("Expert CV", value=defaults.include_expert_cv)

    st.markdown("---")
    st.header("Sections")
    section_flags = {key: st.checkbox(label, value=True) for key, label in SECTION_LABELS.items()}

    st.markdown("---")
    signature_file = st.file_uploader("Signature image", type=["png", "jpg", "jpeg"])

# ========== Inputs ==========
st.header("1) Case")
uploaded = st.file_uploader("Case JSON export", type=["json"])

case = None
try:
    case = _load_uploaded_case(uploaded) if uploaded is not None else build_sample_case()
except (ReportError, ValueError) as e:
    st.error(f"Could not read the case file: {e}")

if case is not None:
    source = uploaded.name if uploaded is not None else "built-in sample case"
    st.caption(f"Case {case.case_number or '(no case number)'} for {case.claimant_name or 'unnamed claimant'} from {source}")

options = defaults.with_style(style).model_copy(
    update={
        "page_size": page_size,
        "orientation": orientation,
        "font_family": font_family,
        "font_size": FontSizes(
            title=defaults.font_size.title,
            subtitle=defaults.font_size.subtitle,
            section_header=defaults.font_size.section_header,
            body_text=body_size,
        ),
        "include_cover_page": include_cover_page,
        "include_table_of_contents": include_toc,
        "include_section_numbers": include_numbers,
        "include_footer_on_every_page": include_footer,
        "include_declaration": include_declaration,
        "include_expert_cv": include_cv,
        "sections_to_include": SectionsToInclude(**section_flags),
        "signature_image": signature_file.getvalue() if signature_file is not None else defaults.signature_image,
        "report_date": date.today(),
    }
)

# ========== Preview ==========
st.markdown("---")
st.header("2) Preview")
st.markdown(describe_report_options(options))

# ========== Output / Export ==========
st.markdown("---")
st.header("3) Export")
if case is not None and st.button("Generate PDF", use_container_width=True):
    try:
        with st.spinner("Laying out report..."):
            pdf_bytes = generate_report_pdf(case, options)
        st.session_state["report_pdf"] = pdf_bytes
        st.session_state["report_name"] = f"{case.case_number or 'medico-legal-report'}.pdf"
        st.success("Report ready.")
    except ReportError as e:
        logger.exception("Report generation failed")
        st.error(f"Report generation failed: {e}")
        st.code(traceback.format_exc())

if st.session_state.get("report_pdf"):
    st.download_button(
        "Download PDF",
        data=st.session_state["report_pdf"],
        file_name=st.session_state.get("report_name", "medico-legal-report.pdf"),
        mime="application/pdf",
        use_container_width=True,
    )
