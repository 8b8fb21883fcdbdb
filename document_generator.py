# document_generator.py
# Assembles the medico-legal report: cover, optional contents page, the gated
# sections in fixed order, then the footer pass once the page count is known.
# Compatible with the app.py calls (bytes for download, data URI for embedding).

from __future__ import annotations

import base64
import logging
from datetime import date, datetime, timezone
from string import capwords
from typing import Any, List, Mapping, Optional, Union

from case_models import Case, load_case
from pdf_layout import CasePDF, PageFlow
from render_options import RenderOptions
from report_errors import MissingCaseDataError
from report_sections import (
    SECTION_RENDERERS,
    SectionContext,
    render_cover,
    render_table_of_contents,
)
from report_text import DEFAULT_EXPERT_NAME, DEFAULT_FOOTER_CASE, DEFAULT_FOOTER_NAME, REPORT_TITLE
from text_utils import parse_date, text_or_default

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:application/pdf;filename=generated.pdf;base64,"

# Creation date used when the case carries no report date; keeps output reproducible.
_FALLBACK_CREATED = datetime(2000, 1, 1, tzinfo=timezone.utc)

CaseInput = Union[Case, Mapping[str, Any]]


def _creation_date(case: Case, options: RenderOptions) -> datetime:
    day: Optional[date] = options.report_date
    if day is None and case.claimant_details is not None:
        day = parse_date(case.claimant_details.date_of_report)
    if day is None:
        return _FALLBACK_CREATED
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def _set_metadata(pdf: CasePDF, case: Case, options: RenderOptions) -> None:
    pdf.set_creation_date(_creation_date(case, options))
    pdf.set_title(f"{REPORT_TITLE.title()} - {text_or_default(case.claimant_name, DEFAULT_FOOTER_NAME)}")
    expert = case.expert_details
    pdf.set_author(text_or_default(expert.examiner if expert else None, DEFAULT_EXPERT_NAME))
    pdf.set_creator("medico-legal report generator")


# ==========================================================
# Public: PDF builder (used by app.py)
# ==========================================================
def generate_report_pdf(case: Optional[CaseInput], options: Optional[RenderOptions] = None) -> bytes:
    """
    Lay out the whole report and return the PDF bytes.

    Sections switched off in *options* are skipped and the remaining ones are
    numbered consecutively. Raises MissingCaseDataError when there is no case;
    every other gap in the data renders as a placeholder.
    """
    if case is None:
        raise MissingCaseDataError("No case data supplied; there is nothing to lay out.")
    case = load_case(case)
    options = options or RenderOptions()
    logger.info("Rendering report for case %s", case.case_number or "<unnumbered>")

    pdf = CasePDF(options)
    _set_metadata(pdf, case, options)

    if options.include_cover_page:
        pdf.add_page()
        render_cover(pdf, case, options)

    toc_page = None
    if options.include_table_of_contents:
        pdf.add_page()
        toc_page = pdf.page

    flow = PageFlow(pdf)
    flow.new_page(continued=False)

    number = 0
    for section in SECTION_RENDERERS:
        if not section.enabled(options):
            logger.debug("Section %s switched off", section.key)
            continue
        number += 1
        if options.include_section_numbers:
            ctx = SectionContext(f"{number}. {section.heading}", number)
        else:
            ctx = SectionContext(section.heading)
        section.render(flow, case, options, ctx)

    if toc_page is not None:
        render_table_of_contents(pdf, flow.sections, toc_page)

    total = pdf.pages_count
    if options.include_footer_on_every_page:
        total = pdf.stamp_footers(
            text_or_default(case.claimant_name, DEFAULT_FOOTER_NAME),
            text_or_default(case.case_number, DEFAULT_FOOTER_CASE),
        )

    data = bytes(pdf.output())
    logger.info(
        "Rendered case %s: %d pages, %d sections, %d page breaks",
        case.case_number or "<unnumbered>",
        total,
        len(flow.sections),
        flow.page_breaks,
    )
    return data


def generate_report_data_uri(case: Optional[CaseInput], options: Optional[RenderOptions] = None) -> str:
    """Same document, encoded for embedding in a page or a download link."""
    encoded = base64.b64encode(generate_report_pdf(case, options)).decode("ascii")
    return DATA_URI_PREFIX + encoded


# ==========================================================
# Public: Markdown preview (used by app.py)
# ==========================================================
def describe_report_options(options: Optional[RenderOptions] = None) -> str:
    options = options or RenderOptions()
    width, height = options.page_dimensions
    lines: List[str] = []
    lines.append("## Report Layout")
    lines.append(f"- **Page**: {options.page_size.upper()} {options.orientation} ({width:g} x {height:g} mm)")
    lines.append(f"- **Font**: {options.font_family.title()}, body {options.font_size.body_text:g} pt")
    lines.append(f"- **Style**: {options.style}")
    lines.append("")

    blocks = (
        ("Cover page", options.include_cover_page),
        ("Table of contents", options.include_table_of_contents),
        ("Section numbers", options.include_section_numbers),
        ("Footer on every page", options.include_footer_on_every_page),
    )
    lines.append("## Blocks")
    for label, on in blocks:
        lines.append(f"- {label}: {'Yes' if on else 'No'}")
    lines.append("")

    lines.append("## Sections")
    number = 0
    for section in SECTION_RENDERERS:
        if not section.enabled(options):
            lines.append(f"- ~~{capwords(section.heading)}~~ (excluded)")
            continue
        number += 1
        prefix = f"{number}. " if options.include_section_numbers else ""
        lines.append(f"- {prefix}{capwords(section.heading)}")
    return "\n".join(lines)
