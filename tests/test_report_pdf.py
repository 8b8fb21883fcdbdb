import base64
import io
import logging
import re
from datetime import date
from pathlib import Path
import sys

import pytest
from PIL import Image
from pdfminer.high_level import extract_pages, extract_text

sys.path.append(str(Path(__file__).resolve().parent.parent))
from document_generator import DATA_URI_PREFIX, generate_report_data_uri, generate_report_pdf
from render_options import FontSizes, RenderOptions, SectionsToInclude
from report_errors import AssetLoadError, MissingCaseDataError
from report_sections import load_signature
from sample_case import SAMPLE_CASE, build_sample_case


def _text(pdf_bytes, **kwargs):
    return extract_text(io.BytesIO(pdf_bytes), **kwargs)


def _page_count(pdf_bytes):
    return len(list(extract_pages(io.BytesIO(pdf_bytes))))


def _png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (120, 60), (255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


def test_sample_report_renders():
    pdf_bytes = generate_report_pdf(build_sample_case())
    assert pdf_bytes.startswith(b"%PDF")
    text = _text(pdf_bytes)
    assert "MEDICO-LEGAL REPORT" in text
    assert "Jordan Avery" in text
    assert "1. CLAIMANT DETAILS" in text
    assert "14. SIGNATURE" in text
    assert "Whiplash" in text
    assert "3 months" in text
    assert "Saw the other car fail to stop." in text


def test_raw_mapping_is_accepted():
    assert generate_report_pdf(SAMPLE_CASE).startswith(b"%PDF")


def test_output_is_deterministic():
    options = RenderOptions(report_date=date(2024, 5, 2))
    assert generate_report_pdf(build_sample_case(), options) == generate_report_pdf(build_sample_case(), options)
    assert generate_report_pdf({}) == generate_report_pdf({})


def test_missing_case_raises_before_layout():
    with pytest.raises(MissingCaseDataError):
        generate_report_pdf(None)
    with pytest.raises(MissingCaseDataError):
        generate_report_data_uri(None)


def test_empty_case_uses_placeholders():
    text = _text(generate_report_pdf({}))
    assert "CLAIMANT NAME" in text
    assert "Not provided" in text
    assert "Not calculated" in text
    assert "No injuries recorded" in text
    assert "No specific injuries or symptoms have been recorded." in text
    assert "No accident details were provided." in text
    assert "Signature on file" in text
    assert "Page 1 of" in text
    assert "Claimant | Medico-Legal Report" in text

    cleaned = text.replace("None reported", "").replace("None needed", "")
    assert "None" not in cleaned
    assert "null" not in cleaned
    assert "undefined" not in cleaned


def test_footer_total_matches_page_count():
    case = dict(SAMPLE_CASE)
    case["physicalInjury"] = {
        "injuries": [
            {"type": "Neck", "currentSeverity": "Moderate", "onsetTime": "immediate"} for _ in range(40)
        ]
    }
    pdf_bytes = generate_report_pdf(case)
    total = _page_count(pdf_bytes)
    assert total > 5

    footers = re.findall(r"Page (\d+) of (\d+) \| Jordan Avery \| MC-2024-0117", _text(pdf_bytes))
    assert sorted(int(n) for n, _ in footers) == list(range(1, total + 1))
    assert {int(t) for _, t in footers} == {total}


def test_footer_can_be_switched_off():
    text = _text(generate_report_pdf(build_sample_case(), RenderOptions(include_footer_on_every_page=False)))
    assert "Page 1 of" not in text


def test_gated_sections_keep_numbering_consecutive():
    options = RenderOptions(sections_to_include=SectionsToInclude(physical_injury=False, treatments=False))
    text = _text(generate_report_pdf(build_sample_case(), options))
    assert "SUMMARY OF INJURIES" not in text
    assert "INJURIES / SYMPTOMS" not in text
    assert "TREATMENTS" not in text
    assert "2. ACCIDENT DETAILS" in text
    assert "3. PSYCHOLOGICAL INJURIES" in text
    assert "4. IMPACT ON DAILY LIFE" in text


def test_declaration_and_cv_gates():
    options = RenderOptions(include_declaration=False, include_expert_cv=False)
    text = _text(generate_report_pdf(build_sample_case(), options))
    assert "STATEMENT OF TRUTH" not in text
    assert "CURRICULUM VITAE" not in text
    assert "SIGNATURE" in text


def test_section_numbers_can_be_switched_off():
    text = _text(generate_report_pdf(build_sample_case(), RenderOptions(include_section_numbers=False)))
    assert "CLAIMANT DETAILS" in text
    assert "1. CLAIMANT DETAILS" not in text
    assert "1.1 Claimant's Name" not in text


def test_cover_page_gate():
    pdf_bytes = generate_report_pdf(build_sample_case(), RenderOptions(include_cover_page=False))
    first_page = _text(pdf_bytes, page_numbers=[0])
    assert "1. CLAIMANT DETAILS" in first_page
    assert "MEDICO-LEGAL REPORT" not in first_page


def test_table_of_contents_lists_sections():
    pdf_bytes = generate_report_pdf(build_sample_case(), RenderOptions(include_table_of_contents=True))
    contents = _text(pdf_bytes, page_numbers=[1])
    assert "CONTENTS" in contents
    assert "1. CLAIMANT DETAILS" in contents
    assert "14. SIGNATURE" in contents
    assert "Page 2 of" in contents


def test_report_date_on_cover():
    text = _text(generate_report_pdf(build_sample_case(), RenderOptions(report_date=date(2024, 6, 1))))
    assert "01/Jun/2024" in text


def test_signature_fallback_on_bad_image(caplog):
    caplog.set_level(logging.WARNING, logger="report_sections")
    options = RenderOptions(signature_image=b"definitely not an image")
    text = _text(generate_report_pdf(build_sample_case(), options))
    assert "Signature on file" in text
    assert any("signature" in record.getMessage().lower() for record in caplog.records)


def test_signature_image_is_drawn():
    options = RenderOptions(signature_image=_png_bytes())
    text = _text(generate_report_pdf(build_sample_case(), options))
    assert "Signature on file" not in text
    assert "Dr Morgan Ellis" in text


def test_load_signature_errors(tmp_path):
    with pytest.raises(AssetLoadError) as info:
        load_signature(tmp_path / "missing.png")
    assert info.value.source.endswith("missing.png")
    with pytest.raises(AssetLoadError):
        load_signature(b"\x89PNG broken")
    assert load_signature(_png_bytes()).size == (120, 60)


def test_data_uri():
    uri = generate_report_data_uri(build_sample_case())
    assert uri.startswith(DATA_URI_PREFIX)
    assert base64.b64decode(uri[len(DATA_URI_PREFIX):]).startswith(b"%PDF")


def test_letter_landscape_report():
    options = RenderOptions(page_size="letter", orientation="landscape").with_style("monochrome")
    pages = list(extract_pages(io.BytesIO(generate_report_pdf(build_sample_case(), options))))
    assert abs(pages[0].width - 792) < 1
    assert abs(pages[0].height - 612) < 1


@pytest.mark.parametrize(
    "case",
    [
        {"accidentDetails": {"seatBeltWorn": None}},
        {"accidentDetails": {"witnesses": None}},
        {"claimantDetails": {"helpWithCommunication": None}},
        {"physicalInjury": {"injuries": [{"type": "Neck", "needsSpecialistReferral": None}]}},
        {"psychologicalInjuries": {"symptoms": None}},
        {"expertDetails": {"experienceYears": "over 10"}},
        {"physicalInjury": {"injuries": None}},
        {"physicalInjury": {"injuries": [None]}},
        {"claimantDetails": None, "prognosis": {"treatmentRecommendations": None}},
    ],
)
def test_null_and_malformed_fields_still_render(case):
    pdf_bytes = generate_report_pdf(case)
    assert pdf_bytes.startswith(b"%PDF")
    assert "SIGNATURE" in _text(pdf_bytes)


def test_free_text_experience_is_printed():
    text = _text(generate_report_pdf({"expertDetails": {"experienceYears": "over 10"}}))
    assert "over 10" in text


def test_prognosis_section():
    text = _text(generate_report_pdf(build_sample_case()))
    assert "9. OVERALL PROGNOSIS" in text
    assert "6-9 months from date of accident" in text
    assert "None expected" in text
    assert "- Simple analgesia as required" in text
    assert "10. EXPERT DETAILS" in text


def test_prognosis_placeholders_and_gate():
    text = _text(generate_report_pdf({}))
    assert "OVERALL PROGNOSIS" in text
    assert "Expected Recovery Time" in text

    options = RenderOptions(sections_to_include=SectionsToInclude(prognosis=False))
    text = _text(generate_report_pdf(build_sample_case(), options))
    assert "OVERALL PROGNOSIS" not in text
    assert "13. SIGNATURE" in text


def test_large_body_text_report():
    options = RenderOptions(font_size=FontSizes(body_text=16))
    pdf_bytes = generate_report_pdf(build_sample_case(), options)
    assert _page_count(pdf_bytes) > _page_count(generate_report_pdf(build_sample_case()))
    assert "Jordan Avery" in _text(pdf_bytes)
