import io
from pathlib import Path
import sys

import pytest
from pdfminer.high_level import extract_pages, extract_text
from pdfminer.layout import LTTextLine

sys.path.append(str(Path(__file__).resolve().parent.parent))
from pdf_layout import (
    HEADER_ADVANCE,
    LINE_HEIGHT,
    MARGIN,
    CasePDF,
    Column,
    PageFlow,
    add_field,
    add_section_header,
    table_row_height,
)
from render_options import FontSizes, RenderOptions

MM = 72 / 25.4


def _iter_text_lines(layout_obj):
    from pdfminer.layout import LTTextContainer, LTFigure

    if isinstance(layout_obj, LTTextLine):
        yield layout_obj
    elif isinstance(layout_obj, (LTTextContainer, LTFigure)):
        for child in layout_obj:
            yield from _iter_text_lines(child)


def assert_pdf_lines_fit(page_iter):
    for page in page_iter:
        width = page.width
        for line in _iter_text_lines(page):
            assert line.x1 <= width + 1  # allow tiny rounding tolerance
            # nothing is drawn into the bottom margin
            assert line.y0 >= (MARGIN - 5) * MM


def _flow(**options):
    pdf = CasePDF(RenderOptions(**options))
    flow = PageFlow(pdf)
    flow.new_page(continued=False)
    return pdf, flow


def _output(pdf):
    return io.BytesIO(bytes(pdf.output()))


def test_primitives_return_new_cursor():
    pdf, _ = _flow()
    assert add_section_header(pdf, "1. TEST", 30) == 30 + HEADER_ADVANCE
    assert add_field(pdf, "Label:", "value", MARGIN, 50) == 50 + LINE_HEIGHT
    assert add_field(pdf, "Label:", "one\ntwo\nthree", MARGIN, 50) == 50 + 3 * LINE_HEIGHT
    assert add_field(pdf, "Label:", None, MARGIN, 50) == 50 + LINE_HEIGHT


def test_long_unbroken_word_and_paragraph():
    pdf, flow = _flow()
    long_word = (
        "Lopadotemachoselachogaleokranioleipsanodrimhypotrimmatosilphioparaome"
        "litokatakechymenokichlepikossyphophattoperisteralektryonoptekefallio"
        "lagoiosiraiobaphetraganopterygon"
    )
    flow.begin_section("1. WRAPPING")
    flow.field("Long word:", long_word)
    flow.paragraph(long_word + " and some ordinary words afterwards")
    flow.end_section()

    assert_pdf_lines_fit(extract_pages(_output(pdf)))


def test_section_continues_on_next_page():
    pdf, flow = _flow()
    flow.begin_section("1. CLAIMANT DETAILS")
    for i in range(80):
        flow.field(f"Field {i}:", f"value {i}")
    flow.end_section()

    assert pdf.pages_count >= 2
    assert flow.page_breaks >= 1
    text = extract_text(_output(pdf))
    assert "1. CLAIMANT DETAILS (CONTINUED)" in text
    assert "value 79" in text


def test_long_paragraph_flows_line_by_line():
    pdf, flow = _flow()
    flow.begin_section("1. STATEMENT")
    flow.paragraph("The claimant describes the events in detail. " * 400)
    flow.end_section()

    assert pdf.pages_count >= 3
    assert_pdf_lines_fit(extract_pages(_output(pdf)))


def test_short_field_is_not_split():
    pdf, flow = _flow()
    flow.y = flow.bottom - LINE_HEIGHT * 2 + 1  # room for a single line
    flow.field("Examination:", "first\nsecond\nthird")
    assert pdf.page == 2
    assert flow.y == pdf.t_margin + 3 * LINE_HEIGHT


def test_ensure_space_opens_continuation_page():
    pdf, flow = _flow()
    flow.begin_section("2. ACCIDENT DETAILS")
    flow.y = flow.bottom - 2
    assert flow.ensure_space(LINE_HEIGHT) is True
    assert pdf.page == 2
    assert flow.y == pdf.t_margin + HEADER_ADVANCE
    assert flow.ensure_space(LINE_HEIGHT) is False


def test_section_header_is_not_orphaned():
    pdf, flow = _flow()
    flow.y = flow.bottom - 15
    flow.begin_section("3. TREATMENTS")
    assert pdf.page == 2
    assert flow.sections == [("3. TREATMENTS", 2)]
    # a fresh section start is not a continuation
    assert flow.page_breaks == 0


def test_table_repeats_header_and_truncates_cells():
    pdf, flow = _flow()
    columns = [Column("Injury Name", 60), Column("Current Status", 110)]
    rows = [[f"Injury {i}", "Mild symptoms currently present"] for i in range(60)]
    rows.append(["Long", "word " * 300])
    flow.begin_section("4. SUMMARY OF INJURIES")
    flow.table(columns, rows, "No injuries recorded")
    flow.end_section()

    assert pdf.pages_count >= 2
    text = extract_text(_output(pdf))
    assert text.count("Injury Name") >= 2
    assert "Injury 59" in text
    assert "..." in text
    assert_pdf_lines_fit(extract_pages(_output(pdf)))


def test_empty_table_shows_placeholder_row():
    pdf, flow = _flow()
    flow.begin_section("4. SUMMARY OF INJURIES")
    flow.table([Column("Injury Name", 85), Column("Prognosis", 85)], [], "No injuries recorded")
    assert "No injuries recorded" in extract_text(_output(pdf))


def test_footer_stamped_with_final_total():
    pdf, flow = _flow()
    flow.begin_section("1. CLAIMANT DETAILS")
    for i in range(120):
        flow.field(f"Field {i}:", "value")
    total = pdf.stamp_footers("Robin Shaw", "MC-1")

    pages = list(extract_pages(_output(pdf)))
    assert total == len(pages)
    text = extract_text(_output(pdf))
    for n in range(1, total + 1):
        assert f"Page {n} of {total} | Robin Shaw | MC-1" in text


def test_landscape_letter_page_size():
    pdf, flow = _flow(page_size="letter", orientation="landscape")
    flow.begin_section("1. CLAIMANT DETAILS")
    flow.field("Name:", "Robin Shaw")
    page = next(iter(extract_pages(_output(pdf))))
    assert abs(page.width - 279.4 * MM) < 1
    assert abs(page.height - 215.9 * MM) < 1


def test_large_body_text_lines_do_not_overlap():
    pdf, flow = _flow(font_size=FontSizes(body_text=20))
    assert pdf.line_height >= 20 / pdf.k
    assert flow.page_capacity < _flow()[1].page_capacity

    flow.begin_section("1. STATEMENT")
    start = flow.y
    flow.paragraph("one\ntwo\nthree")
    assert flow.y == pytest.approx(start + 3 * pdf.line_height)
    flow.field("Description:", "The claimant describes the events in detail. " * 60)
    flow.end_section()

    pages = list(extract_pages(_output(pdf)))
    assert_pdf_lines_fit(pages)
    for page in pages:
        body = sorted(
            (line for line in _iter_text_lines(page) if line.x0 > (MARGIN + 10) * MM),
            key=lambda line: -line.y1,
        )
        for above, below in zip(body, body[1:]):
            assert below.y1 <= above.y0 + 1


def test_table_rows_grow_with_body_text():
    small, _ = _flow()
    large, _ = _flow(font_size=FontSizes(body_text=20))
    columns = [Column("Injury Name", 60), Column("Current Status", 110)]
    row = ["Neck", "Moderate symptoms currently present " * 6]
    assert table_row_height(large, columns, row) > table_row_height(small, columns, row)
