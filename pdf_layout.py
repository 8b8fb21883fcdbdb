# pdf_layout.py
# Drawing primitives and the page flow controller for the case report.
# Primitives draw at a given position and return the new cursor; only PageFlow
# decides when a page ends.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from fpdf import FPDF

from render_options import RenderOptions
from text_utils import sanitize_text, text_or_default, truncate_lines, wrap_text

logger = logging.getLogger(__name__)

# ---------- Layout constants (millimetres) ----------
MARGIN = 20
LINE_HEIGHT = 5
MIN_ROW_HEIGHT = 5
LABEL_WIDTH = 60
HEADER_BAR_HEIGHT = 7
HEADER_ADVANCE = 10
SECTION_GAP = 8
CELL_PADDING = 2
CELL_LINE_HEIGHT = 4
TABLE_ROW_HEIGHT = 10
MAX_CELL_LINES = 4
FOOTER_STRIP = 15
FOOTER_BASELINE = 10

# Page-break policy, one rule per block type.
FIELD_KEEP_LINES = 6      # fields up to this many lines never split
PARAGRAPH_KEEP_LINES = 3  # first lines of a paragraph stay together
SECTION_KEEP = 20         # room required below a new section header

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
FOOTER_GREY = (100, 100, 100)
ROW_SHADE = (245, 245, 245)
GRID_GREY = (200, 200, 200)

Color = Tuple[int, int, int]


class Column(NamedTuple):
    title: str
    width: float


class CasePDF(FPDF):
    """FPDF configured from RenderOptions; pagination is left to PageFlow."""

    def __init__(self, options: RenderOptions) -> None:
        super().__init__(
            orientation="L" if options.orientation == "landscape" else "P",
            unit="mm",
            format=options.page_size,
        )
        self.options = options
        self.set_margins(MARGIN, MARGIN, MARGIN)
        self.set_auto_page_break(auto=False, margin=MARGIN)
        self.use_font()

    # ---------- Style helpers ----------
    @property
    def line_height(self) -> float:
        """Baseline-to-baseline distance for body text; grows with the font size."""
        return max(LINE_HEIGHT, self.options.font_size.body_text / self.k * 1.25)

    @property
    def cell_font_size(self) -> float:
        return max(self.options.font_size.body_text - 1, 5)

    @property
    def cell_line_height(self) -> float:
        return max(CELL_LINE_HEIGHT, self.cell_font_size / self.k * 1.2)

    @property
    def primary(self) -> Color:
        return tuple(self.options.primary_color)

    @property
    def secondary(self) -> Color:
        return tuple(self.options.secondary_color)

    def use_font(self, style: str = "", size: Optional[float] = None) -> None:
        self.set_font(self.options.font_family, style=style, size=size or self.options.font_size.body_text)

    def draw_text(self, x: float, y: float, text: str) -> None:
        self.text(x, y, sanitize_text(text))

    def draw_centered(self, y: float, text: str) -> None:
        text = sanitize_text(text)
        self.text((self.w - self.get_string_width(text)) / 2, y, text)

    def force_fill_color(self, color: Color) -> None:
        # The colour cache reflects the last page drawn, not a revisited one,
        # so flip it first to make sure the fill operator is emitted.
        self.set_fill_color(*(0 if c else 255 for c in color))
        self.set_fill_color(*color)

    # ---------- Revisiting pages ----------
    @contextmanager
    def on_page(self, page_no: int) -> Iterator[None]:
        """Draw on an already laid-out page, then return to the current one."""
        current = self.page
        self.page = page_no
        self.current_font_is_set_on_page = False
        try:
            yield
        finally:
            self.page = current
            self.current_font_is_set_on_page = False

    def stamp_footers(self, claimant_name: str, case_number: str) -> int:
        """
        Overlay the final footer on every page once the page count is known.
        Returns the total page count written into the footers.
        """
        total = self.pages_count
        for page_no in range(1, total + 1):
            with self.on_page(page_no):
                self.force_fill_color(WHITE)
                self.rect(0, self.h - FOOTER_STRIP, self.w, FOOTER_STRIP, style="F")
                self.set_font(self.options.font_family, style="", size=8)
                self.set_text_color(*FOOTER_GREY)
                self.draw_centered(
                    self.h - FOOTER_BASELINE,
                    f"Page {page_no} of {total} | {claimant_name} | {case_number}",
                )
        self.set_text_color(*BLACK)
        logger.debug("Stamped footers on %d pages", total)
        return total


# ==========================================================
# Primitives
# ==========================================================
def add_section_header(pdf: CasePDF, title: str, y: float) -> float:
    pdf.set_fill_color(*pdf.primary)
    pdf.rect(pdf.l_margin, y, pdf.w - pdf.l_margin - pdf.r_margin, HEADER_BAR_HEIGHT, style="F")
    pdf.use_font("B", pdf.options.font_size.section_header)
    pdf.set_text_color(*WHITE)
    pdf.draw_text(pdf.l_margin + 3, y + 5, title)
    pdf.set_text_color(*BLACK)
    pdf.use_font()
    return y + HEADER_ADVANCE


def add_field(
    pdf: CasePDF,
    label: str,
    value: Optional[str],
    x: float,
    y: float,
    label_width: float = LABEL_WIDTH,
    max_width: Optional[float] = None,
    lines: Optional[Sequence[str]] = None,
) -> float:
    """Bold label, wrapped value beside it. Advances by the wrapped height.

    Pass *lines* to draw an already wrapped (or partial) value.
    """
    if max_width is None:
        max_width = pdf.w - pdf.r_margin - x - label_width
    if label:
        pdf.use_font("B")
        pdf.set_text_color(*pdf.primary)
        pdf.draw_text(x, y, label)
    pdf.use_font()
    pdf.set_text_color(*BLACK)
    if lines is None:
        lines = wrap_text(pdf, text_or_default(value), max_width)
    for i, line in enumerate(lines):
        pdf.text(x + label_width, y + i * pdf.line_height, line)
    return y + max(MIN_ROW_HEIGHT, len(lines) * pdf.line_height)


def add_paragraph(
    pdf: CasePDF, lines: Sequence[str], x: float, y: float, style: str = "", color: Color = BLACK
) -> float:
    pdf.use_font(style)
    pdf.set_text_color(*color)
    for i, line in enumerate(lines):
        pdf.text(x, y + i * pdf.line_height, line)
    pdf.set_text_color(*BLACK)
    pdf.use_font()
    return y + len(lines) * pdf.line_height


def _cell_lines(pdf: CasePDF, columns: Sequence[Column], cells: Sequence[str]) -> List[List[str]]:
    return [
        truncate_lines(pdf, text_or_default(cell, "-"), col.width - CELL_PADDING * 2, MAX_CELL_LINES)
        for col, cell in zip(columns, cells)
    ]


def table_row_height(pdf: CasePDF, columns: Sequence[Column], cells: Sequence[str]) -> float:
    pdf.use_font(size=pdf.cell_font_size)
    lines = _cell_lines(pdf, columns, cells)
    tallest = max((len(cl) for cl in lines), default=1)
    return max(TABLE_ROW_HEIGHT, tallest * pdf.cell_line_height + CELL_PADDING * 2)


def add_table_header(pdf: CasePDF, columns: Sequence[Column], x: float, y: float) -> float:
    width = sum(c.width for c in columns)
    pdf.set_fill_color(*pdf.primary)
    pdf.rect(x, y, width, TABLE_ROW_HEIGHT, style="F")
    pdf.use_font("B")
    pdf.set_text_color(*WHITE)
    cx = x
    for col in columns:
        pdf.draw_text(cx + CELL_PADDING + 1, y + 6, col.title)
        cx += col.width
    pdf.set_text_color(*BLACK)
    pdf.use_font()
    return y + TABLE_ROW_HEIGHT


def add_table_row(
    pdf: CasePDF,
    columns: Sequence[Column],
    cells: Sequence[str],
    x: float,
    y: float,
    shaded: bool = False,
) -> float:
    """One grid row; cell text is clipped to MAX_CELL_LINES with an ellipsis."""
    height = table_row_height(pdf, columns, cells)
    width = sum(c.width for c in columns)
    if shaded:
        pdf.set_fill_color(*ROW_SHADE)
        pdf.rect(x, y, width, height, style="F")
    pdf.set_draw_color(*GRID_GREY)

    pdf.use_font(size=pdf.cell_font_size)
    pdf.set_text_color(*BLACK)
    cx = x
    for col, lines in zip(columns, _cell_lines(pdf, columns, cells)):
        pdf.rect(cx, y, col.width, height, style="D")
        for i, line in enumerate(lines):
            baseline = y + CELL_PADDING + pdf.cell_line_height - 1 + i * pdf.cell_line_height
            pdf.text(cx + CELL_PADDING, baseline, line)
        cx += col.width
    pdf.set_draw_color(*BLACK)
    pdf.use_font()
    return y + height


def add_spanning_row(pdf: CasePDF, columns: Sequence[Column], text: str, x: float, y: float) -> float:
    """A full-width shaded row with centred text, used for empty tables."""
    width = sum(c.width for c in columns)
    pdf.set_fill_color(*ROW_SHADE)
    pdf.set_draw_color(*GRID_GREY)
    pdf.rect(x, y, width, TABLE_ROW_HEIGHT, style="DF")
    pdf.use_font()
    text = sanitize_text(text)
    pdf.text(x + (width - pdf.get_string_width(text)) / 2, y + 6, text)
    pdf.set_draw_color(*BLACK)
    return y + TABLE_ROW_HEIGHT


def add_signature_line(pdf: CasePDF, caption: str, x: float, y: float, width: float = 80) -> float:
    pdf.set_draw_color(*BLACK)
    pdf.line(x, y, x + width, y)
    pdf.use_font("I", 8)
    pdf.set_text_color(*pdf.secondary)
    pdf.draw_text(x, y + 5, caption)
    pdf.set_text_color(*BLACK)
    pdf.use_font()
    return y + 10


# ==========================================================
# Page flow
# ==========================================================
class PageFlow:
    """
    Owns the vertical cursor. Every block asks for room first; when the block
    would cross the printable bottom the page is closed, a new one opened and
    the active section header repeated with a "(CONTINUED)" suffix.
    """

    def __init__(self, pdf: CasePDF) -> None:
        self.pdf = pdf
        self.y: float = pdf.t_margin
        self.section_title: Optional[str] = None
        self.sections: List[Tuple[str, int]] = []
        self.page_breaks = 0

    @property
    def bottom(self) -> float:
        return self.pdf.h - self.pdf.b_margin

    @property
    def width(self) -> float:
        return self.pdf.w - self.pdf.l_margin - self.pdf.r_margin

    @property
    def line_height(self) -> float:
        return self.pdf.line_height

    @property
    def page_capacity(self) -> int:
        """Lines that fit on a continuation page below its repeated header."""
        return int((self.bottom - self.pdf.t_margin - HEADER_ADVANCE) // self.line_height)

    def room_in_lines(self) -> int:
        return max(int((self.bottom - self.y) // self.line_height), 0)

    def new_page(self, continued: bool = True) -> None:
        self.pdf.add_page()
        self.y = self.pdf.t_margin
        if continued and self.section_title:
            self.page_breaks += 1
            logger.debug("Page break in %r, now on page %d", self.section_title, self.pdf.page)
            self.y = add_section_header(self.pdf, f"{self.section_title} (CONTINUED)", self.y)

    def ensure_space(self, required: float) -> bool:
        """Start a new page if *required* height doesn't fit. Returns True on a break."""
        if self.y + required <= self.bottom:
            return False
        self.new_page()
        return True

    def skip(self, height: float) -> None:
        self.y = min(self.y + height, self.bottom)

    # ---------- Sections ----------
    def begin_section(self, title: str) -> None:
        self.section_title = None
        self.ensure_space(HEADER_ADVANCE + SECTION_KEEP)
        self.section_title = title
        self.sections.append((title, self.pdf.page))
        self.pdf.set_xy(self.pdf.l_margin, self.y)
        self.pdf.start_section(title)
        self.y = add_section_header(self.pdf, title, self.y)

    def end_section(self) -> None:
        self.section_title = None
        self.y += SECTION_GAP

    # ---------- Blocks ----------
    def _place(self, lines: List[str], keep: int, draw: Callable[[List[str], bool], float]) -> None:
        """Lay *lines* out across pages. The first *keep* lines stay together."""
        keep = max(1, min(keep, len(lines), self.page_capacity))
        first = True
        while lines:
            room = self.room_in_lines()
            if room < (keep if first else 1):
                self.new_page()
                continue
            chunk, lines = lines[:room], lines[room:]
            self.y = draw(chunk, first)
            first = False

    def field(self, label: str, value: Optional[str], indent: float = 0, label_width: float = LABEL_WIDTH) -> None:
        x = self.pdf.l_margin + indent
        max_width = self.pdf.w - self.pdf.r_margin - x - label_width
        self.pdf.use_font()
        lines = wrap_text(self.pdf, text_or_default(value), max_width) or [""]
        self._place(
            lines,
            FIELD_KEEP_LINES,
            lambda chunk, first: add_field(
                self.pdf, label if first else "", value, x, self.y, label_width, max_width, lines=chunk
            ),
        )

    def paragraph(self, text: str, indent: float = 0, style: str = "", color: Color = BLACK) -> None:
        x = self.pdf.l_margin + indent
        self.pdf.use_font(style)
        lines = wrap_text(self.pdf, text, self.width - indent) or [""]
        self._place(
            lines,
            PARAGRAPH_KEEP_LINES,
            lambda chunk, first: add_paragraph(self.pdf, chunk, x, self.y, style, color),
        )

    def subheading(self, text: str, indent: float = 0) -> None:
        """Bold line kept with at least two lines of what follows."""
        self.ensure_space(self.line_height * 3)
        self.y = add_paragraph(self.pdf, [sanitize_text(text)], self.pdf.l_margin + indent, self.y, "B", self.pdf.primary)

    def table(self, columns: Sequence[Column], rows: Sequence[Sequence[str]], empty_text: str) -> None:
        x = self.pdf.l_margin
        # Table geometry is top-left based; leave the text baseline gap.
        self.ensure_space(TABLE_ROW_HEIGHT * 2)
        self.y = add_table_header(self.pdf, columns, x, self.y - 2)
        if not rows:
            self.y = add_spanning_row(self.pdf, columns, empty_text, x, self.y)
        for i, row in enumerate(rows):
            height = table_row_height(self.pdf, columns, row)
            if self.ensure_space(height):
                self.y = add_table_header(self.pdf, columns, x, self.y - 2)
            self.y = add_table_row(self.pdf, columns, row, x, self.y, shaded=i % 2 == 0)
        self.y += self.line_height + 3

    def signature_line(self, caption: str) -> None:
        self.ensure_space(self.line_height * 4)
        self.y = add_signature_line(self.pdf, caption, self.pdf.l_margin, self.y + self.line_height)
