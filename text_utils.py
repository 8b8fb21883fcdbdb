# text_utils.py
# Formatting helpers shared by the narrative and layout code: dates, ages,
# placeholder defaults, core-font sanitising and width-based wrapping.

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

from fpdf import FPDF

NOT_PROVIDED = "Not provided"
NOT_CALCULATED = "Not calculated"
ELLIPSIS = "..."

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# The PDF core fonts only cover latin-1.
_UNICODE_REPLACEMENTS = {
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2013": "-",
    "\u2014": "-",
    "\u2026": "...",
    "\u2022": "-",
    "\u00a0": " ",
    "\u200b": "",
}


# ---------- Dates ----------
def parse_date(value: Any) -> Optional[date]:
    """Best-effort parse of an ISO date or timestamp; None when it can't be read."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) < 10:
        return None
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """
    Render a date as DD/Mon/YYYY. Empty input gives "Not provided";
    input that isn't a date comes back unchanged.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return NOT_PROVIDED
    parsed = parse_date(value)
    if parsed is None:
        return str(value).strip()
    return f"{parsed.day:02d}/{_MONTHS[parsed.month - 1]}/{parsed.year}"


def calculate_age(date_of_birth: Any, reference_date: Any) -> Union[int, str]:
    """Whole years from *date_of_birth* to *reference_date*, or "Not calculated"."""
    born = parse_date(date_of_birth)
    ref = parse_date(reference_date)
    if born is None or ref is None or ref < born:
        return NOT_CALCULATED
    before_birthday = (ref.month, ref.day) < (born.month, born.day)
    return ref.year - born.year - int(before_birthday)


# ---------- Placeholders ----------
def text_or_default(value: Any, default: str = NOT_PROVIDED) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def yes_no(flag: Optional[bool], unknown: str = NOT_PROVIDED) -> str:
    if flag is None:
        return unknown
    return "Yes" if flag else "No"


def join_items(items: Iterable[Any], default: str = NOT_PROVIDED, sep: str = ", ") -> str:
    parts = [str(i).strip() for i in items or [] if i is not None and str(i).strip()]
    return sep.join(parts) if parts else default


# ---------- Core-font text ----------
def sanitize_text(text: Any) -> str:
    """Map typographic characters to ASCII and anything else outside latin-1 to '?'."""
    text = "" if text is None else str(text)
    for src, dst in _UNICODE_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def wrap_text(pdf: FPDF, text: str, max_width: float) -> List[str]:
    """
    Split *text* into lines no wider than *max_width* in the current font.
    Explicit newlines are kept; words wider than the line are split by character.
    Callers advance the cursor by len(lines) * line height.
    """
    max_width = max(max_width, 0)
    if max_width == 0:
        return []

    lines: List[str] = []
    for paragraph in sanitize_text(text).split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if pdf.get_string_width(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
                current = ""
            if pdf.get_string_width(word) <= max_width:
                current = word
                continue
            # Character-by-character wrapping for very long words
            for char in word:
                if current and pdf.get_string_width(current + char) > max_width:
                    lines.append(current)
                    current = char
                else:
                    current += char
        if current:
            lines.append(current)

    return lines


def truncate_lines(pdf: FPDF, text: str, max_width: float, max_lines: int) -> List[str]:
    """
    Wrap *text* and cap it at *max_lines*: the first max_lines - 1 lines are kept
    verbatim and the last kept line is shortened to fit with an ellipsis.
    """
    lines = wrap_text(pdf, text, max_width)
    if max_lines < 1:
        return []
    if len(lines) <= max_lines:
        return lines

    last = lines[max_lines - 1]
    while last and pdf.get_string_width(last + ELLIPSIS) > max_width:
        last = last[:-1]
    return lines[: max_lines - 1] + [last.rstrip() + ELLIPSIS]
