"""Paginate report text onto A4 pages and render them as a PDF.

Layout is a single top-to-bottom pass over the report lines. Each line is
classified by prefix, checked against the space left on the current page,
placed, and the cursor advanced. Coordinates are millimetres from the top
left corner; fonts are the standard Helvetica faces.
"""

import io
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 15.0
TEXT_WIDTH = PAGE_WIDTH - MARGIN * 2
BLANK_ADVANCE = 3.0
LINE_HEIGHT = 5.0
FOOTER_OFFSET = 10.0
FOOTER_SIZE = 8

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

_NUMBERED = re.compile(r"^\d+\.")
_BOLD = re.compile(r"\*\*(.*?)\*\*")


class LineKind(str, Enum):
    BLANK = "blank"
    HEADING_1 = "h1"
    HEADING_2 = "h2"
    HEADING_3 = "h3"
    RULE = "rule"
    BOLD_BULLET = "bold_bullet"
    BULLET = "bullet"
    NUMBERED = "numbered"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class LineStyle:
    font: str
    size: int
    budget: float
    advance: float = 0.0
    indent: float = 0.0
    wraps: bool = False


STYLES: dict[LineKind, LineStyle] = {
    LineKind.HEADING_1: LineStyle(FONT_BOLD, 18, budget=15, advance=12),
    LineKind.HEADING_2: LineStyle(FONT_BOLD, 14, budget=12, advance=10),
    LineKind.HEADING_3: LineStyle(FONT_BOLD, 12, budget=10, advance=8),
    LineKind.RULE: LineStyle(FONT, 10, budget=5, advance=5),
    LineKind.BOLD_BULLET: LineStyle(FONT_BOLD, 10, budget=8, indent=5, wraps=True),
    LineKind.BULLET: LineStyle(FONT, 10, budget=8, indent=5, wraps=True),
    LineKind.NUMBERED: LineStyle(FONT, 10, budget=8, indent=5, wraps=True),
    LineKind.PARAGRAPH: LineStyle(FONT, 10, budget=8, wraps=True),
}


@dataclass
class TextBlock:
    lines: list[str]
    x: float
    y: float
    font: str
    size: int
    centered: bool = False


@dataclass
class HorizontalRule:
    x1: float
    x2: float
    y: float


@dataclass
class Page:
    number: int
    items: list[TextBlock | HorizontalRule] = field(default_factory=list)
    footer: str = ""


def classify(line: str) -> LineKind:
    """Prefix classification; the order of checks decides ties."""
    if not line.strip():
        return LineKind.BLANK
    if line.startswith("# "):
        return LineKind.HEADING_1
    if line.startswith("## "):
        return LineKind.HEADING_2
    if line.startswith("### "):
        return LineKind.HEADING_3
    if line.startswith("---"):
        return LineKind.RULE
    if line.startswith("- **"):
        return LineKind.BOLD_BULLET
    if line.startswith("- "):
        return LineKind.BULLET
    if _NUMBERED.match(line):
        return LineKind.NUMBERED
    return LineKind.PARAGRAPH


def display_text(kind: LineKind, line: str) -> str:
    if kind == LineKind.HEADING_1:
        text = line.replace("# ", "", 1)
    elif kind == LineKind.HEADING_2:
        text = line.replace("## ", "", 1)
    elif kind == LineKind.HEADING_3:
        text = line.replace("### ", "", 1)
    elif kind == LineKind.BOLD_BULLET:
        text = line.replace("- **", "• ", 1).replace("**:", ":", 1)
    elif kind == LineKind.BULLET:
        text = line.replace("- ", "• ", 1)
    elif kind == LineKind.PARAGRAPH:
        text = _BOLD.sub(r"\1", line)
    else:
        text = line
    return _pdf_safe(text)


def _pdf_safe(text: str) -> str:
    # Standard fonts only cover cp1252; emoji markers are dropped.
    return text.encode("cp1252", "ignore").decode("cp1252").strip()


def wrap(text: str, font: str, size: int, width: float) -> list[str]:
    """Soft-wrap ``text`` to ``width`` millimetres."""
    return simpleSplit(text, font, size, width * mm) or [""]


class _Cursor:
    def __init__(self) -> None:
        self.pages = [Page(number=1)]
        self.y = MARGIN

    @property
    def page(self) -> Page:
        return self.pages[-1]

    def ensure(self, height: float) -> None:
        if self.y + height > PAGE_HEIGHT - MARGIN:
            self.pages.append(Page(number=len(self.pages) + 1))
            self.y = MARGIN


def layout_report(text: str) -> list[Page]:
    """Place every report line and stamp "Page X of N" footers."""
    cursor = _Cursor()

    for line in text.split("\n"):
        kind = classify(line)
        if kind == LineKind.BLANK:
            cursor.y += BLANK_ADVANCE
            continue

        style = STYLES[kind]
        cursor.ensure(style.budget)

        if kind == LineKind.RULE:
            cursor.page.items.append(
                HorizontalRule(MARGIN, PAGE_WIDTH - MARGIN, cursor.y)
            )
            cursor.y += style.advance
            continue

        content = display_text(kind, line)
        if kind == LineKind.HEADING_1:
            block = TextBlock(
                [content], PAGE_WIDTH / 2, cursor.y, style.font, style.size, centered=True
            )
        elif style.wraps:
            lines = wrap(content, style.font, style.size, TEXT_WIDTH - style.indent)
            block = TextBlock(lines, MARGIN + style.indent, cursor.y, style.font, style.size)
        else:
            block = TextBlock([content], MARGIN, cursor.y, style.font, style.size)

        cursor.page.items.append(block)
        if style.wraps:
            cursor.y += len(block.lines) * LINE_HEIGHT + 2
        else:
            cursor.y += style.advance

    total = len(cursor.pages)
    for page in cursor.pages:
        page.footer = f"Page {page.number} of {total}"
    return cursor.pages


def render_pdf(pages: list[Page]) -> bytes:
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)

    def top(y: float) -> float:
        return (PAGE_HEIGHT - y) * mm

    for page in pages:
        for item in page.items:
            if isinstance(item, HorizontalRule):
                pdf.setStrokeColorRGB(200 / 255, 200 / 255, 200 / 255)
                pdf.line(item.x1 * mm, top(item.y), item.x2 * mm, top(item.y))
                continue
            pdf.setFillColorRGB(0, 0, 0)
            pdf.setFont(item.font, item.size)
            for i, line in enumerate(item.lines):
                y = top(item.y + i * LINE_HEIGHT)
                if item.centered:
                    pdf.drawCentredString(item.x * mm, y, line)
                else:
                    pdf.drawString(item.x * mm, y, line)

        pdf.setFont(FONT, FOOTER_SIZE)
        pdf.setFillColorRGB(0.5, 0.5, 0.5)
        pdf.drawCentredString(
            PAGE_WIDTH / 2 * mm, FOOTER_OFFSET * mm, page.footer
        )
        pdf.showPage()

    pdf.save()
    return buf.getvalue()


def report_to_pdf(text: str) -> bytes:
    return render_pdf(layout_report(text))


def report_filename(today: date) -> str:
    return f"Task-Analysis-Report-{today.isoformat()}.pdf"
