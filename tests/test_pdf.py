# tests/test_pdf.py

import pytest

from task_manager.analysis import generate_report, layout_report, render_pdf, report_to_pdf
from task_manager.analysis.pdf import (
    MARGIN,
    PAGE_HEIGHT,
    STYLES,
    HorizontalRule,
    LineKind,
    TextBlock,
    classify,
    display_text,
    report_filename,
)

from .factories import NOW, make_task


class TestClassify:
    @pytest.mark.parametrize(
        ("line", "kind"),
        [
            ("", LineKind.BLANK),
            ("   ", LineKind.BLANK),
            ("# Title", LineKind.HEADING_1),
            ("## Section", LineKind.HEADING_2),
            ("### Sub", LineKind.HEADING_3),
            ("---", LineKind.RULE),
            ("- **Total**: 3", LineKind.BOLD_BULLET),
            ("- plain", LineKind.BULLET),
            ("12. item", LineKind.NUMBERED),
            ("#hashtag", LineKind.PARAGRAPH),
            ("Just text", LineKind.PARAGRAPH),
        ],
    )
    def test_prefixes(self, line: str, kind: LineKind) -> None:
        assert classify(line) == kind


class TestDisplayText:
    def test_bold_bullet(self) -> None:
        assert display_text(LineKind.BOLD_BULLET, "- **Total Tasks**: 5") == "• Total Tasks: 5"

    def test_bullet(self) -> None:
        assert display_text(LineKind.BULLET, "- item") == "• item"

    def test_paragraph_strips_bold(self) -> None:
        assert display_text(LineKind.PARAGRAPH, "There are **2 overdue** tasks") == (
            "There are 2 overdue tasks"
        )

    def test_emoji_dropped(self) -> None:
        """Characters outside the standard fonts are removed."""
        assert display_text(LineKind.HEADING_3, "### ✅ No Overdue Tasks") == "No Overdue Tasks"


class TestLayout:
    def test_long_report_spans_pages(self) -> None:
        text = "\n".join(["# Title", *(f"- item {i}" for i in range(80))])
        pages = layout_report(text)

        assert len(pages) >= 2
        assert [p.footer for p in pages] == [
            f"Page {i} of {len(pages)}" for i in range(1, len(pages) + 1)
        ]

    def test_nothing_placed_below_the_margin(self) -> None:
        text = "\n".join(f"## Heading {i}\nParagraph {i}\n" for i in range(60))
        for page in layout_report(text):
            for item in page.items:
                assert item.y <= PAGE_HEIGHT - MARGIN

    def test_first_heading_is_centered_at_the_top(self) -> None:
        first = layout_report("# Title\ntext")[0].items[0]
        assert isinstance(first, TextBlock)
        assert first.centered
        assert first.y == MARGIN
        assert first.size == STYLES[LineKind.HEADING_1].size

    def test_rule_and_blank_advance(self) -> None:
        items = layout_report("---\n\n---")[0].items
        assert all(isinstance(i, HorizontalRule) for i in items)
        assert items[1].y - items[0].y == 5 + 3

    def test_single_page_footer(self) -> None:
        pages = layout_report("# Short")
        assert len(pages) == 1
        assert pages[0].footer == "Page 1 of 1"


class TestRender:
    def test_pdf_bytes(self) -> None:
        data = render_pdf(layout_report("# Title\n- **Key**: value\nBody text"))
        assert data.startswith(b"%PDF")

    def test_full_report(self) -> None:
        report = generate_report([make_task(), make_task()], now=NOW)
        assert report_to_pdf(report).startswith(b"%PDF")

    def test_filename(self) -> None:
        assert report_filename(NOW.date()) == "Task-Analysis-Report-2026-10-19.pdf"
