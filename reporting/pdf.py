"""
PDF export of the usability report, built with fpdf2 from the same blocks as
the Markdown export.
"""
from __future__ import annotations

from typing import Optional

from fpdf import FPDF

from models import AnalysisReport, ReportExportOptions
from reporting.markdown import report_blocks

# Core PDF fonts only cover latin-1.
_REPLACEMENTS = {
    "‘": "'", "’": "'", "“": '"', "”": '"',
    "–": "-", "—": "-", "…": "...", "•": "-",
    "→": "->", "≤": "<=", "≥": ">=",
}

_STYLES = {
    #         size, style, line height, space before
    "h1":     (18, "B", 10, 0),
    "h2":     (14, "B", 8, 4),
    "h3":     (12, "B", 7, 2),
    "p":      (10, "",  5, 1),
    "bullet": (10, "",  5, 0),
    "note":   (10, "I", 5, 1),
}


def report_to_pdf(report: AnalysisReport, options: Optional[ReportExportOptions] = None) -> bytes:
    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_title("Website Usability Analysis Report")
    pdf.add_page()

    for kind, text in report_blocks(report, options):
        size, style, height, space = _STYLES.get(kind, _STYLES["p"])
        if space:
            pdf.ln(space)
        pdf.set_font("Helvetica", style, size)
        if kind == "bullet":
            text = f"- {text}"
        pdf.multi_cell(0, height, _latin1(text), new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())


def _latin1(text: str) -> str:
    for src, dst in _REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", "replace").decode("latin-1")
