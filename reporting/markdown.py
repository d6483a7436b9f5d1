"""
Report rendering shared by the Markdown and PDF exports.

`report_blocks` flattens a report into (kind, text) blocks; the Markdown and
PDF writers only differ in how they draw each kind.
"""
from __future__ import annotations

from typing import Optional

from models import AIProvider, AnalysisReport, Recommendation, ReportExportOptions, recommendation_text
from scoring.scorer import score_label

Block = tuple[str, str]     # kind is one of: h1, h2, h3, p, bullet, note


def report_blocks(report: AnalysisReport, options: Optional[ReportExportOptions] = None) -> list[Block]:
    options = options or ReportExportOptions()
    blocks: list[Block] = [
        ("h1", "Website Usability Analysis Report"),
        ("p", f"URL: {report.url}"),
        ("p", f"Analyzed: {report.timestamp.strftime('%Y-%m-%d %H:%M UTC')}"),
        ("p", f"Overall Score: {report.overall_score}/100 ({score_label(report.overall_score)})"),
        ("p", (
            f"AI Provider: {AIProvider.LABELS.get(report.settings.ai_provider, report.settings.ai_provider)}"
            f" | Depth: {report.settings.analysis_depth}"
        )),
    ]
    if report.crawl_data.metadata.fallback:
        blocks.append(("note", "The site could not be scraped; findings are based on the URL only."))
    if report.fallback_reason:
        blocks.append(("note", report.fallback_reason))

    assessment = report.overall_assessment
    if assessment:
        blocks += [("h2", "Overall Assessment"), ("p", f"{assessment.level.capitalize()}: {assessment.message}")]
        blocks += [("bullet", s) for s in assessment.strengths]

    summary = report.summary
    blocks += [
        ("h2", "Summary"),
        ("bullet", f"High priority issues: {summary.high_count}"),
        ("bullet", f"Medium priority issues: {summary.medium_count}"),
        ("bullet", f"Low priority issues: {summary.low_count}"),
    ]
    if summary.top_recommendations:
        blocks.append(("h3", "Top Recommendations"))
        blocks += [("bullet", rec) for rec in summary.top_recommendations]

    blocks.append(("h2", "Category Scores"))
    blocks += [
        ("bullet", f"{cat.name}: {cat.score}/100 (weight {cat.weight}%)")
        for cat in report.categories
    ]

    for cat in report.categories:
        blocks.append(("h2", f"{cat.name} - {cat.score}/100"))
        blocks.append(("p", cat.description))
        if cat.assessment_level:
            blocks.append(("p", f"Assessment: {cat.assessment_level}"))

        if cat.strengths:
            blocks.append(("h3", "Strengths"))
            blocks += [("bullet", s) for s in cat.strengths]

        if cat.issues:
            blocks.append(("h3", "Issues"))
            for issue in cat.issues:
                text = f"[{issue.severity.upper()}] {issue.description}"
                if issue.element:
                    text += f" (element: {issue.element})"
                if issue.principle_note:
                    text += f" - {issue.principle_note}"
                blocks.append(("bullet", text))

        if options.include_recommendations and cat.recommendations:
            blocks.append(("h3", "Recommendations"))
            for rec in cat.recommendations:
                text = recommendation_text(rec)
                if isinstance(rec, Recommendation):
                    text += f": {rec.user_task}"
                    if rec.principle_reference:
                        text += f" ({rec.principle_reference})"
                blocks.append(("bullet", text))

        if options.include_tasks and cat.implementation_tasks:
            blocks.append(("h3", "Implementation Tasks"))
            blocks += [("bullet", t) for t in cat.implementation_tasks]

        if options.include_details and cat.details:
            blocks += [("h3", "Details"), ("p", cat.details)]

    return blocks


def report_to_markdown(report: AnalysisReport, options: Optional[ReportExportOptions] = None) -> str:
    lines = []
    for kind, text in report_blocks(report, options):
        if kind == "h1":
            lines += [f"# {text}", ""]
        elif kind == "h2":
            lines += ["", f"## {text}", ""]
        elif kind == "h3":
            lines += ["", f"### {text}", ""]
        elif kind == "bullet":
            lines.append(f"- {text}")
        elif kind == "note":
            lines += [f"> **Note:** {text}", ""]
        else:
            lines += [text, ""]
    return "\n".join(lines).strip() + "\n"
