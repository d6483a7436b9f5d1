"""
Converts AnalysisReport data to Pandas DataFrames, CSV bytes and JSON bytes for export.
"""
from __future__ import annotations

import io
import json

import pandas as pd

from models import AnalysisReport, Severity, TodoTask, recommendation_text
from scoring.scorer import score_label


# ── Category DataFrame ─────────────────────────────────────────────────────────

def categories_to_df(report: AnalysisReport) -> pd.DataFrame:
    rows = []
    for cat in report.categories:
        rows.append({
            "Category":        cat.name,
            "Score":           cat.score,
            "Rating":          score_label(cat.score),
            "Weight (%)":      cat.weight,
            "Assessment":      cat.assessment_level or "",
            "High":            len(cat.issues_of(Severity.HIGH)),
            "Medium":          len(cat.issues_of(Severity.MEDIUM)),
            "Low":             len(cat.issues_of(Severity.LOW)),
            "Recommendations": len(cat.recommendations),
        })
    columns = ["Category", "Score", "Rating", "Weight (%)", "Assessment",
               "High", "Medium", "Low", "Recommendations"]
    return pd.DataFrame(rows, columns=columns)


# ── Issues DataFrame ───────────────────────────────────────────────────────────

def issues_to_df(report: AnalysisReport) -> pd.DataFrame:
    columns = ["Severity", "Category", "Issue", "Element", "Principle"]
    rows = []
    for cat in report.categories:
        for issue in cat.issues:
            rows.append({
                "Severity":  issue.severity.upper(),
                "Category":  cat.name,
                "Issue":     issue.description,
                "Element":   issue.element or "",
                "Principle": issue.principle_note or "",
            })

    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows, columns=columns)

    # Severity sort order, category order kept within a severity
    severity_order = {s.upper(): i for i, s in enumerate(Severity.ALL)}
    df["_sev_order"] = df["Severity"].map(severity_order)
    df = df.sort_values("_sev_order", kind="stable").drop(columns=["_sev_order"])
    return df.reset_index(drop=True)


def recommendations_to_df(report: AnalysisReport) -> pd.DataFrame:
    columns = ["Category", "Action", "User Task", "Principle"]
    rows = []
    for cat in report.categories:
        for rec in cat.recommendations:
            rows.append({
                "Category":  cat.name,
                "Action":    recommendation_text(rec),
                "User Task": getattr(rec, "user_task", ""),
                "Principle": getattr(rec, "principle_reference", ""),
            })
    return pd.DataFrame(rows, columns=columns)


def tasks_to_df(tasks: list[TodoTask]) -> pd.DataFrame:
    columns = ["Priority", "Category", "Task", "Estimated Time", "Reference"]
    rows = [{
        "Priority":       task.priority.upper(),
        "Category":       task.category,
        "Task":           task.title,
        "Estimated Time": task.estimated_time or "",
        "Reference":      task.principle_reference or "",
    } for task in tasks]
    return pd.DataFrame(rows, columns=columns)


# ── Byte exports ───────────────────────────────────────────────────────────────

def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def report_to_json_bytes(report: AnalysisReport) -> bytes:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")
