"""
Overall usability score and issue summary.

Scoring model:
- Each category carries a fixed integer weight; the weights of the full
  catalog sum to 100.
- The overall score is the weight-normalised mean of the category scores that
  are actually in the report. An excluded category (mobile, when disabled)
  drops out of both numerator and denominator.
- Rounding is half-up and done in integer arithmetic so .5 ties never depend
  on float representation.
"""
from __future__ import annotations

from config import TOP_RECOMMENDATION_COUNT
from models import CategoryResult, ReportSummary, Severity, recommendation_text


def compute_overall_score(categories: list[CategoryResult]) -> int:
    total_weight = sum(cat.weight for cat in categories)
    if total_weight <= 0:
        return 0
    weighted = sum(cat.score * cat.weight for cat in categories)
    # round(weighted / total_weight) with ties going up
    return (2 * weighted + total_weight) // (2 * total_weight)


def build_summary(categories: list[CategoryResult]) -> ReportSummary:
    counts = {s: 0 for s in Severity.ALL}
    for cat in categories:
        for issue in cat.issues:
            counts[issue.severity] = counts.get(issue.severity, 0) + 1

    recommendations = [rec for cat in categories for rec in cat.recommendations]
    top = [recommendation_text(rec) for rec in recommendations[:TOP_RECOMMENDATION_COUNT]]

    return ReportSummary(
        high_count=counts[Severity.HIGH],
        medium_count=counts[Severity.MEDIUM],
        low_count=counts[Severity.LOW],
        top_recommendations=top,
    )


SCORE_BANDS = ["excellent", "good", "fair", "poor", "critical"]


def score_band(score: float) -> str:
    """Lower-case band key used for history score distribution."""
    return score_label(score).lower()


def score_label(score: float) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 80:
        return "Good"
    elif score >= 70:
        return "Fair"
    elif score >= 60:
        return "Poor"
    else:
        return "Critical"


def score_color(score: float) -> str:
    if score >= 90:
        return "#00C851"
    elif score >= 80:
        return "#2BBBAD"
    elif score >= 70:
        return "#FFD700"
    elif score >= 60:
        return "#FF8800"
    else:
        return "#FF4444"
