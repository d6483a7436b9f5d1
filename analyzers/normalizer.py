"""
Turns an untrusted LLM JSON payload into a complete AnalysisReport.

Every raw category is read leniently and each field is run through its own
default-filling function. Anything missing or invalid is taken from the
category's fallback result, so any dict input yields a full report.
"""
from __future__ import annotations

from typing import Any, Optional

from catalog.categories import list_categories
from catalog.fallback import fallback_result
from catalog.tasks import GENERIC_AUDIT_TASKS, task_for_issue
from config import (
    DEFAULT_ASSESSMENT_MESSAGE,
    DEFAULT_CATEGORY_SCORE,
    LOW_SCORE_THRESHOLD,
    MAX_IMPLEMENTATION_TASKS,
    MISSING_ISSUE_DESCRIPTION,
)
from logger import get_logger
from models import (
    AnalysisReport,
    AssessmentLevel,
    Category,
    CategoryId,
    CategoryResult,
    CrawlResult,
    Issue,
    OverallAssessment,
    Recommendation,
    RecommendationLike,
    Settings,
    Severity,
    utc_now,
)
from scoring.scorer import build_summary, compute_overall_score

logger = get_logger(__name__)


def normalize_analysis(
    raw: Any,
    settings: Settings,
    url: str,
    crawl_data: CrawlResult,
    fallback_reason: Optional[str] = None,
) -> AnalysisReport:
    """Build the full report from a raw provider payload."""
    if not isinstance(raw, dict):
        logger.warning("Provider payload is %s, not an object; using fallback data", type(raw).__name__)
        raw = {}

    categories = normalize_categories(raw, settings.include_mobile)

    return AnalysisReport(
        url=url,
        timestamp=utc_now(),
        settings=settings.redacted(),
        overall_score=compute_overall_score(categories),
        overall_assessment=normalize_overall_assessment(raw.get("overallAssessment")),
        categories=categories,
        crawl_data=crawl_data,
        summary=build_summary(categories),
        fallback_reason=fallback_reason,
    )


def normalize_categories(raw: dict, include_mobile: bool) -> list[CategoryResult]:
    raw_by_id = _index_raw_categories(raw.get("categories"))

    results: list[CategoryResult] = []
    missing: list[str] = []
    for category in list_categories():
        raw_category = raw_by_id.get(category.id.value)
        if raw_category is None:
            missing.append(category.id.value)
            results.append(fallback_result(category))
        else:
            results.append(normalize_category(category, raw_category))

    if missing:
        logger.info("Using fallback data for %d categories: %s", len(missing), ", ".join(missing))

    # Mobile is scored when sent but stripped according to local settings.
    if not include_mobile:
        results = [r for r in results if r.id != CategoryId.MOBILE_USABILITY]
    return results


def normalize_category(category: Category, raw: dict) -> CategoryResult:
    fallback = fallback_result(category)

    score = normalize_score(raw.get("score"))
    issues = [normalize_issue(i) for i in _as_list(raw.get("issues"))]
    recommendations = normalize_recommendations(raw.get("recommendations"))
    strengths = _clean_strings(raw.get("strengths"))

    details = raw.get("details")
    if not isinstance(details, str) or not details.strip():
        details = fallback.details

    assessment = raw.get("assessment", raw.get("assessmentLevel"))
    if assessment not in AssessmentLevel.ALL:
        assessment = fallback.assessment_level

    return CategoryResult(
        id=category.id,
        name=category.name,
        description=category.description,
        weight=category.weight,
        score=score,
        issues=issues,
        recommendations=recommendations or fallback.recommendations,
        # Provider task lists are ignored; tasks always come from the issues.
        implementation_tasks=derive_implementation_tasks(category.id, issues, score),
        details=details,
        strengths=strengths or fallback.strengths,
        assessment_level=assessment,
    )


# ── Field normalisers ─────────────────────────────────────────────────────────

def normalize_score(value: Any) -> int:
    number = _to_number(value)
    if number is None:
        return DEFAULT_CATEGORY_SCORE
    rounded = int(number + 0.5) if number >= 0 else -int(-number + 0.5)
    return max(0, min(100, rounded))


def normalize_issue(raw: Any) -> Issue:
    if isinstance(raw, str):
        raw = {"description": raw}
    elif not isinstance(raw, dict):
        raw = {}

    severity = raw.get("type", raw.get("severity"))
    if severity not in Severity.ALL:
        severity = Severity.MEDIUM

    description = raw.get("description")
    if not isinstance(description, str) or not description.strip():
        description = MISSING_ISSUE_DESCRIPTION

    return Issue(
        severity=severity,
        description=description,
        element=_optional_text(raw.get("element")),
        page_ref=_optional_text(raw.get("page", raw.get("pageRef"))),
        principle_note=_optional_text(
            raw.get("principleNote", raw.get("krugPrinciple"))
        ),
    )


def normalize_recommendations(raw: Any) -> list[RecommendationLike]:
    out: list[RecommendationLike] = []
    for item in _as_list(raw):
        if isinstance(item, str):
            if item.strip():
                out.append(item)
            continue
        if not isinstance(item, dict):
            continue

        action = _optional_text(item.get("action"))
        user_task = _optional_text(item.get("userTask"))
        if action is None or user_task is None:
            continue
        reference = _optional_text(
            item.get("principleReference", item.get("krugReference"))
        )
        out.append(Recommendation(action=action, user_task=user_task, principle_reference=reference or ""))
    return out


def derive_implementation_tasks(category_id: CategoryId, issues: list[Issue], score: int) -> list[str]:
    """
    Map issue descriptions to category-specific tasks.

    Deterministic, deduplicated in first-seen order and capped. When no issue
    maps to a task and the score is low, one generic audit task is returned.
    """
    tasks: list[str] = []
    for issue in issues:
        task = task_for_issue(category_id, issue.description)
        if task and task not in tasks:
            tasks.append(task)

    if not tasks and score < LOW_SCORE_THRESHOLD:
        tasks.append(GENERIC_AUDIT_TASKS[category_id])

    return tasks[:MAX_IMPLEMENTATION_TASKS]


def normalize_overall_assessment(raw: Any) -> Optional[OverallAssessment]:
    if not isinstance(raw, dict):
        return None

    level = raw.get("level")
    if level not in AssessmentLevel.ALL:
        level = AssessmentLevel.MODERATE

    message = raw.get("message")
    if not isinstance(message, str) or not message.strip():
        message = DEFAULT_ASSESSMENT_MESSAGE

    return OverallAssessment(level=level, message=message, strengths=_clean_strings(raw.get("strengths")))


# ── Helpers ───────────────────────────────────────────────────────────────────

def _index_raw_categories(raw_categories: Any) -> dict[str, dict]:
    """First entry per id wins; entries without a string id are skipped."""
    out: dict[str, dict] = {}
    for entry in _as_list(raw_categories):
        if isinstance(entry, dict) and isinstance(entry.get("id"), str):
            out.setdefault(entry["id"], entry)
    return out


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _clean_strings(value: Any) -> list[str]:
    return [s for s in _as_list(value) if isinstance(s, str) and s.strip()]


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        # JSON ints are unbounded; float() overflows past ~1e308.
        number = float(max(-1000, min(1000, value)))
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number
