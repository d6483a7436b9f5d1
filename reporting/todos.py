"""
Derives a todo list from a report and renders it as Markdown, JSON or CSV.

Tasks come from three places per category: the derived implementation tasks
(only when the category has issues), structured recommendations, and every
high-severity issue. A "Maintain Current Strengths" task is prepended when the
report carries overall strengths.
"""
from __future__ import annotations

import csv
import io
import json
import math
import re
from typing import Any

import pandas as pd

from config import CORE_PRINCIPLE_KEYWORDS
from models import (
    AnalysisReport,
    CategoryResult,
    Recommendation,
    Severity,
    TodoExportOptions,
    TodoTask,
)

STRENGTHS_CATEGORY = "Overall Assessment"

_CHECKBOX_PREFIX = re.compile(r"^\[\s*\]\s*")


# ── Derivation ────────────────────────────────────────────────────────────────

def generate_todo_tasks(report: AnalysisReport) -> list[TodoTask]:
    tasks: list[TodoTask] = []

    def next_id() -> str:
        return f"task-{len(tasks) + 1}"

    strengths = report.overall_assessment.strengths if report.overall_assessment else []
    if strengths:
        more = ", and others" if len(strengths) > 3 else ""
        tasks.append(TodoTask(
            id=next_id(),
            title="Maintain Current Strengths",
            description=(
                f"Your website has {len(strengths)} key strengths that should be "
                "preserved during improvements"
            ),
            category=STRENGTHS_CATEGORY,
            priority=Severity.MEDIUM,
            principle_reference="Steve Krug: \"If it ain't broke, don't fix it\"",
            user_action=f"Continue to maintain: {', '.join(strengths[:3])}{more}",
            estimated_time="30 minutes review",
        ))

    for cat in report.categories:
        issue_count = len(cat.issues)

        if issue_count:
            priority = category_priority(cat)
            for raw_task in cat.implementation_tasks:
                title = _CHECKBOX_PREFIX.sub("", raw_task)
                tasks.append(TodoTask(
                    id=next_id(),
                    title=title,
                    description=(
                        f"Contextual implementation task for {cat.name} - "
                        f"addressing {issue_count} issue(s)"
                    ),
                    category=cat.name,
                    priority=priority,
                    principle_reference=cat.description,
                    user_action=title,
                    estimated_time=estimate_task_time(title, issue_count),
                ))

        for rec in cat.recommendations:
            if not isinstance(rec, Recommendation):
                continue
            tasks.append(TodoTask(
                id=next_id(),
                title=rec.action,
                description=rec.user_task,
                category=cat.name,
                priority=recommendation_priority(cat, rec),
                principle_reference=rec.principle_reference or None,
                user_action=rec.user_task,
                estimated_time=estimate_task_time(rec.user_task),
            ))

        for issue in cat.issues_of(Severity.HIGH):
            tasks.append(TodoTask(
                id=next_id(),
                title=f"Fix: {issue.description}",
                description=f"High priority issue in {cat.name}: {issue.description}",
                category=cat.name,
                priority=Severity.HIGH,
                principle_reference=issue.principle_note or cat.description,
                user_action=f"Investigate and fix: {issue.description}",
                estimated_time="2-4 hours",
            ))

    return tasks


def category_priority(cat: CategoryResult) -> str:
    issue_count = len(cat.issues)
    if cat.issues_of(Severity.HIGH) or (issue_count >= 2 and cat.weight >= 12):
        return Severity.HIGH
    if issue_count >= 1 and cat.weight >= 8:
        return Severity.MEDIUM
    return Severity.LOW


def recommendation_priority(cat: CategoryResult, rec: Recommendation) -> str:
    text = f"{rec.action} {rec.user_task}".lower()
    if any(keyword in text for keyword in CORE_PRINCIPLE_KEYWORDS):
        return Severity.HIGH
    if cat.weight >= 10:
        return Severity.MEDIUM
    return Severity.LOW


def estimate_task_time(task: str, issue_count: int = 1) -> str:
    """Rough "N-M hours" range from the task's leading verb and issue load."""
    lowered = task.lower()
    if any(word in lowered for word in ("test", "audit", "review")):
        base = 1.5
    elif any(word in lowered for word in ("implement", "create", "design")):
        base = 6
    elif any(word in lowered for word in ("optimize", "improve", "enhance")):
        base = 3
    else:
        base = 2

    complexity = min(issue_count / 2, 2)
    low = _round_half_up(base * (1 + complexity * 0.5))
    high = _round_half_up(low * 1.5)
    return f"{low}-{high} hours"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ── Formatting ────────────────────────────────────────────────────────────────

def format_todo_export(tasks: list[TodoTask], options: TodoExportOptions) -> str:
    if options.format == "markdown":
        return todos_to_markdown(tasks, options)
    if options.format == "json":
        return json.dumps(todos_to_json(tasks, options), indent=2, ensure_ascii=False)
    if options.format == "csv":
        return todos_to_csv(tasks, options)
    raise ValueError(f"Unsupported export format: {options.format}")


def todos_to_markdown(tasks: list[TodoTask], options: TodoExportOptions) -> str:
    lines = [
        "# Website Usability Todo Tasks",
        "",
        "*Generated from Steve Krug \"Don't Make Me Think\" analysis with contextual implementation tasks*",
        "",
        "**Note:** These tasks are generated from the issues actually found on your website.",
        "",
    ]

    strength_tasks = [t for t in tasks if t.category == STRENGTHS_CATEGORY]
    work = [t for t in tasks if t.category != STRENGTHS_CATEGORY]

    if strength_tasks:
        lines += [
            "## 🌟 Current Strengths to Maintain",
            "",
            "Your website already does many things well! Preserve these strengths while implementing improvements:",
            "",
        ]
        for task in strength_tasks:
            lines += [
                f"- ✅ **{task.title}**",
                f"  - {task.user_action}",
                f"  - Time needed: {task.estimated_time}",
                "",
            ]

    lines += [
        "## Summary",
        "",
        f"- **Total Tasks:** {len(tasks)}",
        f"- **High Priority:** {sum(t.priority == Severity.HIGH for t in tasks)}",
        f"- **Medium Priority:** {sum(t.priority == Severity.MEDIUM for t in tasks)}",
        f"- **Low Priority:** {sum(t.priority == Severity.LOW for t in tasks)}",
        f"- **Strengths to Maintain:** {len(strength_tasks)}",
        "",
    ]

    if options.group_by_category:
        for category in dict.fromkeys(t.category for t in work):
            lines += [f"## {category}", ""]
            for task in (t for t in work if t.category == category):
                tag = f" **[{task.priority.upper()}]**" if options.include_priority else ""
                lines += _task_lines(f"- [ ] {task.title}{tag}", task, options)
    else:
        for priority in Severity.ALL:
            group = [t for t in work if t.priority == priority]
            if not group:
                continue
            lines += [f"## {priority.capitalize()} Priority Tasks", ""]
            for task in group:
                lines += _task_lines(f"- [ ] {task.title} - {task.category}", task, options)

    return "\n".join(lines)


def _task_lines(head: str, task: TodoTask, options: TodoExportOptions) -> list[str]:
    out = [head, f"  - {task.description}"]
    if task.user_action:
        out.append(f"  - **Action:** {task.user_action}")
    if task.estimated_time:
        out.append(f"  - **Estimated Time:** {task.estimated_time}")
    if options.include_references and task.principle_reference:
        out.append(f"  - **Reference:** *({task.principle_reference})*")
    out.append("")
    return out


def todos_to_json(tasks: list[TodoTask], options: TodoExportOptions) -> Any:
    """A list of task dicts, or {category: [task, ...]} when grouping by category."""
    exported = []
    for task in tasks:
        item: dict[str, Any] = {
            "id": task.id,
            "title": task.title,
            "description": task.description,
            "category": task.category,
            "user_action": task.user_action,
            "estimated_time": task.estimated_time,
            "completed": task.completed,
        }
        if options.include_priority:
            item["priority"] = task.priority
        if options.include_references and task.principle_reference:
            item["principle_reference"] = task.principle_reference
        exported.append(item)

    if not options.group_by_category:
        return exported

    grouped: dict[str, list[dict]] = {}
    for item in exported:
        grouped.setdefault(item["category"], []).append(item)
    return grouped


def todos_to_csv(tasks: list[TodoTask], options: TodoExportOptions) -> str:
    columns = ["Title", "Description", "Category", "User Action", "Estimated Time"]
    if options.include_priority:
        columns.append("Priority")
    if options.include_references:
        columns.append("Principle Reference")

    rows = []
    for task in tasks:
        row = {
            "Title": task.title,
            "Description": task.description,
            "Category": task.category,
            "User Action": task.user_action or "",
            "Estimated Time": task.estimated_time or "",
            "Priority": task.priority,
            "Principle Reference": task.principle_reference or "",
        }
        rows.append([row[c] for c in columns])

    df = pd.DataFrame(rows, columns=columns)
    buf = io.StringIO()
    df.to_csv(buf, index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return buf.getvalue()
