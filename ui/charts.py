"""
Plotly chart builders for the Usability Audit dashboard.
All functions return plotly Figure objects.
"""
from __future__ import annotations

import plotly.graph_objects as go

from models import AnalysisReport, HistoryEntry, Severity
from scoring.scorer import score_color

_BG = "#1A1D27"
_PAPER = "#0E1117"
_GRID = "#2A2D3A"
_TEXT = "#FAFAFA"


def _base_layout(**kwargs) -> dict:
    return {
        "paper_bgcolor": _PAPER,
        "plot_bgcolor":  _BG,
        "font": {"color": _TEXT, "family": "sans-serif"},
        "margin": {"l": 20, "r": 20, "t": 40, "b": 20},
        **kwargs,
    }


def _title(text: str) -> dict:
    return {"text": text, "x": 0.5, "xanchor": "center", "font": {"size": 14, "color": _TEXT}}


# ── Overall score gauge ────────────────────────────────────────────────────────

def usability_score_gauge(score: float) -> go.Figure:
    color = score_color(score)
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        domain={"x": [0, 1], "y": [0, 1]},
        number={"font": {"size": 48, "color": color}},
        gauge={
            "axis": {"range": [0, 100], "tickcolor": _TEXT, "tickfont": {"color": _TEXT}},
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": _BG,
            "borderwidth": 2,
            "bordercolor": _GRID,
            "steps": [
                {"range": [0, 60],  "color": "#3A1A1A"},
                {"range": [60, 70], "color": "#3A2E1A"},
                {"range": [70, 80], "color": "#3A3A1A"},
                {"range": [80, 90], "color": "#2A3A1A"},
                {"range": [90, 100], "color": "#1A3A1A"},
            ],
        },
    ))
    fig.update_layout(**_base_layout(height=260), title=_title("Usability Score"))
    return fig


# ── Category scores (horizontal bar) ───────────────────────────────────────────

def category_scores_bar(report: AnalysisReport) -> go.Figure:
    if not report.categories:
        return _empty_chart("No categories")

    cats = list(reversed(report.categories))   # catalog order top to bottom
    fig = go.Figure(go.Bar(
        y=[c.name for c in cats],
        x=[c.score for c in cats],
        orientation="h",
        marker_color=[score_color(c.score) for c in cats],
        customdata=[c.weight for c in cats],
        hovertemplate="<b>%{y}</b><br>Score: %{x}/100<br>Weight: %{customdata}%<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=max(300, len(cats) * 38 + 80)),
        title=_title("Category Scores"),
        xaxis={"title": "Score", "range": [0, 100], "gridcolor": _GRID, "color": _TEXT},
        yaxis={"gridcolor": _GRID, "color": _TEXT, "automargin": True},
        showlegend=False,
    )
    return fig


# ── Issues by severity donut ───────────────────────────────────────────────────

def issues_by_severity_donut(report: AnalysisReport) -> go.Figure:
    summary = report.summary
    values = [summary.high_count, summary.medium_count, summary.low_count]
    total = sum(values)
    if total == 0:
        return _empty_chart("No issues found")

    fig = go.Figure(go.Pie(
        labels=[s.capitalize() for s in Severity.ALL],
        values=values,
        hole=0.6,
        marker={"colors": [Severity.COLORS[s] for s in Severity.ALL], "line": {"color": _BG, "width": 2}},
        hovertemplate="<b>%{label}</b>: %{value} issues<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Issues by Severity"),
        annotations=[{
            "text": f"<b>{total}</b><br>Total",
            "x": 0.5, "y": 0.5,
            "font_size": 18,
            "font_color": _TEXT,
            "showarrow": False,
        }],
        legend={"font": {"color": _TEXT}},
        showlegend=True,
    )
    return fig


# ── Category radar ─────────────────────────────────────────────────────────────

def category_radar(report: AnalysisReport) -> go.Figure:
    if len(report.categories) < 3:
        return _empty_chart("Not enough categories for a radar chart")

    names = [c.name for c in report.categories]
    scores = [c.score for c in report.categories]
    fig = go.Figure(go.Scatterpolar(
        r=scores + scores[:1],
        theta=names + names[:1],
        fill="toself",
        line_color="#6C63FF",
        hovertemplate="<b>%{theta}</b>: %{r}<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=360),
        title=_title("Usability Profile"),
        polar={
            "bgcolor": _BG,
            "radialaxis": {"range": [0, 100], "gridcolor": _GRID, "color": _TEXT},
            "angularaxis": {"gridcolor": _GRID, "color": _TEXT},
        },
        showlegend=False,
    )
    return fig


# ── History trend ──────────────────────────────────────────────────────────────

def history_scores_line(entries: list[HistoryEntry]) -> go.Figure:
    if not entries:
        return _empty_chart("No analyses yet")

    ordered = sorted(entries, key=lambda e: e.timestamp)
    fig = go.Figure(go.Scatter(
        x=[e.timestamp for e in ordered],
        y=[e.overall_score for e in ordered],
        mode="lines+markers",
        text=[e.url for e in ordered],
        marker={"color": [score_color(e.overall_score) for e in ordered], "size": 9},
        line={"color": _GRID},
        hovertemplate="<b>%{text}</b><br>%{x}<br>Score: %{y}<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Scores Over Time"),
        xaxis={"gridcolor": _GRID, "color": _TEXT},
        yaxis={"title": "Score", "range": [0, 100], "gridcolor": _GRID, "color": _TEXT},
        showlegend=False,
    )
    return fig


# ── Helper ─────────────────────────────────────────────────────────────────────

def _empty_chart(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, showarrow=False, font={"color": _TEXT, "size": 14})
    fig.update_layout(**_base_layout(height=260))
    return fig
