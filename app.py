"""
Usability Audit Tool — Streamlit Application
Scores a website against Steve Krug's "Don't Make Me Think" usability principles.
"""
from __future__ import annotations

from datetime import datetime

import pandas as pd
import streamlit as st

from analyzers.orchestrator import AnalysisPipeline
from analyzers.providers import get_provider
from config import DATA_DIR, HISTORY_FILENAME, SETTINGS_FILENAME
from crawler.firecrawl import FirecrawlClient
from errors import AuditError
from logger import get_logger
from models import (
    AIProvider,
    AnalysisDepth,
    AnalysisReport,
    CategoryResult,
    ProgressStep,
    Recommendation,
    ReportExportOptions,
    Settings,
    Severity,
    StepStatus,
    TodoExportOptions,
    recommendation_text,
)
from reporting.exporter import (
    categories_to_df,
    issues_to_df,
    recommendations_to_df,
    report_to_json_bytes,
    tasks_to_df,
    to_csv_bytes,
)
from reporting.markdown import report_to_markdown
from reporting.pdf import report_to_pdf
from reporting.todos import format_todo_export, generate_todo_tasks
from scoring.scorer import score_color, score_label
from storage.history import HistoryStore
from storage.settings_store import SettingsStore
from ui.charts import (
    category_radar,
    category_scores_bar,
    history_scores_line,
    issues_by_severity_donut,
    usability_score_gauge,
)

logger = get_logger(__name__)

# ── Page config ────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Usability Audit Tool",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ─────────────────────────────────────────────────────────────────
st.markdown("""
<style>
.block-container { padding-top: 1rem; }

/* Metric cards */
.metric-card {
    background: #1A1D27;
    border-radius: 10px;
    padding: 1rem 1.2rem;
    margin-bottom: 0.5rem;
    border-left: 4px solid;
}
.metric-card.high    { border-color: #FF4B4B; }
.metric-card.medium  { border-color: #FFA500; }
.metric-card.low     { border-color: #4B9EFF; }
.metric-card.success { border-color: #00C851; }
.metric-card.neutral { border-color: #6C63FF; }

.metric-val  { font-size: 2rem; font-weight: 700; margin: 0; }
.metric-lbl  { font-size: 0.8rem; color: #888; text-transform: uppercase; letter-spacing: 0.05em; }

/* Severity pills */
.pill {
    display: inline-block;
    padding: 2px 10px;
    border-radius: 12px;
    font-size: 0.75rem;
    font-weight: 600;
    letter-spacing: 0.05em;
    text-transform: uppercase;
}
.pill.high   { background: #FF4B4B22; color: #FF4B4B; border: 1px solid #FF4B4B55; }
.pill.medium { background: #FFA50022; color: #FFA500; border: 1px solid #FFA50055; }
.pill.low    { background: #4B9EFF22; color: #4B9EFF; border: 1px solid #4B9EFF55; }

.modebar { display: none !important; }

.sidebar-logo { font-size: 1.5rem; font-weight: 800; color: #6C63FF; margin-bottom: 0.5rem; }
</style>
""", unsafe_allow_html=True)

_STEP_ICONS = {
    StepStatus.PENDING:   "⏳",
    StepStatus.ACTIVE:    "🔄",
    StepStatus.COMPLETED: "✅",
    StepStatus.ERROR:     "❌",
}


# ── State helpers ──────────────────────────────────────────────────────────────

def _history_store() -> HistoryStore:
    return HistoryStore(DATA_DIR / HISTORY_FILENAME)


def _settings_store() -> SettingsStore:
    return SettingsStore(DATA_DIR / SETTINGS_FILENAME)


def _current_settings() -> Settings:
    if "settings" not in st.session_state:
        st.session_state.settings = _settings_store().load() or Settings()
    return st.session_state.settings


def _clear_results():
    st.session_state.pop("report", None)


def _has_result() -> bool:
    return st.session_state.get("report") is not None


# ── Sidebar ────────────────────────────────────────────────────────────────────

def render_sidebar() -> Settings:
    saved = _current_settings()

    with st.sidebar:
        st.markdown('<div class="sidebar-logo">🧭 Usability Audit</div>', unsafe_allow_html=True)
        st.caption("Steve Krug's \"Don't Make Me Think\" principles")
        st.divider()

        st.subheader("Analysis Settings")
        provider = st.selectbox(
            "AI provider",
            options=AIProvider.ALL,
            index=AIProvider.ALL.index(saved.ai_provider),
            format_func=lambda p: AIProvider.LABELS[p],
        )
        depth = st.select_slider(
            "Analysis depth",
            options=AnalysisDepth.ALL,
            value=saved.analysis_depth,
            format_func=str.capitalize,
        )
        include_mobile = st.toggle("Include mobile usability", value=saved.include_mobile)
        stealth_mode = st.toggle(
            "Stealth scraping", value=saved.stealth_mode,
            help="Route scraping through the provider's stealth proxy",
        )

        st.subheader("API Keys")
        scrape_key = st.text_input("Firecrawl API key", value=saved.scrape_api_key, type="password")
        ai_key = st.text_input(f"{AIProvider.LABELS[provider]} API key", value=saved.ai_api_key, type="password")

        settings = Settings(
            ai_provider=provider,
            analysis_depth=depth,
            include_mobile=include_mobile,
            stealth_mode=stealth_mode,
            scrape_api_key=scrape_key.strip(),
            ai_api_key=ai_key.strip(),
        )

        if st.button("💾 Save Settings", use_container_width=True):
            if _settings_store().save(settings):
                st.session_state.settings = settings
                st.success("Settings saved")
            else:
                st.error("Could not save settings")

        c1, c2 = st.columns(2)
        with c1:
            if st.button("Test Firecrawl", use_container_width=True, disabled=not settings.scrape_api_key):
                ok = FirecrawlClient(settings.scrape_api_key).check_connection(settings)
                (st.success if ok else st.error)("Firecrawl OK" if ok else "Firecrawl failed")
        with c2:
            if st.button("Test AI", use_container_width=True, disabled=not settings.ai_api_key):
                ok = get_provider(settings).check_connection()
                (st.success if ok else st.error)("AI provider OK" if ok else "AI provider failed")

        st.divider()
        render_recent_history()

        if _has_result():
            st.divider()
            if st.button("🔄 New Analysis", type="primary", use_container_width=True):
                _clear_results()
                st.rerun()

    return settings


def render_recent_history() -> None:
    store = _history_store()
    entries = store.list()
    st.subheader("Recent Analyses")
    if not entries:
        st.caption("No analyses yet.")
        return

    for entry in entries[:5]:
        col_open, col_del = st.columns([4, 1])
        label = f"{entry.url} · {entry.overall_score}/100"
        with col_open:
            if st.button(label, key=f"open_{entry.id}", use_container_width=True):
                st.session_state.report = entry.full_report
                st.rerun()
        with col_del:
            if st.button("🗑", key=f"del_{entry.id}"):
                store.delete(entry.id)
                st.rerun()

    if st.button("Clear history", use_container_width=True):
        store.clear()
        st.rerun()


# ── Run analysis ───────────────────────────────────────────────────────────────

def run_analysis(url: str, settings: Settings) -> None:
    with st.status("Running usability analysis…", expanded=True) as status_widget:
        step_box = st.empty()

        def on_progress(steps: list[ProgressStep]):
            step_box.markdown("\n".join(
                f"{_STEP_ICONS.get(s.status, '•')} **{s.name}** · {s.description}" for s in steps
            ))

        try:
            report = AnalysisPipeline(settings).run(url, progress_callback=on_progress)
        except AuditError as exc:
            status_widget.update(label="Analysis failed", state="error")
            st.error(str(exc))
            return
        except Exception as exc:
            logger.exception("Unexpected failure analysing %s", url)
            status_widget.update(label="Analysis failed", state="error")
            st.error(f"Analysis failed: {exc}")
            return

        status_widget.update(label="Analysis complete!", state="complete")

    _history_store().save_if_fresh(report)
    st.session_state.report = report
    st.rerun()


# ── Dashboard: Overview ────────────────────────────────────────────────────────

def render_overview(report: AnalysisReport) -> None:
    summary = report.summary

    if report.fallback_reason:
        st.warning(report.fallback_reason)
    if report.crawl_data.metadata.fallback:
        st.info("The site could not be scraped, so this analysis is based on the URL alone.")

    col_gauge, col_stats = st.columns([1, 2])
    with col_gauge:
        st.plotly_chart(usability_score_gauge(report.overall_score), use_container_width=True)
        color = score_color(report.overall_score)
        st.markdown(
            f'<div style="text-align:center;font-size:1.1rem;font-weight:700;color:{color}">'
            f'{score_label(report.overall_score)}</div>',
            unsafe_allow_html=True,
        )

    with col_stats:
        c1, c2, c3, c4 = st.columns(4)
        _metric_card(c1, "Categories",    len(report.categories), "neutral")
        _metric_card(c2, "High Issues",   summary.high_count,     Severity.HIGH)
        _metric_card(c3, "Medium Issues", summary.medium_count,   Severity.MEDIUM)
        _metric_card(c4, "Low Issues",    summary.low_count,      Severity.LOW)

        assessment = report.overall_assessment
        if assessment:
            st.markdown(f"**Overall assessment ({assessment.level}):** {assessment.message}")
            for strength in assessment.strengths:
                st.markdown(f"- ✅ {strength}")

    st.divider()
    c_left, c_right = st.columns(2)
    with c_left:
        st.plotly_chart(category_scores_bar(report), use_container_width=True)
    with c_right:
        st.plotly_chart(issues_by_severity_donut(report), use_container_width=True)

    st.plotly_chart(category_radar(report), use_container_width=True)

    st.divider()
    st.subheader("Top Recommendations")
    if summary.top_recommendations:
        for idx, rec in enumerate(summary.top_recommendations, start=1):
            st.markdown(f"{idx}. {rec}")
    else:
        st.success("No recommendations. Nice work!")


# ── Dashboard: Categories ─────────────────────────────────────────────────────

def render_categories(report: AnalysisReport) -> None:
    st.dataframe(categories_to_df(report), use_container_width=True, hide_index=True)

    sev_filter = st.multiselect(
        "Filter issues by severity",
        options=Severity.ALL,
        default=Severity.ALL,
        format_func=str.capitalize,
    )

    for cat in report.categories:
        with st.expander(f"**{cat.name}** — {cat.score}/100 · weight {cat.weight}%"):
            _render_category(cat, sev_filter)


def _render_category(cat: CategoryResult, sev_filter: list[str]) -> None:
    st.caption(cat.description)
    badge_html = " ".join(
        f'<span class="pill {sev}">{len(cat.issues_of(sev))} {sev}</span>'
        for sev in Severity.ALL if cat.issues_of(sev)
    )
    if badge_html:
        st.markdown(badge_html, unsafe_allow_html=True)
    if cat.assessment_level:
        st.markdown(f"**Assessment:** {cat.assessment_level.capitalize()}")

    if cat.strengths:
        st.markdown("**Strengths**")
        for strength in cat.strengths:
            st.markdown(f"- ✅ {strength}")

    issues = [i for i in cat.issues if i.severity in sev_filter]
    if issues:
        st.markdown("**Issues**")
        for issue in issues:
            line = f"{Severity.ICONS.get(issue.severity, '•')} {issue.description}"
            if issue.element:
                line += f" · `{issue.element}`"
            st.markdown(line)
            if issue.principle_note:
                st.caption(issue.principle_note)

    if cat.implementation_tasks:
        st.markdown("**Implementation Tasks**")
        for task in cat.implementation_tasks:
            st.markdown(f"- [ ] {task}")

    if cat.details:
        st.markdown("**Details**")
        st.write(cat.details)


# ── Dashboard: Recommendations ────────────────────────────────────────────────

def render_recommendations(report: AnalysisReport) -> None:
    for cat in report.categories:
        if not cat.recommendations:
            continue
        st.subheader(cat.name)
        for rec in cat.recommendations:
            st.markdown(f"**{recommendation_text(rec)}**")
            if isinstance(rec, Recommendation):
                st.markdown(f"- {rec.user_task}")
                if rec.principle_reference:
                    st.caption(rec.principle_reference)

    st.divider()
    st.subheader("Todo List")
    tasks = generate_todo_tasks(report)
    df = tasks_to_df(tasks)
    if df.empty:
        st.success("Nothing to do!")
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)


# ── Dashboard: Export ─────────────────────────────────────────────────────────

def render_export(report: AnalysisReport) -> None:
    stamp = report.timestamp.strftime("%Y%m%d_%H%M")
    slug = report.crawl_data.metadata.base_url.split("://", 1)[-1].replace("/", "_") or "site"

    st.subheader("Report")
    c1, c2, c3 = st.columns(3)
    with c1:
        include_recs = st.checkbox("Include recommendations", value=True)
    with c2:
        include_details = st.checkbox("Include details", value=True)
    with c3:
        include_tasks = st.checkbox("Include implementation tasks", value=True)
    options = ReportExportOptions(include_recs, include_details, include_tasks)

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.download_button(
            "Download PDF",
            data=report_to_pdf(report, options),
            file_name=f"usability_{slug}_{stamp}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )
    with c2:
        st.download_button(
            "Download Markdown",
            data=report_to_markdown(report, options).encode("utf-8"),
            file_name=f"usability_{slug}_{stamp}.md",
            mime="text/markdown",
            use_container_width=True,
        )
    with c3:
        st.download_button(
            "Download JSON",
            data=report_to_json_bytes(report),
            file_name=f"usability_{slug}_{stamp}.json",
            mime="application/json",
            use_container_width=True,
        )
    with c4:
        st.download_button(
            "Download Issues (CSV)",
            data=to_csv_bytes(issues_to_df(report)),
            file_name=f"issues_{slug}_{stamp}.csv",
            mime="text/csv",
            use_container_width=True,
        )

    st.divider()
    st.subheader("Todo List")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        fmt = st.radio("Format", ["markdown", "json", "csv"], horizontal=True)
    with c2:
        group_by_category = st.toggle("Group by category", value=True)
    with c3:
        include_priority = st.toggle("Include priority", value=True)
    with c4:
        include_references = st.toggle("Include references", value=True)

    todo_options = TodoExportOptions(fmt, include_priority, include_references, group_by_category)
    exported = format_todo_export(generate_todo_tasks(report), todo_options)
    extension, mime = {"markdown": ("md", "text/markdown"), "json": ("json", "application/json"),
                       "csv": ("csv", "text/csv")}[fmt]
    st.download_button(
        "Download Todo List",
        data=exported.encode("utf-8"),
        file_name=f"todos_{slug}_{stamp}.{extension}",
        mime=mime,
    )

    st.divider()
    st.subheader("All Issues Table")
    df_issues = issues_to_df(report)
    if df_issues.empty:
        st.success("No issues found!")
    else:
        st.dataframe(df_issues, use_container_width=True, height=min(600, len(df_issues) * 36 + 60))

    df_recs = recommendations_to_df(report)
    if not df_recs.empty:
        st.download_button(
            "Download Recommendations (CSV)",
            data=to_csv_bytes(df_recs),
            file_name=f"recommendations_{slug}_{stamp}.csv",
            mime="text/csv",
        )


# ── Dashboard: History ────────────────────────────────────────────────────────

def render_history() -> None:
    store = _history_store()
    stats = store.stats()

    c1, c2, c3 = st.columns(3)
    _metric_card(c1, "Analyses",      stats["total_items"],   "neutral")
    _metric_card(c2, "Unique URLs",   stats["total_urls"],    "neutral")
    _metric_card(c3, "Average Score", stats["average_score"], "success")

    query = st.text_input("Search history", placeholder="Filter by URL…")
    entries = store.search(query) if query else store.list()

    if entries:
        st.plotly_chart(history_scores_line(entries), use_container_width=True)
        df = pd.DataFrame([{
            "When":     e.timestamp.strftime("%Y-%m-%d %H:%M"),
            "URL":      e.url,
            "Score":    e.overall_score,
            "High":     e.summary_counts.get("high", 0),
            "Medium":   e.summary_counts.get("medium", 0),
            "Low":      e.summary_counts.get("low", 0),
            "Provider": e.settings_snapshot.get("ai_provider", ""),
            "Depth":    e.settings_snapshot.get("analysis_depth", ""),
        } for e in entries])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.caption("No matching analyses.")

    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "Export History (JSON)",
            data=store.export_json().encode("utf-8"),
            file_name=f"usability_history_{datetime.now().strftime('%Y%m%d_%H%M')}.json",
            mime="application/json",
            use_container_width=True,
        )
    with c2:
        uploaded = st.file_uploader("Import history", type=["json"])
        if uploaded is not None and st.button("Import", use_container_width=True):
            if store.import_json(uploaded.getvalue().decode("utf-8", errors="replace")):
                st.success("History imported")
                st.rerun()
            else:
                st.error("Could not import history file")


# ── Helpers ────────────────────────────────────────────────────────────────────

def _metric_card(col, label: str, value, card_class: str = "neutral") -> None:
    with col:
        st.markdown(
            f'<div class="metric-card {card_class}">'
            f'<div class="metric-lbl">{label}</div>'
            f'<div class="metric-val">{value}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


# ── Landing / empty state ──────────────────────────────────────────────────────

def render_landing() -> None:
    st.markdown("""
    <div style="text-align:center; padding: 3rem 2rem 1rem;">
        <div style="font-size:4rem">🧭</div>
        <h1 style="font-size:2.5rem; font-weight:800; color:#6C63FF; margin:0.5rem 0">Usability Audit Tool</h1>
        <p style="font-size:1.1rem; color:#888; max-width:640px; margin:0 auto 2rem">
            Scrape a page, have an AI review it against Steve Krug's "Don't Make Me Think"
            principles, and get a weighted usability score with a concrete todo list.
        </p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    _feature_card(col1, "🧭", "Navigation", "Persistent nav, breadcrumbs and page names")
    _feature_card(col2, "📰", "Hierarchy", "Billboard design and scannable content")
    _feature_card(col3, "📝", "Forms", "Labels, required fields and error recovery")
    _feature_card(col4, "♿", "Accessibility", "Semantics, alt text and keyboard access")


def _feature_card(col, icon: str, title: str, desc: str) -> None:
    with col:
        st.markdown(
            f'<div class="metric-card neutral" style="text-align:center">'
            f'<div style="font-size:2rem">{icon}</div>'
            f'<div style="font-weight:700;margin:0.5rem 0">{title}</div>'
            f'<div style="font-size:0.85rem;color:#888">{desc}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


# ── Main ───────────────────────────────────────────────────────────────────────

def main():
    settings = render_sidebar()

    with st.form("analyze"):
        col_url, col_btn = st.columns([5, 1])
        with col_url:
            url = st.text_input("Website URL", placeholder="https://example.com", label_visibility="collapsed")
        with col_btn:
            start = st.form_submit_button("Analyze", type="primary", use_container_width=True)

    if start:
        _clear_results()
        run_analysis(url, settings)
        return

    if not _has_result():
        render_landing()
        st.divider()
        render_history()
        return

    report: AnalysisReport = st.session_state.report

    st.title(f"Usability: {report.url}")
    st.caption(
        f"Analyzed {report.timestamp.strftime('%Y-%m-%d %H:%M UTC')} · "
        f"{AIProvider.LABELS.get(report.settings.ai_provider, report.settings.ai_provider)} · "
        f"{report.settings.analysis_depth} depth · "
        f"Score: **{report.overall_score}/100** · "
        f"{report.summary.high_count} high-priority issue(s)"
    )

    tab_names = ["Overview", "Categories", "Recommendations", "Export", "History"]
    tabs = st.tabs(tab_names)

    with tabs[0]:
        render_overview(report)

    with tabs[1]:
        render_categories(report)

    with tabs[2]:
        render_recommendations(report)

    with tabs[3]:
        render_export(report)

    with tabs[4]:
        render_history()


if __name__ == "__main__":
    main()
