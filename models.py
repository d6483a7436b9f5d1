"""
Core data models for the Usability Audit Tool.
All modules import from here; nothing else is cross-imported at this level.

NOTE: `from __future__ import annotations` is intentionally omitted here.
Python 3.13.0 has a regression (bpo-121814) where that import causes a crash
in the dataclasses decorator when the module is not yet fully registered in
sys.modules. Python 3.9+ supports generic aliases (list[str], dict[str, Any])
natively, so the future import is unnecessary.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union


# ── Enumerations ──────────────────────────────────────────────────────────────
class Severity:
    HIGH   = "high"
    MEDIUM = "medium"
    LOW    = "low"

    ALL = [HIGH, MEDIUM, LOW]

    COLORS = {
        HIGH:   "#FF4B4B",
        MEDIUM: "#FFA500",
        LOW:    "#4B9EFF",
    }

    ICONS = {
        HIGH:   "🔴",
        MEDIUM: "🟡",
        LOW:    "🔵",
    }


class AssessmentLevel:
    EXCELLENT = "excellent"
    GOOD      = "good"
    MODERATE  = "moderate"
    POOR      = "poor"

    ALL = [EXCELLENT, GOOD, MODERATE, POOR]


class AIProvider:
    CLAUDE = "claude"
    OPENAI = "openai"

    ALL = [CLAUDE, OPENAI]

    LABELS = {
        CLAUDE: "Claude (Anthropic)",
        OPENAI: "OpenAI GPT-4",
    }


class AnalysisDepth:
    QUICK    = "quick"
    STANDARD = "standard"
    DEEP     = "deep"

    ALL = [QUICK, STANDARD, DEEP]


class StepStatus:
    PENDING   = "pending"
    ACTIVE    = "active"
    COMPLETED = "completed"
    ERROR     = "error"


class CategoryId(str, Enum):
    NAVIGATION        = "navigation"
    CONTENT_HIERARCHY = "content_hierarchy"
    PAGE_NAMES        = "page_names"
    SEARCH            = "search"
    FORMS             = "forms"
    MOBILE_USABILITY  = "mobile_usability"
    PAGE_LOADING      = "page_loading"
    ACCESSIBILITY     = "accessibility"
    ERROR_HANDLING    = "error_handling"


# ── Catalog ───────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Category:
    id: CategoryId
    name: str
    description: str
    weight: int


# ── Report building blocks ────────────────────────────────────────────────────
@dataclass
class Issue:
    severity: str          # Severity.HIGH / MEDIUM / LOW
    description: str
    element: Optional[str] = None
    page_ref: Optional[str] = None
    principle_note: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Issue":
        return cls(
            severity=data.get("severity", Severity.MEDIUM),
            description=data.get("description", ""),
            element=data.get("element"),
            page_ref=data.get("page_ref"),
            principle_note=data.get("principle_note"),
        )


@dataclass
class Recommendation:
    action: str
    user_task: str
    principle_reference: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Recommendation":
        return cls(
            action=data.get("action", ""),
            user_task=data.get("user_task", ""),
            principle_reference=data.get("principle_reference", ""),
        )


# Plain strings survive from legacy responses.
RecommendationLike = Union[Recommendation, str]


def recommendation_text(rec: RecommendationLike) -> str:
    return rec if isinstance(rec, str) else rec.action


@dataclass
class CategoryResult:
    id: CategoryId
    name: str
    description: str
    weight: int
    score: int
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[RecommendationLike] = field(default_factory=list)
    implementation_tasks: list[str] = field(default_factory=list)
    details: str = ""
    strengths: list[str] = field(default_factory=list)
    assessment_level: Optional[str] = None

    def issues_of(self, severity: str) -> list[Issue]:
        return [i for i in self.issues if i.severity == severity]

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["id"] = self.id.value
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryResult":
        return cls(
            id=CategoryId(data["id"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            weight=int(data.get("weight", 0)),
            score=int(data.get("score", 0)),
            issues=[Issue.from_dict(i) for i in data.get("issues", [])],
            recommendations=[
                r if isinstance(r, str) else Recommendation.from_dict(r)
                for r in data.get("recommendations", [])
            ],
            implementation_tasks=list(data.get("implementation_tasks", [])),
            details=data.get("details", ""),
            strengths=list(data.get("strengths", [])),
            assessment_level=data.get("assessment_level"),
        )


@dataclass
class OverallAssessment:
    level: str
    message: str
    strengths: list[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0
    top_recommendations: list[str] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return self.high_count + self.medium_count + self.low_count


# ── Scraped content ───────────────────────────────────────────────────────────
@dataclass
class PageContent:
    url: str
    title: str = "Untitled"
    content: str = ""              # markdown rendering of the page
    html: str = ""
    description: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    keywords: Optional[str] = None
    status_code: Optional[int] = None


@dataclass
class CrawlMetadata:
    total_pages: int
    crawl_depth: str               # "single-page" or "fallback"
    crawl_time: str
    base_url: str
    fallback: bool = False


@dataclass
class CrawlResult:
    pages: list[PageContent]
    metadata: CrawlMetadata

    @classmethod
    def from_dict(cls, data: dict) -> "CrawlResult":
        return cls(
            pages=[PageContent(**p) for p in data.get("pages", [])],
            metadata=CrawlMetadata(**data["metadata"]),
        )


# ── Settings ──────────────────────────────────────────────────────────────────
@dataclass
class Settings:
    ai_provider: str = AIProvider.CLAUDE
    analysis_depth: str = AnalysisDepth.STANDARD
    include_mobile: bool = False
    stealth_mode: bool = True
    scrape_api_key: str = ""
    ai_api_key: str = ""

    @property
    def has_keys(self) -> bool:
        return bool(self.scrape_api_key.strip()) and bool(self.ai_api_key.strip())

    def redacted(self) -> "Settings":
        """Copy safe to persist alongside a report or write to a log."""
        return Settings(
            ai_provider=self.ai_provider,
            analysis_depth=self.analysis_depth,
            include_mobile=self.include_mobile,
            stealth_mode=self.stealth_mode,
            scrape_api_key="[REDACTED]" if self.scrape_api_key else "",
            ai_api_key="[REDACTED]" if self.ai_api_key else "",
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Lenient load: unknown values fall back to the defaults."""
        defaults = cls()
        provider = data.get("ai_provider")
        depth = data.get("analysis_depth")
        return cls(
            ai_provider=provider if provider in AIProvider.ALL else defaults.ai_provider,
            analysis_depth=depth if depth in AnalysisDepth.ALL else defaults.analysis_depth,
            include_mobile=bool(data.get("include_mobile", defaults.include_mobile)),
            stealth_mode=bool(data.get("stealth_mode", defaults.stealth_mode)),
            scrape_api_key=str(data.get("scrape_api_key") or ""),
            ai_api_key=str(data.get("ai_api_key") or ""),
        )


# ── Top-level report ──────────────────────────────────────────────────────────
@dataclass
class AnalysisReport:
    url: str
    timestamp: datetime
    settings: Settings
    overall_score: int
    categories: list[CategoryResult]
    crawl_data: CrawlResult
    summary: ReportSummary
    overall_assessment: Optional[OverallAssessment] = None
    fallback_reason: Optional[str] = None

    @property
    def issue_count(self) -> int:
        return self.summary.total_issues

    def category(self, category_id: CategoryId) -> Optional[CategoryResult]:
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "timestamp": self.timestamp.isoformat(),
            "settings": self.settings.to_dict(),
            "overall_score": self.overall_score,
            "overall_assessment": asdict(self.overall_assessment) if self.overall_assessment else None,
            "categories": [c.to_dict() for c in self.categories],
            "crawl_data": asdict(self.crawl_data),
            "summary": asdict(self.summary),
            "fallback_reason": self.fallback_reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisReport":
        assessment = data.get("overall_assessment")
        return cls(
            url=data["url"],
            timestamp=parse_timestamp(data["timestamp"]),
            settings=Settings.from_dict(data.get("settings", {})),
            overall_score=int(data.get("overall_score", 0)),
            categories=[CategoryResult.from_dict(c) for c in data.get("categories", [])],
            crawl_data=CrawlResult.from_dict(data["crawl_data"]),
            summary=ReportSummary(**data.get("summary", {})),
            overall_assessment=OverallAssessment(**assessment) if assessment else None,
            fallback_reason=data.get("fallback_reason"),
        )


# ── History ───────────────────────────────────────────────────────────────────
@dataclass
class HistoryEntry:
    id: str
    url: str
    timestamp: datetime
    overall_score: int
    summary_counts: dict[str, int]          # {high, medium, low}
    settings_snapshot: dict[str, str]       # {ai_provider, analysis_depth}
    full_report: AnalysisReport

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "timestamp": self.timestamp.isoformat(),
            "overall_score": self.overall_score,
            "summary_counts": dict(self.summary_counts),
            "settings_snapshot": dict(self.settings_snapshot),
            "full_report": self.full_report.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        return cls(
            id=str(data["id"]),
            url=data["url"],
            timestamp=parse_timestamp(data["timestamp"]),
            overall_score=int(data.get("overall_score", 0)),
            summary_counts=dict(data.get("summary_counts", {})),
            settings_snapshot=dict(data.get("settings_snapshot", {})),
            full_report=AnalysisReport.from_dict(data["full_report"]),
        )


# ── Exports ───────────────────────────────────────────────────────────────────
@dataclass
class TodoTask:
    id: str
    title: str
    description: str
    category: str
    priority: str                 # Severity-style: high / medium / low
    principle_reference: Optional[str] = None
    user_action: Optional[str] = None
    estimated_time: Optional[str] = None
    completed: bool = False


@dataclass
class TodoExportOptions:
    format: str = "markdown"      # markdown / json / csv
    include_priority: bool = True
    include_references: bool = True
    group_by_category: bool = True


@dataclass
class ReportExportOptions:
    include_recommendations: bool = True
    include_details: bool = True
    include_tasks: bool = True


# ── Progress ──────────────────────────────────────────────────────────────────
@dataclass
class ProgressStep:
    id: str
    name: str
    description: str
    status: str = StepStatus.PENDING


# ── Helpers ───────────────────────────────────────────────────────────────────
def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        ts = value
    else:
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
