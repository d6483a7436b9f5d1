"""
Global configuration constants for the Usability Audit Tool.
All tunable thresholds live here.
"""
import os
from pathlib import Path

# ── Storage ───────────────────────────────────────────────────────────────────
DATA_DIR = Path(os.environ.get("USABILITY_AUDIT_DATA_DIR", Path.home() / ".usability_audit"))
HISTORY_FILENAME = "analysis_history.json"
SETTINGS_FILENAME = "analysis_settings.json"
LOG_DIRNAME = "logs"
LOG_FILENAME = "usability_audit.log"
LOG_MAX_BYTES = 10_000_000
LOG_BACKUP_COUNT = 5

# ── History ───────────────────────────────────────────────────────────────────
MAX_HISTORY_ITEMS = 50
HISTORY_DEDUP_WINDOW_SECONDS = 60          # same URL within this window → replace
FRESH_REPORT_WINDOW_SECONDS = 5 * 60       # only reports this young are recorded

# ── Scraping provider (Firecrawl) ─────────────────────────────────────────────
FIRECRAWL_SCRAPE_URL = "https://api.firecrawl.dev/v1/scrape"
FIRECRAWL_MAX_AGE_MS = 14_400_000          # 4 hours provider-side cache
FIRECRAWL_TEST_URL = "https://example.com"

# ── LLM providers ─────────────────────────────────────────────────────────────
CLAUDE_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
CLAUDE_API_VERSION = "2023-06-01"
# Tried in order; a 404 moves on to the next identifier.
CLAUDE_MODELS = [
    "claude-3-5-sonnet-20241022",
    "claude-3-5-sonnet-20240620",
    "claude-3-sonnet-20240229",
    "claude-3-haiku-20240307",
]

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL = "gpt-4"
OPENAI_TEMPERATURE = 0.2

LLM_MAX_TOKENS = 4000
DEFAULT_REQUEST_TIMEOUT = 120              # seconds

# ── Prompt depth profiles ─────────────────────────────────────────────────────
DEPTH_PROFILES: dict[str, dict[str, int]] = {
    "quick":    {"content_chars": 1500, "html_chars": 3000, "max_pages": 1},
    "standard": {"content_chars": 2500, "html_chars": 6000, "max_pages": 3},
    "deep":     {"content_chars": 4000, "html_chars": 8000, "max_pages": 5},
}

# ── Normalization ─────────────────────────────────────────────────────────────
DEFAULT_CATEGORY_SCORE = 50
LOW_SCORE_THRESHOLD = 60                   # below this a generic audit task is added
MAX_IMPLEMENTATION_TASKS = 3
TOP_RECOMMENDATION_COUNT = 5
MISSING_ISSUE_DESCRIPTION = "No description provided"
DEFAULT_ASSESSMENT_MESSAGE = "Website analysis completed"

# ── Todo priority heuristics ──────────────────────────────────────────────────
CORE_PRINCIPLE_KEYWORDS = ["navigation", "hierarchy", "obvious", "self-evident", "mindless"]
