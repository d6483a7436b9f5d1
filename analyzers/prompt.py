"""
Builds the usability-analysis prompt sent to the LLM provider.
"""
from __future__ import annotations

from catalog.categories import list_categories
from config import DEPTH_PROFILES
from crawler.parser import count_elements
from models import AnalysisDepth, CategoryId, PageContent, Settings

OPENAI_SYSTEM_PROMPT = (
    "You are a UX expert specializing in Steve Krug's \"Don't Make Me Think\" principles "
    "with deep knowledge of HTML structure analysis and web usability patterns. Analyze "
    "both HTML structure and content thoroughly, providing specific technical "
    "recommendations based on Krug's implementation guide. Respond in JSON format only."
)

_DEPTH_INSTRUCTIONS = {
    AnalysisDepth.QUICK: (
        "ANALYSIS DEPTH: QUICK\n"
        "- Focus on the 1-2 most important issues per category.\n"
        "- Keep details to one or two sentences.\n"
        "- Prefer obvious, high-impact problems over edge cases."
    ),
    AnalysisDepth.STANDARD: (
        "ANALYSIS DEPTH: STANDARD\n"
        "- Report 2-3 issues per category where they exist.\n"
        "- Give a short paragraph of details per category.\n"
        "- Balance strengths and areas for improvement."
    ),
    AnalysisDepth.DEEP: (
        "ANALYSIS DEPTH: DEEP\n"
        "- Report every meaningful issue you can find (3-5 per category).\n"
        "- Reference specific elements and selectors from the HTML.\n"
        "- Give thorough details tying each finding to a Krug chapter.\n"
        "- Include lower-priority polish items as low severity."
    ),
}

# Per-category HTML checks, keyed by id so every category has one.
_CATEGORY_CHECKS: dict[CategoryId, str] = {
    CategoryId.NAVIGATION: (
        "Chapter 6. Look for <nav>, <header>, menu lists and breadcrumbs. Is navigation "
        "persistent? Does the site ID link home? Are there \"you are here\" indicators?"
    ),
    CategoryId.CONTENT_HIERARCHY: (
        "Chapter 3, Billboard Design. Check the h1 > h2 > h3 structure, grouping of related "
        "items and scannable formatting (lists, short paragraphs)."
    ),
    CategoryId.PAGE_NAMES: (
        "Chapter 6. Does every page have a prominent name that matches what the user "
        "clicked? Is there a breadcrumb trail from home?"
    ),
    CategoryId.SEARCH: (
        "Chapter 6. Is there a search form in the expected place (top right), obviously "
        "searchable and available on every page?"
    ),
    CategoryId.FORMS: (
        "Chapter 11, Courtesy. Are labels associated with inputs, required fields marked, "
        "input types appropriate and only necessary information requested?"
    ),
    CategoryId.MOBILE_USABILITY: (
        "Chapter 10. Is there a viewport meta tag, touch-friendly (44px+) targets, "
        "responsive patterns and mobile content prioritization?"
    ),
    CategoryId.PAGE_LOADING: (
        "Chapter 10. Is the HTML lean, are images sized and is loading performance-oriented?"
    ),
    CategoryId.ACCESSIBILITY: (
        "Chapter 12. Semantic elements, alt text, correct headings, labelled forms, skip "
        "links, colour not the only carrier of meaning."
    ),
    CategoryId.ERROR_HANDLING: (
        "Chapter 11. Are error messages clear and helpful with recovery paths and feedback?"
    ),
}

if set(_CATEGORY_CHECKS) != set(CategoryId):
    raise RuntimeError("every category needs prompt guidance")

_RESPONSE_SHAPE = """{
  "overallAssessment": {
    "level": "good",
    "message": "The website shows good usability foundations with some areas for improvement",
    "strengths": ["Clear navigation structure", "Good HTML semantics"]
  },
  "categories": [
    {
      "id": "navigation",
      "score": 85,
      "assessment": "good",
      "strengths": ["Navigation elements properly structured with semantic HTML"],
      "issues": [
        {
          "type": "medium",
          "description": "Navigation lacks 'you are here' indicators",
          "element": "nav ul.main-menu",
          "principleNote": "Chapter 6: Users need to know where they are"
        }
      ],
      "recommendations": [
        {
          "action": "Add current page highlighting to navigation menu",
          "userTask": "Implement active state styling for current page in navigation",
          "principleReference": "Chapter 6: Persistent navigation with location awareness"
        }
      ],
      "details": "Navigation analysis based on detected nav elements and HTML structure..."
    }
  ]
}"""


def build_analysis_prompt(url: str, pages: list[PageContent], settings: Settings) -> str:
    """
    Compose the full prompt. `pages` must be non-empty; only the first few
    (per depth profile) are embedded.
    """
    profile = DEPTH_PROFILES.get(settings.analysis_depth, DEPTH_PROFILES[AnalysisDepth.STANDARD])
    selected = pages[: profile["max_pages"]]

    page_blocks = "\n".join(
        _page_block(page, profile["html_chars"], profile["content_chars"]) for page in selected
    )

    return f"""
COMPREHENSIVE USABILITY ANALYSIS based on Steve Krug's "Don't Make Me Think"

You are analyzing website usability using Steve Krug's framework. Analyze BOTH the HTML
structure AND the markdown content of each page.

Website: {url}
Analysis Depth: {settings.analysis_depth}
Include Mobile: {settings.include_mobile}

PAGES TO ANALYZE:
{page_blocks}

{_DEPTH_INSTRUCTIONS.get(settings.analysis_depth, _DEPTH_INSTRUCTIONS[AnalysisDepth.STANDARD])}

ANALYSIS FRAMEWORK - score each category 0-100:
{_category_block(settings.include_mobile)}

STEVE KRUG'S CORE PRINCIPLES TO EVALUATE:
- Chapter 1: Self-evident design - is everything obvious at a glance?
- Chapter 2: Scanning behavior - is content optimized for scanning?
- Chapter 3: Visual hierarchy - are importance levels clear?
- Chapter 4: Mindless choices - are options clear and unambiguous?
- Chapter 5: Conciseness - are needless words and elements gone?
- Chapter 7: Homepage clarity - is the purpose immediately clear?

For each category provide BALANCED feedback:
- score (0-100)
- strengths: what is working well
- issues: what needs improvement, each with type high/medium/low
- assessment: one of excellent/good/moderate/poor
- recommendations tied to Krug's principles
- details explaining the score

DO NOT claim elements are missing if they are listed in DETECTED HTML ELEMENTS above.
If forms are detected (Forms: 1 found), do not say "no forms present".
Base your analysis on the ACTUAL HTML elements detected, not assumptions.

RESPOND ONLY WITH VALID JSON in this structure:
{_RESPONSE_SHAPE}
"""


def _page_block(page: PageContent, html_chars: int, content_chars: int) -> str:
    counts = count_elements(page.html)
    if counts:
        detected = "\n".join(f"- {label}: {n} found" for label, n in counts.items())
    else:
        detected = "- No HTML available for this page"

    return f"""
=== PAGE: {page.url} ===
TITLE: {page.title}

DETECTED HTML ELEMENTS:
{detected}

HTML STRUCTURE (first {html_chars} chars):
{page.html[:html_chars]}...

MARKDOWN CONTENT (first {content_chars} chars):
{page.content[:content_chars]}...

METADATA:
- Description: {page.description or 'None'}
- OG Title: {page.og_title or 'None'}
- Status Code: {page.status_code or 'Unknown'}
"""


def _category_block(include_mobile: bool) -> str:
    lines = []
    for idx, cat in enumerate(list_categories(include_mobile), start=1):
        lines.append(f"{idx}. {cat.name.upper()} (id: {cat.id.value}, {cat.weight}% weight)")
        lines.append(f"   {_CATEGORY_CHECKS[cat.id]}")
    return "\n".join(lines)
