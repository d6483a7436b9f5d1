"""
Keyword → implementation-task tables used to derive tasks from issue text.

Within a category the first keyword found in an issue description wins, so
dictionary order matters.
"""
from __future__ import annotations

from models import CategoryId

ISSUE_TASK_KEYWORDS: dict[CategoryId, dict[str, str]] = {
    CategoryId.NAVIGATION: {
        "indicators":     "Implement current page indicators in navigation menu",
        "location":       'Add "you are here" indicators to show current location',
        "breadcrumb":     "Add breadcrumb navigation showing path from home",
        "persistent":     "Ensure navigation appears consistently on all pages",
        "primary":        "Clearly identify primary navigation sections",
        "identification": "Add prominent site logo/ID linking to homepage",
        "sections":       "Organize navigation into clear primary sections",
    },
    CategoryId.CONTENT_HIERARCHY: {
        "scanning":  "Format content with headings and bullet points for scanning",
        "hierarchy": "Make important elements larger and more prominent",
        "visual":    "Strengthen visual hierarchy with better contrast and spacing",
        "noise":     "Reduce visual clutter and unnecessary elements",
    },
    CategoryId.PAGE_NAMES: {
        "match":      "Ensure page titles match navigation link text exactly",
        "prominent":  "Make page names more prominent and visible",
        "breadcrumb": "Implement breadcrumb trail for page location",
    },
    CategoryId.SEARCH: {
        "location":    "Move search box to expected location (top right)",
        "prominent":   "Make search box more visible and obviously searchable",
        "conventions": "Follow standard web search conventions",
    },
    CategoryId.FORMS: {
        "thinking": "Simplify form choices to require less user thinking",
        "required": "Reduce number of required form fields",
        "labels":   "Improve form label clarity and association",
        "help":     "Add contextual help for complex form fields",
    },
    CategoryId.MOBILE_USABILITY: {
        "touch":      "Increase touch target sizes to 44px minimum",
        "thumb":      "Optimize interface for thumb-friendly navigation",
        "responsive": "Improve responsive design for mobile devices",
        "content":    "Prioritize most important content for mobile",
    },
    CategoryId.PAGE_LOADING: {
        "speed":       "Optimize images and minimize HTTP requests",
        "performance": "Implement performance optimizations",
        "loading":     "Add progressive loading for better perceived speed",
    },
    CategoryId.ACCESSIBILITY: {
        "alt":      "Add alt text to all images",
        "headings": "Use proper heading structure (H1, H2, H3)",
        "labels":   "Associate form labels with input fields",
        "keyboard": "Ensure full keyboard accessibility",
        "skip":     "Add skip navigation links",
    },
    CategoryId.ERROR_HANDLING: {
        "messages": "Write clearer, more helpful error messages",
        "recovery": "Provide specific recovery steps for errors",
        "graceful": "Implement graceful error handling",
    },
}

# Added when nothing matched and the category scored poorly.
GENERIC_AUDIT_TASKS: dict[CategoryId, str] = {
    CategoryId.NAVIGATION:        "Review navigation structure for clarity and consistency",
    CategoryId.CONTENT_HIERARCHY: "Audit content for scannability and visual hierarchy",
    CategoryId.PAGE_NAMES:        "Review all page titles for consistency",
    CategoryId.SEARCH:            "Test search functionality and placement",
    CategoryId.FORMS:             "Conduct form usability review",
    CategoryId.MOBILE_USABILITY:  "Test mobile experience on actual devices",
    CategoryId.PAGE_LOADING:      "Measure and optimize page loading times",
    CategoryId.ACCESSIBILITY:     "Conduct basic accessibility audit",
    CategoryId.ERROR_HANDLING:    "Review and improve error handling workflows",
}

if set(ISSUE_TASK_KEYWORDS) != set(CategoryId):
    raise RuntimeError("keyword table must cover every CategoryId")
if set(GENERIC_AUDIT_TASKS) != set(CategoryId):
    raise RuntimeError("audit task table must cover every CategoryId")


def task_for_issue(category_id: CategoryId, description: str) -> str | None:
    text = description.lower()
    for keyword, task in ISSUE_TASK_KEYWORDS[category_id].items():
        if keyword in text:
            return task
    return None
