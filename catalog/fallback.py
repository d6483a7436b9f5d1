"""
Hand-authored default results, one per category.

Used verbatim when the model omits a category (or the whole call fails), and
field-by-field when a returned category has a missing or invalid value.
"""
from __future__ import annotations

from catalog.categories import get_category
from models import (
    AssessmentLevel,
    Category,
    CategoryId,
    CategoryResult,
    Issue,
    Recommendation,
    Severity,
)

_FALLBACK_DATA: dict[CategoryId, dict] = {
    CategoryId.NAVIGATION: {
        "score": 70,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Basic navigation structure appears to be present",
            "Navigation elements seem to be positioned conventionally",
        ],
        "issues": [
            (Severity.MEDIUM,
             'Navigation may lack "you are here" indicators for location awareness',
             "site navigation",
             "Users must always know where they are (Chapter 6)"),
            (Severity.MEDIUM,
             "Breadcrumb navigation may be missing",
             "navigation breadcrumbs",
             "Show path from home to current location (Chapter 6)"),
        ],
        "recommendations": [
            ("Implement persistent navigation on every page",
             "Ensure site ID/logo, primary sections, and utilities appear consistently",
             "Chapter 6: Street Signs and Breadcrumbs"),
            ('Add "you are here" indicators',
             "Highlight current page/section in navigation menu",
             "Chapter 6: Persistent Navigation"),
        ],
        "implementation_tasks": [
            "Design persistent navigation with site ID/logo linking to home",
            "Add primary sections and utilities (search, login, help)",
            "Implement current page indicators with visual styling",
            "Create breadcrumb trail showing path from home",
            'Test with "trunk test" - can users identify current location?',
        ],
        "details": (
            "Navigation should follow Krug's principles of persistent, clear wayfinding "
            "that tells users where they are and where they can go."
        ),
    },
    CategoryId.CONTENT_HIERARCHY: {
        "score": 65,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Content appears to have basic heading structure",
            "Visual separation between different content areas seems present",
        ],
        "issues": [
            (Severity.MEDIUM,
             "Content may not be optimized for scanning behavior",
             "page content",
             "Users scan, they don't read (Chapter 2)"),
            (Severity.LOW,
             "Visual hierarchy could be strengthened for better information prioritization",
             "content layout",
             "Make important things more prominent (Chapter 3)"),
        ],
        "recommendations": [
            ("Implement clear visual hierarchy with prominent headings",
             "Make important elements larger, bolder, or more prominent",
             "Chapter 3: Billboard Design 101"),
            ("Format text for scanning with bullet points and short paragraphs",
             "Use descriptive headings and highlight key terms",
             "Chapter 3: Scannable Text"),
        ],
        "implementation_tasks": [
            "Implement visual hierarchy with important elements more prominent",
            "Use plenty of headings and subheadings for scanning",
            "Keep paragraphs short and use bulleted lists",
            "Highlight key terms and phrases",
            "Reduce visual noise and use white space effectively",
        ],
        "details": (
            "Content should be designed like a billboard - clear, scannable, "
            "and immediately understandable."
        ),
    },
    CategoryId.PAGE_NAMES: {
        "score": 70,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Pages appear to have titles or headings",
            "Basic page identification seems to be in place",
        ],
        "issues": [
            (Severity.MEDIUM,
             "Page names may not match navigation link text",
             "page titles",
             "Page name should match what user clicked (Chapter 6)"),
        ],
        "recommendations": [
            ("Ensure page names match navigation links exactly",
             "Review all page titles for consistency with navigation text",
             "Chapter 6: Page Names"),
        ],
        "implementation_tasks": [
            "Create prominent page names matching navigation links",
            "Position page names as headings for unique content",
            "Implement breadcrumb trail for location awareness",
            'Test "trunk test" - can users identify where they are?',
        ],
        "details": "Clear page identification is essential for user orientation and confidence.",
    },
    CategoryId.SEARCH: {
        "score": 60,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Site may have search functionality available",
        ],
        "issues": [
            (Severity.MEDIUM,
             "Search functionality may not follow web conventions",
             "search interface",
             "Follow established web conventions (Chapter 3)"),
            (Severity.LOW,
             "Search box may not be in expected location (top right)",
             "search placement",
             "Put things where users expect to find them (Chapter 3)"),
        ],
        "recommendations": [
            ("Position search box in conventional location (top right)",
             "Place search where users expect to find it",
             "Chapter 3: Web Conventions"),
        ],
        "implementation_tasks": [
            "Position search box in expected location (top right)",
            "Make search box prominent and obviously searchable",
            "Include search on every page for persistence",
            "Provide effective search results and suggestions",
        ],
        "details": "Search should follow web conventions and be self-evident to users.",
    },
    CategoryId.FORMS: {
        "score": 65,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Forms appear to have proper labels and structure",
            "Basic form usability seems to be considered",
        ],
        "issues": [
            (Severity.MEDIUM,
             "Forms may require too much thinking from users",
             "form interfaces",
             "Eliminate question marks and make choices mindless (Chapter 4)"),
        ],
        "recommendations": [
            ("Simplify form choices and reduce required fields",
             "Audit forms for unnecessary complexity",
             "Chapter 4: Mindless Choices"),
        ],
        "implementation_tasks": [
            "Audit forms for unnecessary fields and complexity",
            "Make form choices obvious and mindless",
            "Associate form labels clearly with fields",
            "Provide clear, immediate help when needed",
            "Accept data in multiple formats where possible",
        ],
        "details": "Forms should require minimal thinking and provide clear, obvious choices.",
    },
    CategoryId.MOBILE_USABILITY: {
        "score": 65,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Site has mobile viewport configuration",
            "Basic responsive design appears to be implemented",
        ],
        "issues": [
            (Severity.MEDIUM,
             "Touch targets may not be optimized for thumb-friendly interaction",
             "mobile interface",
             "Mobile requires different interaction patterns (Chapter 10)"),
        ],
        "recommendations": [
            ("Ensure touch targets are thumb-friendly (44px minimum)",
             "Review and resize all clickable elements for mobile",
             "Chapter 10: Mobile Design"),
        ],
        "implementation_tasks": [
            "Ensure touch targets are thumb-friendly (44px minimum)",
            "Prioritize most important content first on mobile",
            "Remove hover-dependent features for touch interfaces",
            "Test with actual devices, not just simulators",
            "Optimize images and minimize load times for mobile",
        ],
        "details": "Mobile design should accommodate touch interactions and content prioritization.",
    },
    CategoryId.PAGE_LOADING: {
        "score": 75,
        "assessment_level": AssessmentLevel.GOOD,
        "strengths": [
            "Page appears to load reasonably well",
            "Basic performance optimization seems to be in place",
        ],
        "issues": [
            (Severity.LOW,
             "Loading speed optimization could preserve more user goodwill",
             "site performance",
             "Preserve user goodwill reservoir (Chapter 11)"),
        ],
        "recommendations": [
            ("Optimize loading speed to preserve goodwill",
             "Implement performance optimizations for faster perceived loading",
             "Chapter 11: Goodwill Reservoir"),
        ],
        "implementation_tasks": [
            "Optimize images and minimize HTTP requests",
            "Implement progressive loading for better perceived performance",
            "Minimize page load times across different connection types",
            "Use compression and caching strategies",
        ],
        "details": "Fast loading preserves user goodwill and supports seamless user experience.",
    },
    CategoryId.ACCESSIBILITY: {
        "score": 60,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Basic HTML structure appears to use semantic elements",
            "Forms seem to have associated labels",
        ],
        "issues": [
            (Severity.HIGH,
             "May be missing basic accessibility features that help everyone",
             "site accessibility",
             "Accessibility improvements help everyone (Chapter 12)"),
        ],
        "recommendations": [
            ("Implement basic accessibility features first",
             "Add alt text, proper headings, and keyboard navigation",
             "Chapter 12: Accessibility and You"),
        ],
        "implementation_tasks": [
            "Add alt text to all images",
            "Use heading tags correctly (H1, H2, H3)",
            "Associate form labels with fields",
            "Ensure keyboard accessibility for all interactive elements",
            "Test with screen reader software",
        ],
        "details": "Basic accessibility improvements often improve usability for everyone.",
    },
    CategoryId.ERROR_HANDLING: {
        "score": 70,
        "assessment_level": AssessmentLevel.MODERATE,
        "strengths": [
            "Site appears to have basic error handling in place",
        ],
        "issues": [
            (Severity.MEDIUM,
             "Error messages may not provide clear recovery paths",
             "error handling",
             "Help users recover gracefully and preserve goodwill (Chapter 11)"),
        ],
        "recommendations": [
            ("Create helpful error messages with recovery steps",
             "Write clear, specific error messages with actionable solutions",
             "Chapter 11: Common Courtesy"),
        ],
        "implementation_tasks": [
            "Write clear, helpful error messages",
            "Provide specific recovery suggestions",
            "Test error scenarios for user-friendliness",
            "Ensure errors don't break user workflow",
        ],
        "details": "Error handling should be courteous and helpful, preserving user goodwill.",
    },
}

if set(_FALLBACK_DATA) != set(CategoryId):
    raise RuntimeError("fallback table must cover every CategoryId")


def fallback_result(category: Category | CategoryId | str) -> CategoryResult:
    """Build a fresh copy of the default result for `category`."""
    if not isinstance(category, Category):
        category = get_category(category)
    data = _FALLBACK_DATA[category.id]

    return CategoryResult(
        id=category.id,
        name=category.name,
        description=category.description,
        weight=category.weight,
        score=data["score"],
        issues=[
            Issue(severity=sev, description=desc, element=element, principle_note=note)
            for sev, desc, element, note in data["issues"]
        ],
        recommendations=[
            Recommendation(action=action, user_task=task, principle_reference=ref)
            for action, task, ref in data["recommendations"]
        ],
        implementation_tasks=list(data["implementation_tasks"]),
        details=data["details"],
        strengths=list(data["strengths"]),
        assessment_level=data["assessment_level"],
    )
