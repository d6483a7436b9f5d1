"""
The nine usability categories from Steve Krug's "Don't Make Me Think".
Order is significant: it drives report ordering and default task ordering.
"""
from __future__ import annotations

from models import Category, CategoryId

CATEGORIES: tuple[Category, ...] = (
    Category(CategoryId.NAVIGATION, "Navigation Clarity",
             "How easy it is to find and use navigation elements", 20),
    Category(CategoryId.CONTENT_HIERARCHY, "Content Hierarchy",
             "Clear visual hierarchy and content organization", 18),
    Category(CategoryId.PAGE_NAMES, "Page Names & Breadcrumbs",
             "Clear page identification and location awareness", 15),
    Category(CategoryId.SEARCH, "Search Functionality",
             "Effective search features and results", 12),
    Category(CategoryId.FORMS, "Forms & User Input",
             "User-friendly forms and input validation", 10),
    Category(CategoryId.MOBILE_USABILITY, "Mobile Usability",
             "Mobile responsiveness and touch interactions", 10),
    Category(CategoryId.PAGE_LOADING, "Page Loading & Performance",
             "Fast loading times and performance optimization", 8),
    Category(CategoryId.ACCESSIBILITY, "Accessibility",
             "Accessible design for all users", 5),
    Category(CategoryId.ERROR_HANDLING, "Error Handling",
             "Clear error messages and recovery paths", 2),
)

_BY_ID = {cat.id: cat for cat in CATEGORIES}

if set(_BY_ID) != set(CategoryId):
    raise RuntimeError("catalog must cover every CategoryId")
if sum(cat.weight for cat in CATEGORIES) != 100:
    raise RuntimeError("category weights must sum to 100")


def list_categories(include_mobile: bool = True) -> list[Category]:
    if include_mobile:
        return list(CATEGORIES)
    return [cat for cat in CATEGORIES if cat.id != CategoryId.MOBILE_USABILITY]


def get_category(category_id: CategoryId | str) -> Category:
    return _BY_ID[CategoryId(category_id)]
