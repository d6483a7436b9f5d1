import importlib
from enum import Enum

import pytest

import catalog.tasks
import models
from catalog.categories import CATEGORIES, get_category, list_categories
from catalog.fallback import fallback_result
from catalog.tasks import GENERIC_AUDIT_TASKS, ISSUE_TASK_KEYWORDS, task_for_issue
from models import CategoryId


class TestCategoryCatalog:
    """Static catalog of the nine usability categories."""

    def test_weights_sum_to_100(self):
        assert sum(c.weight for c in list_categories()) == 100

    def test_order_is_stable(self):
        ids = [c.id.value for c in list_categories()]
        assert ids == [
            "navigation", "content_hierarchy", "page_names", "search", "forms",
            "mobile_usability", "page_loading", "accessibility", "error_handling",
        ]

    def test_excluding_mobile(self):
        cats = list_categories(include_mobile=False)
        assert CategoryId.MOBILE_USABILITY not in [c.id for c in cats]
        assert len(cats) == 8

    def test_get_category_accepts_string(self):
        assert get_category("search").weight == 12
        assert get_category(CategoryId.NAVIGATION).weight == 20

    def test_unknown_id_raises(self):
        with pytest.raises(ValueError):
            get_category("colour_scheme")

    def test_categories_are_immutable(self):
        with pytest.raises(Exception):
            CATEGORIES[0].weight = 50


class TestMappingTables:
    """Every table is keyed by every category id."""

    @pytest.mark.parametrize("table", [ISSUE_TASK_KEYWORDS, GENERIC_AUDIT_TASKS])
    def test_tables_are_exhaustive(self, table):
        assert set(table) == set(CategoryId)

    def test_fallback_exists_for_every_category(self):
        for category_id in CategoryId:
            result = fallback_result(category_id)
            assert 0 <= result.score <= 100
            assert result.issues
            assert result.recommendations
            assert result.strengths

    def test_fallback_returns_fresh_copies(self):
        first = fallback_result(CategoryId.NAVIGATION)
        first.issues.clear()
        assert fallback_result(CategoryId.NAVIGATION).issues

    def test_fallback_tasks_have_no_checkbox_prefix(self):
        for category_id in CategoryId:
            for task in fallback_result(category_id).implementation_tasks:
                assert not task.startswith("[")

    def test_incomplete_table_fails_at_import(self, monkeypatch):
        members = [(m.name, m.value) for m in CategoryId] + [("CHECKOUT", "checkout")]
        extended = Enum("CategoryId", members, type=str)

        with monkeypatch.context() as patched:
            patched.setattr(models, "CategoryId", extended)
            with pytest.raises(RuntimeError, match="keyword table"):
                importlib.reload(catalog.tasks)
        importlib.reload(catalog.tasks)


class TestTaskForIssue:

    def test_keyword_match_is_case_insensitive(self):
        assert task_for_issue(CategoryId.ACCESSIBILITY, "Images lack ALT text") == "Add alt text to all images"

    def test_no_match(self):
        assert task_for_issue(CategoryId.ERROR_HANDLING, "Colours clash") is None
