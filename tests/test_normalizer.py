import json

import pytest

from analyzers.normalizer import (
    derive_implementation_tasks,
    normalize_analysis,
    normalize_category,
    normalize_issue,
    normalize_overall_assessment,
    normalize_recommendations,
    normalize_score,
)
from catalog.categories import get_category, list_categories
from catalog.fallback import fallback_result
from catalog.tasks import GENERIC_AUDIT_TASKS
from models import CategoryId, Issue, Recommendation, Settings, Severity


class TestMissingCategories:
    """A category the provider omits is replaced by its fallback result."""

    def test_empty_payload_is_all_fallback(self, make_report):
        report = make_report({})

        for result in report.categories:
            assert result == fallback_result(result.id)

    def test_omitted_category_matches_fallback_exactly(self, make_report, raw_payload):
        report = make_report(raw_payload)

        forms = report.category(CategoryId.FORMS)
        expected = fallback_result(CategoryId.FORMS)
        assert forms.score == expected.score
        assert forms.issues == expected.issues
        assert forms.recommendations == expected.recommendations
        assert forms.details == expected.details
        assert forms.implementation_tasks == expected.implementation_tasks

    def test_non_dict_payload_is_treated_as_empty(self, settings, crawl_result):
        report = normalize_analysis(["not", "an", "object"], settings, "https://example.com", crawl_result)

        assert len(report.categories) == 8
        assert report.overall_assessment is None

    def test_categories_follow_catalog_order(self, make_report, raw_payload):
        raw_payload["categories"].reverse()
        report = make_report(raw_payload)

        expected = [c.id for c in list_categories(include_mobile=False)]
        assert [c.id for c in report.categories] == expected

    def test_first_entry_per_id_wins(self, make_report):
        report = make_report({"categories": [
            {"id": "navigation", "score": 91},
            {"id": "navigation", "score": 12},
        ]})

        assert report.category(CategoryId.NAVIGATION).score == 91

    def test_unknown_ids_are_ignored(self, make_report):
        report = make_report({"categories": [{"id": "colour_scheme", "score": 5}, "junk", 42]})

        assert all(c == fallback_result(c.id) for c in report.categories)


class TestScoreClamping:
    """Scores are clamped to [0, 100] and default to 50."""

    @pytest.mark.parametrize("raw, expected", [
        (-10, 0),
        (150, 100),
        (0, 0),
        (100, 100),
        (72, 72),
        (72.5, 73),
        (72.4, 72),
        ("88", 88),
        (None, 50),
        ("great", 50),
        (True, 50),
        (float("nan"), 50),
        ([80], 50),
    ])
    def test_normalize_score(self, raw, expected):
        assert normalize_score(raw) == expected

    def test_clamped_score_in_report(self, make_report):
        report = make_report({"categories": [
            {"id": "navigation", "score": -10},
            {"id": "search", "score": 150},
        ]})

        assert report.category(CategoryId.NAVIGATION).score == 0
        assert report.category(CategoryId.SEARCH).score == 100

    @pytest.mark.parametrize("digits, expected", [
        ("1" + "0" * 400, 100),
        ("-1" + "0" * 400, 0),
    ])
    def test_huge_integer_score(self, make_report, digits, expected):
        raw = json.loads('{"categories": [{"id": "navigation", "score": ' + digits + '}]}')

        report = make_report(raw)

        assert report.category(CategoryId.NAVIGATION).score == expected


class TestMobileExclusion:
    """Mobile is stripped post-hoc and leaves the weight denominator."""

    def test_mobile_removed_even_when_returned(self, make_report):
        report = make_report({"categories": [{"id": "mobile_usability", "score": 100}]})

        assert report.category(CategoryId.MOBILE_USABILITY) is None
        assert len(report.categories) == 8
        # fallback scores over the remaining weight of 90
        assert report.overall_score == 67

    def test_mobile_kept_when_enabled(self, crawl_result):
        settings = Settings(include_mobile=True)
        report = normalize_analysis(
            {"categories": [{"id": "mobile_usability", "score": 100}]},
            settings, "https://example.com", crawl_result,
        )

        assert report.category(CategoryId.MOBILE_USABILITY).score == 100
        assert len(report.categories) == 9
        assert report.overall_score == 70


class TestIssueNormalization:
    """Severity coercion and field defaults."""

    def test_invalid_severity_becomes_medium(self):
        assert normalize_issue({"type": "urgent", "description": "x"}).severity == Severity.MEDIUM

    def test_valid_severity_passes_through(self):
        assert normalize_issue({"type": "high", "description": "x"}).severity == Severity.HIGH

    def test_severity_key_is_accepted(self):
        assert normalize_issue({"severity": "low", "description": "x"}).severity == Severity.LOW

    def test_blank_description_gets_placeholder(self):
        assert normalize_issue({"type": "low", "description": "   "}).description == "No description provided"

    def test_optional_fields(self):
        issue = normalize_issue({
            "description": "Menu hidden",
            "element": "nav.main",
            "page": "/about",
            "krugPrinciple": "Chapter 6",
        })

        assert issue == Issue(
            severity=Severity.MEDIUM,
            description="Menu hidden",
            element="nav.main",
            page_ref="/about",
            principle_note="Chapter 6",
        )

    def test_blank_optional_fields_are_dropped(self):
        issue = normalize_issue({"description": "x", "element": "", "principleNote": 7})

        assert issue.element is None
        assert issue.principle_note is None

    def test_non_dict_issue(self):
        assert normalize_issue(None).description == "No description provided"
        assert normalize_issue("Plain text issue").description == "Plain text issue"


class TestRecommendations:

    def test_strings_are_kept(self):
        assert normalize_recommendations(["Add search", "  "]) == ["Add search"]

    def test_objects_need_action_and_user_task(self):
        recs = normalize_recommendations([
            {"action": "A", "userTask": "T", "principleReference": "R"},
            {"action": "A only"},
            {"action": "B", "userTask": "U", "krugReference": "Legacy"},
            {"action": "C", "userTask": "V"},
        ])

        assert recs == [
            Recommendation("A", "T", "R"),
            Recommendation("B", "U", "Legacy"),
            Recommendation("C", "V", ""),
        ]

    def test_empty_recommendations_fall_back(self):
        result = normalize_category(get_category(CategoryId.SEARCH), {"recommendations": [{"bad": 1}]})

        assert result.recommendations == fallback_result(CategoryId.SEARCH).recommendations


class TestCategoryFields:

    def test_present_category(self, make_report, raw_payload):
        nav = make_report(raw_payload).category(CategoryId.NAVIGATION)

        assert nav.score == 82
        assert nav.assessment_level == "good"
        assert nav.strengths == ["Persistent header"]
        assert nav.details == "Navigation is mostly clear."
        assert [i.severity for i in nav.issues] == [Severity.HIGH, Severity.LOW]
        assert nav.implementation_tasks == ["Add breadcrumb navigation showing path from home"]

    def test_missing_fields_use_fallback_values(self):
        fallback = fallback_result(CategoryId.FORMS)
        result = normalize_category(get_category(CategoryId.FORMS), {"score": 90, "assessment": "stellar"})

        assert result.strengths == fallback.strengths
        assert result.details == fallback.details
        assert result.assessment_level == fallback.assessment_level

    def test_provider_tasks_are_ignored(self):
        result = normalize_category(get_category(CategoryId.NAVIGATION), {
            "score": 90,
            "issues": [],
            "implementationTasks": ["Rewrite everything"],
        })

        assert result.implementation_tasks == []


class TestImplementationTasks:
    """Derived tasks are deterministic, unique and capped at three."""

    def _issues(self, *descriptions):
        return [Issue(severity=Severity.MEDIUM, description=d) for d in descriptions]

    def test_deterministic_and_capped(self):
        issues = self._issues(
            "No breadcrumb trail",
            "Missing breadcrumb on blog",
            "Nav is not persistent",
            "Primary sections unclear",
            "No site identification",
        )

        first = derive_implementation_tasks(CategoryId.NAVIGATION, issues, 40)
        second = derive_implementation_tasks(CategoryId.NAVIGATION, issues, 40)

        assert first == second
        assert len(first) == 3
        assert len(set(first)) == 3
        assert first[0] == "Add breadcrumb navigation showing path from home"

    def test_generic_task_when_nothing_matches_and_score_is_low(self):
        tasks = derive_implementation_tasks(CategoryId.SEARCH, self._issues("Odd colours"), 59)

        assert tasks == [GENERIC_AUDIT_TASKS[CategoryId.SEARCH]]

    def test_no_generic_task_at_threshold(self):
        assert derive_implementation_tasks(CategoryId.SEARCH, self._issues("Odd colours"), 60) == []


class TestSummary:

    def test_counts_and_top_recommendations(self, make_report, raw_payload):
        report = make_report(raw_payload)

        high = sum(len(c.issues_of(Severity.HIGH)) for c in report.categories)
        assert report.summary.high_count == high
        assert report.summary.top_recommendations[0] == "Add breadcrumbs"
        assert len(report.summary.top_recommendations) == 5

    def test_settings_are_redacted(self, make_report):
        report = make_report({})

        assert report.settings.ai_api_key == "[REDACTED]"
        assert report.settings.scrape_api_key == "[REDACTED]"


class TestOverallAssessment:

    def test_absent(self):
        assert normalize_overall_assessment(None) is None

    def test_defaults(self):
        assessment = normalize_overall_assessment({"level": "superb", "strengths": ["ok", "", 3]})

        assert assessment.level == "moderate"
        assert assessment.message == "Website analysis completed"
        assert assessment.strengths == ["ok"]
