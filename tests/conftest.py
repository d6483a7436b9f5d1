"""
Shared fixtures for the Usability Audit Tool tests.

The data directory is pointed at a temporary location before any project
module is imported so log files never land in the real home directory.
"""

import os
import tempfile

os.environ.setdefault("USABILITY_AUDIT_DATA_DIR", tempfile.mkdtemp(prefix="usability_audit_test_"))

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from analyzers.normalizer import normalize_analysis
from models import CrawlMetadata, CrawlResult, PageContent, Settings


@pytest.fixture
def settings():
    return Settings(
        ai_provider="claude",
        analysis_depth="standard",
        include_mobile=False,
        stealth_mode=True,
        scrape_api_key="fc-test-key",
        ai_api_key="sk-test-key",
    )


@pytest.fixture
def crawl_result():
    page = PageContent(
        url="https://example.com",
        title="Example Domain",
        content="# Example Domain\n\nThis domain is for use in examples.",
        html="<html><head><title>Example Domain</title></head><body><nav></nav><h1>Example</h1></body></html>",
        description="Example description",
        status_code=200,
    )
    metadata = CrawlMetadata(
        total_pages=1,
        crawl_depth="single-page",
        crawl_time="2024-01-01T00:00:00+00:00",
        base_url="https://example.com",
    )
    return CrawlResult(pages=[page], metadata=metadata)


@pytest.fixture
def raw_payload():
    """A well-formed provider reply covering two categories."""
    return {
        "overallAssessment": {
            "level": "good",
            "message": "Solid foundations",
            "strengths": ["Clear logo", "Readable type", "Fast pages", "Consistent layout"],
        },
        "categories": [
            {
                "id": "navigation",
                "score": 82,
                "assessment": "good",
                "strengths": ["Persistent header"],
                "issues": [
                    {"type": "high", "description": "Breadcrumb trail is missing", "element": "nav"},
                    {"type": "low", "description": "Footer links are cramped"},
                ],
                "recommendations": [
                    {
                        "action": "Add breadcrumbs",
                        "userTask": "Show the path from home on inner pages",
                        "principleReference": "Chapter 6",
                    },
                ],
                "details": "Navigation is mostly clear.",
            },
            {
                "id": "search",
                "score": 40,
                "issues": [],
                "recommendations": ["Add a search box"],
            },
        ],
    }


@pytest.fixture
def make_report(settings, crawl_result):
    """Build a normalized report from any raw payload."""
    def _make(raw=None, **overrides):
        report = normalize_analysis(raw if raw is not None else {}, settings, "https://example.com", crawl_result)
        for key, value in overrides.items():
            setattr(report, key, value)
        return report
    return _make


@pytest.fixture
def fake_response():
    """Factory for requests.Response stand-ins."""
    def _make(status=200, payload=None, text=""):
        resp = MagicMock()
        resp.status_code = status
        resp.ok = 200 <= status < 300
        resp.text = text
        if payload is None:
            resp.json.side_effect = ValueError("no json")
        else:
            resp.json.return_value = payload
        return resp
    return _make


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
