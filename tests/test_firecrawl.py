from unittest.mock import MagicMock

import pytest
import requests

from config import FIRECRAWL_MAX_AGE_MS, FIRECRAWL_SCRAPE_URL
from crawler.firecrawl import FirecrawlClient, guess_domain_type
from crawler.urls import normalize_target_url
from errors import InputValidationError, ScrapeError
from models import Settings


class TestNormalizeTargetUrl:

    def test_adds_scheme(self):
        assert normalize_target_url("example.com") == "https://example.com"

    def test_keeps_http(self):
        assert normalize_target_url("  http://example.com/path ") == "http://example.com/path"

    def test_localhost(self):
        assert normalize_target_url("http://localhost:8501") == "http://localhost:8501"

    @pytest.mark.parametrize("bad", ["", "   ", "not a url", "ftp://example.com", "https://", "intranet"])
    def test_rejects(self, bad):
        with pytest.raises(InputValidationError):
            normalize_target_url(bad)


class TestFirecrawlClient:

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    def test_scrape_page(self, session, fake_response):
        session.post.return_value = fake_response(200, {
            "success": True,
            "data": {
                "markdown": "# Hello",
                "html": "<html><head><title>From HTML</title></head></html>",
                "metadata": {"title": "Hello Page", "description": "Desc", "sourceURL": "https://example.com/", "statusCode": 200},
            },
        })
        client = FirecrawlClient("fc-key", session=session)

        result = client.scrape_page("example.com", Settings(stealth_mode=True))

        page = result.pages[0]
        assert page.title == "Hello Page"
        assert page.content == "# Hello"
        assert page.description == "Desc"
        assert result.metadata.fallback is False
        assert result.metadata.base_url == "https://example.com"

        args, kwargs = session.post.call_args
        assert args[0] == FIRECRAWL_SCRAPE_URL
        body = kwargs["json"]
        assert body["url"] == "https://example.com"
        assert body["formats"] == ["markdown", "html"]
        assert body["onlyMainContent"] is False
        assert body["maxAge"] == FIRECRAWL_MAX_AGE_MS
        assert body["proxy"] == "stealth"
        assert kwargs["headers"]["Authorization"] == "Bearer fc-key"

    def test_no_proxy_without_stealth(self, session, fake_response):
        session.post.return_value = fake_response(200, {"success": True, "data": {"markdown": "x"}})

        FirecrawlClient("fc-key", session=session).scrape_page("https://example.com", Settings(stealth_mode=False))

        assert "proxy" not in session.post.call_args.kwargs["json"]

    def test_title_from_html_then_untitled(self, session, fake_response):
        session.post.return_value = fake_response(200, {
            "success": True,
            "data": {"html": "<title>From HTML</title>", "metadata": {}},
        })
        client = FirecrawlClient("fc-key", session=session)
        assert client.scrape_page("https://example.com").pages[0].title == "From HTML"

        session.post.return_value = fake_response(200, {"success": True, "data": {}})
        assert client.scrape_page("https://example.com").pages[0].title == "Untitled"

    def test_malformed_document_fields(self, session, fake_response):
        session.post.return_value = fake_response(200, {
            "success": True,
            "data": {"markdown": ["x"], "html": 42, "metadata": ["bad"]},
        })

        page = FirecrawlClient("fc-key", session=session).scrape_page("https://example.com").pages[0]

        assert page.title == "Untitled"
        assert page.content == ""
        assert page.html == ""
        assert page.url == "https://example.com"
        assert page.status_code == 200

    def test_unsuccessful_response(self, session, fake_response):
        session.post.return_value = fake_response(200, {"success": False, "error": "blocked"})

        with pytest.raises(ScrapeError, match="blocked"):
            FirecrawlClient("fc-key", session=session).scrape_page("https://example.com")

    def test_http_error(self, session, fake_response):
        session.post.return_value = fake_response(402, {"error": "Payment required"})

        with pytest.raises(ScrapeError, match="402"):
            FirecrawlClient("fc-key", session=session).scrape_page("https://example.com")

    def test_timeout(self, session):
        session.post.side_effect = requests.exceptions.Timeout()

        with pytest.raises(ScrapeError):
            FirecrawlClient("fc-key", session=session).scrape_page("https://example.com")

    def test_check_connection(self, session, fake_response):
        session.post.return_value = fake_response(200, {"success": True, "data": {}})
        assert FirecrawlClient("fc-key", session=session).check_connection() is True

        session.post.return_value = fake_response(401, {"error": "Unauthorized"})
        assert FirecrawlClient("fc-key", session=session).check_connection() is False


class TestFallbackScrape:

    def test_synthesized_from_hostname(self):
        result = FirecrawlClient.fallback_scrape("shop.example.com/products")

        page = result.pages[0]
        assert page.title == "shop.example.com - Basic Analysis"
        assert "e-commerce" in page.content
        assert page.html == ""
        assert result.metadata.fallback is True
        assert result.metadata.crawl_depth == "fallback"

    @pytest.mark.parametrize("url, kind", [
        ("https://mystore.com", "e-commerce"),
        ("https://blog.example.org", "content/blog"),
        ("https://app.example.io", "application"),
        ("https://www.mit.edu", "educational"),
        ("https://www.usa.gov", "government"),
        ("https://acme.com", "business/general"),
    ])
    def test_guess_domain_type(self, url, kind):
        assert guess_domain_type(url) == kind
