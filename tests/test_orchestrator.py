from unittest.mock import MagicMock

import pytest
import requests

from analyzers.base import BaseProvider
from analyzers.orchestrator import AnalysisPipeline
from catalog.fallback import fallback_result
from crawler.firecrawl import FirecrawlClient
from errors import InputValidationError, ProviderError, ScrapeError
from models import CategoryId, Settings, StepStatus


@pytest.fixture
def scraper(crawl_result):
    client = MagicMock(spec=FirecrawlClient)
    client.scrape_page.return_value = crawl_result
    return client


@pytest.fixture
def provider(raw_payload):
    llm = MagicMock(spec=BaseProvider)
    llm.analyze.return_value = raw_payload
    return llm


class TestAnalysisPipeline:

    def test_happy_path(self, settings, scraper, provider):
        snapshots = []
        pipeline = AnalysisPipeline(settings, scraper=scraper, provider=provider)

        report = pipeline.run("example.com", progress_callback=lambda steps: snapshots.append(
            [s.status for s in steps]
        ))

        assert report.url == "https://example.com"
        assert report.fallback_reason is None
        assert report.category(CategoryId.NAVIGATION).score == 82
        scraper.scrape_page.assert_called_once_with("https://example.com", settings)
        assert "https://example.com" in provider.analyze.call_args.args[0]
        assert snapshots[0] == [StepStatus.ACTIVE, StepStatus.PENDING, StepStatus.PENDING, StepStatus.PENDING]
        assert snapshots[-1] == [StepStatus.COMPLETED] * 4

    def test_invalid_url(self, settings, scraper, provider):
        with pytest.raises(InputValidationError):
            AnalysisPipeline(settings, scraper=scraper, provider=provider).run("not a url")
        scraper.scrape_page.assert_not_called()

    def test_missing_keys(self, scraper, provider):
        pipeline = AnalysisPipeline(Settings(), scraper=scraper, provider=provider)

        with pytest.raises(InputValidationError, match="API keys"):
            pipeline.run("https://example.com")
        assert all(step.status == StepStatus.ERROR for step in pipeline.steps)

    @pytest.mark.parametrize("error", [ScrapeError("blocked"), requests.exceptions.ConnectionError("down")])
    def test_scrape_failure_uses_fallback_page(self, settings, scraper, provider, error):
        scraper.scrape_page.side_effect = error

        report = AnalysisPipeline(settings, scraper=scraper, provider=provider).run("https://shop.example.com")

        assert report.crawl_data.metadata.fallback is True
        assert report.crawl_data.pages[0].title == "shop.example.com - Basic Analysis"

    def test_provider_failure_uses_fallback_catalog(self, settings, scraper, provider):
        provider.analyze.side_effect = ProviderError("Claude", "overloaded", status=529)

        report = AnalysisPipeline(settings, scraper=scraper, provider=provider).run("https://example.com")

        assert report.fallback_reason is not None
        assert "529" in report.fallback_reason
        assert all(c == fallback_result(c.id) for c in report.categories)
        assert report.overall_assessment is None

    def test_unexpected_error_propagates(self, settings, scraper, provider):
        provider.analyze.side_effect = RuntimeError("bug")
        pipeline = AnalysisPipeline(settings, scraper=scraper, provider=provider)

        with pytest.raises(RuntimeError):
            pipeline.run("https://example.com")
        assert all(step.status == StepStatus.ERROR for step in pipeline.steps)

    def test_callback_errors_do_not_break_run(self, settings, scraper, provider):
        def explode(steps):
            raise RuntimeError("ui gone")

        report = AnalysisPipeline(settings, scraper=scraper, provider=provider).run(
            "https://example.com", progress_callback=explode,
        )

        assert report.overall_score > 0
