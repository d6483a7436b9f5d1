"""
Runs the four analysis steps in order and returns a normalized AnalysisReport.

    validation → crawling → analysis → scoring

Scrape failures fall back to a synthesized page, provider failures fall back
to the static category catalog. Anything else is marked on every step and
re-raised for the UI to display.
"""
from __future__ import annotations

from typing import Callable, Optional

import requests

from analyzers.base import BaseProvider
from analyzers.normalizer import normalize_analysis
from analyzers.prompt import build_analysis_prompt
from analyzers.providers import get_provider
from crawler.firecrawl import FirecrawlClient
from crawler.urls import normalize_target_url
from errors import InputValidationError, ProviderError, ScrapeError
from logger import get_logger
from models import AnalysisReport, CrawlResult, ProgressStep, Settings, StepStatus

logger = get_logger(__name__)

ProgressCallback = Callable[[list[ProgressStep]], None]


def default_steps() -> list[ProgressStep]:
    return [
        ProgressStep("validation", "Validating URL", "Checking URL format and accessibility"),
        ProgressStep("crawling", "Crawling Website", "Extracting content from pages"),
        ProgressStep("analysis", "AI Analysis", "Analyzing usability with Krug's principles"),
        ProgressStep("scoring", "Generating Report", "Calculating scores and recommendations"),
    ]


class AnalysisPipeline:
    def __init__(
        self,
        settings: Settings,
        scraper: Optional[FirecrawlClient] = None,
        provider: Optional[BaseProvider] = None,
    ):
        self.settings = settings
        self.scraper = scraper or FirecrawlClient(settings.scrape_api_key)
        self.provider = provider or get_provider(settings)
        self.steps = default_steps()

    def run(self, url: str, progress_callback: Optional[ProgressCallback] = None) -> AnalysisReport:
        self.steps = default_steps()
        try:
            self._set(progress_callback, "validation", StepStatus.ACTIVE)
            target = self._validate(url)
            self._set(progress_callback, "validation", StepStatus.COMPLETED)

            self._set(progress_callback, "crawling", StepStatus.ACTIVE)
            crawl = self._crawl(target)
            self._set(progress_callback, "crawling", StepStatus.COMPLETED)

            self._set(progress_callback, "analysis", StepStatus.ACTIVE)
            raw, fallback_reason = self._analyze(target, crawl)
            self._set(progress_callback, "analysis", StepStatus.COMPLETED)

            self._set(progress_callback, "scoring", StepStatus.ACTIVE)
            report = normalize_analysis(raw, self.settings, target, crawl, fallback_reason)
            self._set(progress_callback, "scoring", StepStatus.COMPLETED)
        except Exception:
            logger.exception("Analysis of %s failed", url)
            for step in self.steps:
                step.status = StepStatus.ERROR
            _emit(progress_callback, self.steps)
            raise

        logger.info("Analysis complete for %s: overall score %d", target, report.overall_score)
        return report

    # ── Steps ─────────────────────────────────────────────────────────────────

    def _validate(self, url: str) -> str:
        target = normalize_target_url(url)
        if not self.settings.has_keys:
            raise InputValidationError("Please configure your API keys in settings first")
        return target

    def _crawl(self, url: str) -> CrawlResult:
        try:
            return self.scraper.scrape_page(url, self.settings)
        except (ScrapeError, requests.exceptions.RequestException) as exc:
            logger.warning("Scraping failed, using fallback page: %s", exc)
            return FirecrawlClient.fallback_scrape(url)

    def _analyze(self, url: str, crawl: CrawlResult) -> tuple[dict, Optional[str]]:
        prompt = build_analysis_prompt(url, crawl.pages, self.settings)
        try:
            return self.provider.analyze(prompt), None
        except ProviderError as exc:
            logger.warning("AI analysis failed, using fallback catalog: %s", exc)
            return {}, f"AI analysis unavailable ({exc}); showing baseline recommendations."

    # ── Progress ──────────────────────────────────────────────────────────────

    def _set(self, callback: Optional[ProgressCallback], step_id: str, status: str) -> None:
        for step in self.steps:
            if step.id == step_id:
                step.status = status
        _emit(callback, self.steps)


def _emit(callback: Optional[ProgressCallback], steps: list[ProgressStep]) -> None:
    if callback:
        try:
            callback(list(steps))
        except Exception:
            logger.debug("Progress callback raised", exc_info=True)
