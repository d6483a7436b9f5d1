"""
Firecrawl scrape client plus the offline fallback page.

The provider does the crawling; this module only shapes the request and turns
the response into a CrawlResult.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

import requests
import tldextract

from config import (
    DEFAULT_REQUEST_TIMEOUT,
    FIRECRAWL_MAX_AGE_MS,
    FIRECRAWL_SCRAPE_URL,
    FIRECRAWL_TEST_URL,
)
from crawler.parser import extract_title
from crawler.urls import normalize_target_url
from errors import ScrapeError
from logger import get_logger
from models import CrawlMetadata, CrawlResult, PageContent, Settings

logger = get_logger(__name__)

# Bundled public-suffix snapshot only; the fallback path must stay offline.
_extract = tldextract.TLDExtract(suffix_list_urls=())


class FirecrawlClient:
    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ── Scrape ────────────────────────────────────────────────────────────────

    def scrape_page(self, url: str, settings: Optional[Settings] = None) -> CrawlResult:
        url = normalize_target_url(url)
        stealth = bool(settings and settings.stealth_mode)
        logger.info("Scraping %s (stealth mode %s)", url, "on" if stealth else "off")

        payload = self._request(url, stealth)
        if not payload.get("success"):
            raise ScrapeError(f"Scraping failed: {payload.get('error') or 'unknown error'}")

        result = self._transform(payload, url)
        page = result.pages[0]
        logger.info("Scrape completed: %r, %d content chars", page.title, len(page.content))
        return result

    def check_connection(self, settings: Optional[Settings] = None) -> bool:
        """Scrape a known page to confirm the API key works."""
        try:
            payload = self._request(FIRECRAWL_TEST_URL, bool(settings and settings.stealth_mode))
        except ScrapeError as exc:
            logger.warning("Firecrawl connection test failed: %s", exc)
            return False
        return bool(payload.get("success"))

    def _request(self, url: str, stealth: bool) -> dict:
        body = {
            "url": url,
            "formats": ["markdown", "html"],
            "onlyMainContent": False,   # nav, header and footer matter for usability
            "maxAge": FIRECRAWL_MAX_AGE_MS,
        }
        if stealth:
            body["proxy"] = "stealth"

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self.session.post(FIRECRAWL_SCRAPE_URL, json=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise ScrapeError("Scraping request timed out")
        except requests.exceptions.RequestException as exc:
            raise ScrapeError(f"Scraping request failed: {exc}")

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if not resp.ok:
            detail = payload.get("error") if isinstance(payload, dict) else resp.text[:200]
            raise ScrapeError(f"Scraping failed: HTTP {resp.status_code} - {detail}")
        if not isinstance(payload, dict):
            raise ScrapeError("Scraping failed: response was not JSON")
        return payload

    @staticmethod
    def _transform(payload: dict, url: str) -> CrawlResult:
        # v1 nests the document under "data"; older responses put it at the root.
        doc = payload.get("data") if isinstance(payload.get("data"), dict) else payload
        meta = doc.get("metadata") if isinstance(doc.get("metadata"), dict) else {}
        html = _text(doc.get("html")) or _text(doc.get("rawHtml")) or ""
        status = meta.get("statusCode")

        page = PageContent(
            url=_text(meta.get("sourceURL")) or _text(doc.get("url")) or url,
            title=_text(meta.get("title")) or extract_title(html) or "Untitled",
            content=_text(doc.get("markdown")) or _text(doc.get("content")) or "",
            html=html,
            description=_text(meta.get("description")),
            og_title=_text(meta.get("ogTitle")),
            og_description=_text(meta.get("ogDescription")),
            keywords=_text(meta.get("keywords")),
            status_code=status if isinstance(status, int) and not isinstance(status, bool) else 200,
        )
        metadata = CrawlMetadata(
            total_pages=1,
            crawl_depth="single-page",
            crawl_time=datetime.now(timezone.utc).isoformat(),
            base_url=_origin(url),
            fallback=False,
        )
        return CrawlResult(pages=[page], metadata=metadata)

    # ── Fallback ──────────────────────────────────────────────────────────────

    @staticmethod
    def fallback_scrape(url: str) -> CrawlResult:
        """
        Minimal page record built from the hostname alone. No network access.
        """
        url = normalize_target_url(url)
        domain = urlparse(url).hostname or url
        logger.info("Using fallback scrape for %s", url)

        content = (
            f"Website: {domain}\n\n"
            f"This is a fallback analysis for {url}. Since the full content could not be "
            "scraped, the analysis is based on the URL structure and common web patterns.\n\n"
            f"The website appears to be a {guess_domain_type(url)} website.\n"
            "Common areas analyzed include navigation, content structure, and basic "
            "usability principles.\n\n"
            "Note: This is a limited analysis due to scraping restrictions. For a full "
            "analysis, make sure the scraping API key is configured correctly."
        )
        page = PageContent(
            url=url,
            title=f"{domain} - Basic Analysis",
            content=content,
            description=f"Basic usability analysis for {domain}",
            status_code=200,
        )
        metadata = CrawlMetadata(
            total_pages=1,
            crawl_depth="fallback",
            crawl_time=datetime.now(timezone.utc).isoformat(),
            base_url=_origin(url),
            fallback=True,
        )
        return CrawlResult(pages=[page], metadata=metadata)


def guess_domain_type(url: str) -> str:
    ext = _extract(url)
    name = f"{ext.subdomain}.{ext.domain}".lower()
    suffix_parts = ext.suffix.lower().split(".")

    if any(word in name for word in ("shop", "store", "buy")):
        return "e-commerce"
    if any(word in name for word in ("blog", "news")):
        return "content/blog"
    if any(word in name for word in ("app", "software")):
        return "application"
    if "edu" in suffix_parts or "university" in name:
        return "educational"
    if "gov" in suffix_parts:
        return "government"
    return "business/general"


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _text(value) -> Optional[str]:
    return value if isinstance(value, str) and value else None
