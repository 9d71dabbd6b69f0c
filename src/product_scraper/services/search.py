from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import quote

import requests
from scrapy.http import HtmlResponse

from product_scraper.models import ScrapeResult
from .scraper import extract_listings


logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = os.environ.get("SCRAPER_SEARCH_URL", "https://www.amazon.com/s")
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Characters encodeURIComponent leaves untouched
_UNRESERVED = "-_.!~*'()"


class SearchError(Exception):
    """Base error for failures talking to the search site."""


class SearchTimeout(SearchError):
    """The search site did not answer within the configured timeout."""


@dataclass
class SearchConfig:
    base_url: str = DEFAULT_SEARCH_URL
    timeout_secs: float = float(os.environ.get("SCRAPER_TIMEOUT_SECS", "15"))
    max_products: int = int(os.environ.get("SCRAPER_MAX_PRODUCTS", "16"))
    user_agent: str = os.environ.get("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT)
    site_name: str = os.environ.get("SCRAPER_SITE_NAME", "Amazon")


class SearchClient:
    """Fetches the first result page for a keyword and extracts its products.

    - One GET per search with browser-like headers and a fixed timeout.
    - No retries, caching or pagination: a failure is reported to the caller.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig()

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }

    def build_url(self, keyword: str) -> str:
        return f"{self.config.base_url}?k={quote(keyword, safe=_UNRESERVED)}"

    def fetch(self, url: str) -> HtmlResponse:
        """GET the search page and wrap the body for selector queries."""
        try:
            # requests applies the timeout to connect and to each read, not the whole transfer
            resp = requests.get(url, headers=self._headers(), timeout=self.config.timeout_secs)
        except requests.Timeout as exc:
            raise SearchTimeout(str(exc)) from exc
        resp.raise_for_status()
        return HtmlResponse(
            url=resp.url or url,
            body=resp.content,
            headers={"Content-Type": resp.headers.get("Content-Type", "text/html")},
        )

    def search(self, keyword: str) -> ScrapeResult:
        logger.info("Starting scraping for: %s", keyword)
        url = self.build_url(keyword)
        page = self.fetch(url)
        logger.info("Page loaded, starting parsing...")
        products = extract_listings(page)
        logger.info("Extracted %s products", len(products))
        return ScrapeResult(
            keyword=keyword,
            total_products=len(products),
            search_url=url,
            products=products[: self.config.max_products],
        )
