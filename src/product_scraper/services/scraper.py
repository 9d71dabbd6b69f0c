"""Product extraction from search result pages built on Scrapy selectors."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, TypeVar
import logging
import re

import scrapy
from scrapy.http import Response

from product_scraper.models import Listing


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Each chain is tried strictly in order; the first candidate producing a value wins.
LISTING_SELECTORS = (
    '[data-component-type="s-search-result"]',
    '.s-result-item[data-component-type="s-search-result"]',
    ".s-card-container",
)

TITLE_SELECTORS = (
    # aria-label on the heading carries the untruncated title
    "h2[aria-label]",
    "a h2[aria-label]",
    "h2 a span",
    "a.a-link-normal h2 span",
    ".a-link-normal h2 span",
    "h2 .a-text-normal span",
    ".s-size-mini .s-link-style a span",
    "h2 span",
    ".a-text-normal",
    "h2",
)

RATING_SELECTORS = (
    ".a-icon-alt",
    '[aria-label*="stars"]',
    ".a-icon-star span",
)

REVIEW_SELECTORS = (
    ".a-size-base",
    'a[href*="#customerReviews"] span',
    ".a-link-normal span",
)

IMAGE_SELECTORS = (
    ".s-image",
    "img[data-image-latency]",
    ".a-dynamic-image",
    "img",
)

# Shorter strings are brand or category words ("Apple"), not titles.
MIN_TITLE_LENGTH = 10

# [0-9] rather than \d: only ASCII digits count, \s still covers non-breaking spaces
RATING_RE = re.compile(r"([0-9]+\.?[0-9]*)\s*out\s*of\s*5|([0-9]+\.?[0-9]*)\s*stars?", re.IGNORECASE)
REVIEW_COUNT_RE = re.compile(r"[0-9,]+")


def first_of(candidates: Iterable[str], match: Callable[[str], Optional[T]]) -> Optional[T]:
    """Return the first non-None ``match(candidate)`` in priority order."""
    for candidate in candidates:
        value = match(candidate)
        if value is not None:
            return value
    return None


def text_content(sel: scrapy.Selector) -> str:
    return sel.xpath("string(.)").get(default="")


def query(card: scrapy.Selector, css: str) -> List[scrapy.Selector]:
    """Match ``css`` among the descendants of ``card``, never ``card`` itself."""
    return [el for child in card.xpath("./*") for el in child.css(css)]


def select_listings(response: Response) -> List[scrapy.Selector]:
    """Return container elements for the first selector that matches anything."""
    for css in LISTING_SELECTORS:
        found = response.css(css)
        if found:
            return list(found)
    return []


def extract_title(card: scrapy.Selector) -> Optional[str]:
    def match(css: str) -> Optional[str]:
        el = query(card, css)
        if not el:
            return None
        el = el[0]
        aria = (el.attrib.get("aria-label") or "").strip()
        if len(aria) > MIN_TITLE_LENGTH:
            return aria
        text = text_content(el).strip()
        if len(text) > MIN_TITLE_LENGTH:
            return text
        return None

    return first_of(TITLE_SELECTORS, match)


def extract_rating(card: scrapy.Selector) -> Optional[float]:
    """Parse ratings phrased as "4.5 out of 5 stars" or "4 stars"."""

    def match(css: str) -> Optional[float]:
        el = query(card, css)
        if not el:
            return None
        el = el[0]
        text = text_content(el) or el.attrib.get("aria-label") or ""
        m = RATING_RE.search(text)
        if not m:
            return None
        return float(m.group(1) or m.group(2))

    return first_of(RATING_SELECTORS, match)


def extract_review_count(card: scrapy.Selector) -> Optional[int]:
    """Find the first element whose whole text is a number like ``1,234``.

    Every element matched by a selector is checked, not only the first one,
    since review counts share generic classes with other card text.
    """
    for css in REVIEW_SELECTORS:
        for el in query(card, css):
            text = text_content(el).strip()
            if REVIEW_COUNT_RE.fullmatch(text):
                digits = text.replace(",", "")
                # a bare "," run still ends the search, just without a count
                return int(digits) if digits else None
    return None


def extract_image_url(card: scrapy.Selector, response: Response) -> Optional[str]:
    def match(css: str) -> Optional[str]:
        el = query(card, css)
        if not el:
            return None
        src = (el[0].attrib.get("src") or "").strip()
        return response.urljoin(src) if src else None

    return first_of(IMAGE_SELECTORS, match)


def extract_listing(card: scrapy.Selector, response: Response) -> Optional[Listing]:
    """Build a ``Listing`` from one container, or ``None`` when it has no title."""
    title = extract_title(card)
    if not title:
        return None
    return Listing(
        title=title,
        rating=extract_rating(card),
        review_count=extract_review_count(card),
        image_url=extract_image_url(card, response),
    )


def extract_listings(response: Response) -> List[Listing]:
    """Extract listings from a search result page in document order.

    A container that fails to parse is logged and skipped; it never aborts
    the rest of the page.
    """
    cards = select_listings(response)
    logger.info("Found %s products", len(cards))

    listings: List[Listing] = []
    for index, card in enumerate(cards):
        try:
            item = extract_listing(card, response)
        except Exception as exc:
            logger.error("Error processing product %s: %s", index, exc)
            continue
        if item is not None:
            listings.append(item)
    return listings
