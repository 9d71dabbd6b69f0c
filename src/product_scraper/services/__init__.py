"""Service layer for the product scraper."""

from .scraper import extract_listings
from .search import SearchClient, SearchConfig, SearchError, SearchTimeout

__all__ = ["extract_listings", "SearchClient", "SearchConfig", "SearchError", "SearchTimeout"]
