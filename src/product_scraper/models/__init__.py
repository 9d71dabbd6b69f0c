from .listing import Listing, ScrapeResult

__all__ = ["Listing", "ScrapeResult"]
