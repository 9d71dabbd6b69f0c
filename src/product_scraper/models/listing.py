"""Data models for scraped product listings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Listing(BaseModel):
    """A single product card extracted from a search result page."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    rating: Optional[float] = None
    review_count: Optional[int] = Field(default=None, ge=0, alias="reviewCount")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class ScrapeResult(BaseModel):
    """Payload returned by the scrape endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    keyword: str
    total_products: int = Field(alias="totalProducts")
    search_url: str = Field(alias="searchUrl")
    products: List[Listing] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
