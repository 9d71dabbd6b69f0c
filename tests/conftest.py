from __future__ import annotations

from typing import Callable

import pytest
import requests
from scrapy.http import HtmlResponse


SEARCH_URL = "https://www.amazon.com/s?k=smartphone"


def card(
    title: str = "Acme Phone 12 128GB Unlocked",
    rating: str | None = "4.5 out of 5 stars",
    reviews: str | None = "1,234",
    image: str | None = "https://m.media-amazon.com/images/I/phone.jpg",
) -> str:
    parts = ['<div data-component-type="s-search-result">', f"<h2><a><span>{title}</span></a></h2>"]
    if rating is not None:
        parts.append(f'<i class="a-icon a-icon-star"><span class="a-icon-alt">{rating}</span></i>')
    if reviews is not None:
        parts.append(f'<a href="/dp/X#customerReviews"><span class="a-size-base">{reviews}</span></a>')
    if image is not None:
        parts.append(f'<img class="s-image" src="{image}" />')
    parts.append("</div>")
    return "".join(parts)


def page(*cards: str) -> str:
    return "<html><body><div class=\"s-main-slot\">" + "".join(cards) + "</div></body></html>"


@pytest.fixture
def make_response() -> Callable[[str], HtmlResponse]:
    def _make(html: str, url: str = SEARCH_URL) -> HtmlResponse:
        return HtmlResponse(url=url, body=html, encoding="utf-8")

    return _make


class FakeResponse:
    def __init__(self, body: str, status_code: int = 200, url: str = "") -> None:
        self.content = body.encode("utf-8")
        self.status_code = status_code
        self.url = url
        self.headers = {"Content-Type": "text/html; charset=utf-8"}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error: Service Unavailable")
