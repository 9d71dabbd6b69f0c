from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_scraper.services import SearchClient, SearchTimeout
from product_scraper.utils.log import configure_logging


logger = logging.getLogger(__name__)

app = FastAPI(title="Product Scraper")
client = SearchClient()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)

EXAMPLE = "/api/scrape?keyword=smartphone"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(
        "%s %s - Origin: %s",
        request.method,
        request.url.path + (f"?{request.url.query}" if request.url.query else ""),
        request.headers.get("origin"),
    )
    return await call_next(request)


@app.get("/")
def index() -> JSONResponse:
    return JSONResponse(
        {
            "message": "Product scraper API is running",
            "endpoints": {"scrape": "/api/scrape?keyword=your_term", "health": "/health"},
            "example": EXAMPLE,
        }
    )


@app.get("/health")
def health() -> JSONResponse:
    return JSONResponse({"status": "OK", "timestamp": _now_iso(), "runtime": "Python"})


@app.get("/scrape")
@app.get("/api/scrape")
def scrape(keyword: Optional[str] = Query(None, description="Search term")) -> JSONResponse:
    if not keyword:
        return JSONResponse(
            {"error": "Keyword parameter is required", "example": EXAMPLE},
            status_code=400,
        )
    site = client.config.site_name
    try:
        result = client.search(keyword)
    except SearchTimeout as e:
        logger.error("Scraping error: %s", e)
        return JSONResponse(
            {
                "success": False,
                "error": "Request timeout",
                "message": f"{site} took too long to respond",
            },
            status_code=408,
        )
    except Exception as e:
        logger.error("Scraping error: %s", e)
        return JSONResponse(
            {
                "success": False,
                "error": "Internal server error",
                "message": str(e),
                "hint": f"{site} may be blocking automated requests",
            },
            status_code=500,
        )
    return JSONResponse(result.model_dump(mode="json", by_alias=True))
