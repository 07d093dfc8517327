"""
MyBest Scraper API

Endpoints:
    GET /                          - service status and endpoint map
    GET /api, /api/{page}          - article list
    GET /api/detail/{article_id}   - article detail with merged products
    GET /api/categories            - category tiles
    GET /api/category/{slug}       - article list of one category (?page=N)
"""

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mybest import service
from mybest.config import API_BASE_URL, API_VERSION
from mybest.service import PageFetchError

logger = logging.getLogger(__name__)


class PrettyJSONResponse(JSONResponse):
    """Indented JSON; key order kept, no ASCII or HTML escaping."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


app = FastAPI(
    title="MyBest Scraper API",
    version=API_VERSION,
    default_response_class=PrettyJSONResponse,
)


@app.exception_handler(PageFetchError)
async def page_fetch_error_handler(request: Request, exc: PageFetchError) -> PrettyJSONResponse:
    logger.error("Request failed: path=%s, error=%s", request.url.path, exc)
    return PrettyJSONResponse(status_code=502, content={"error": str(exc)})


@app.get("/")
def home() -> PrettyJSONResponse:
    return PrettyJSONResponse({
        "status": "active",
        "message": "MyBest Scraper API is Running!",
        "version": API_VERSION,
        "endpoints": {
            "list_articles": API_BASE_URL,
            "detail_article": f"{API_BASE_URL}/detail/{{id}}",
            "list_categories": f"{API_BASE_URL}/categories",
            "category_articles": f"{API_BASE_URL}/category/{{slug}}",
        },
    })


@app.get("/api")
def article_list() -> PrettyJSONResponse:
    return PrettyJSONResponse(service.get_article_list(1).to_dict())


@app.get("/api/categories")
def categories() -> PrettyJSONResponse:
    return PrettyJSONResponse(service.get_categories().to_dict())


@app.get("/api/detail/{article_id}")
def article_detail(article_id: str) -> PrettyJSONResponse:
    return PrettyJSONResponse(service.get_article_detail(article_id).to_dict())


@app.get("/api/category/{slug}")
def category_articles(slug: str, page: str = "1") -> PrettyJSONResponse:
    return PrettyJSONResponse(service.get_category_articles(slug, _page_number(page)).to_dict())


@app.get("/api/{page}")
def article_list_page(page: str) -> PrettyJSONResponse:
    return PrettyJSONResponse(service.get_article_list(_page_number(page)).to_dict())


def _page_number(raw: str) -> int:
    """Non-numeric or non-positive page → 1."""
    if raw.isdecimal() and int(raw) > 0:
        return int(raw)
    return 1
