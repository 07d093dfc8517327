"""Fetch-and-extract operations behind the API endpoints.

Each call performs one synchronous fetch → parse → extract cycle. Nothing is
cached or shared between calls.
"""

from __future__ import annotations

import logging

from mybest.article import parse_article_detail
from mybest.categories import collect_categories
from mybest.config import API_BASE_URL
from mybest.fetcher import (
    article_url,
    category_page_urls,
    category_url,
    fetch_page,
    parse_html,
    press_list_url,
)
from mybest.listing import (
    CATEGORY_PAGE_TEMPLATE,
    GLOBAL_PAGE_TEMPLATE,
    build_page_meta,
    find_max_page,
    parse_article_list,
)
from mybest.models import ArticleDetail, ArticleListResponse, CategoryListResponse

logger = logging.getLogger(__name__)


class PageFetchError(RuntimeError):
    """The source page could not be fetched."""

    def __init__(self, url: str):
        super().__init__(f"failed to fetch {url}")
        self.url = url


def _fetch(url: str) -> str:
    html = fetch_page(url)
    if html is None:
        raise PageFetchError(url)
    return html


def get_article_detail(article_id: str) -> ArticleDetail:
    logger.info("Scraping detail: id=%s", article_id)
    detail = parse_article_detail(_fetch(article_url(article_id)), article_id)
    logger.info("Detail id=%s: %d products", article_id, len(detail.products))
    return detail


def get_article_list(page: int = 1) -> ArticleListResponse:
    """Global article list, paginated as /api, /api/2, /api/3 ..."""
    logger.info("Scraping article list: page=%d", page)
    soup = parse_html(_fetch(press_list_url(page)))
    return ArticleListResponse(
        meta=build_page_meta(page, find_max_page(soup), API_BASE_URL, GLOBAL_PAGE_TEMPLATE),
        data=parse_article_list(soup, API_BASE_URL),
    )


def get_category_articles(slug: str, page: int = 1) -> ArticleListResponse:
    """Article list of one category, paginated as ?page=N."""
    logger.info("Scraping category articles: slug=%s, page=%d", slug, page)
    soup = parse_html(_fetch(category_url(slug, page)))
    base = f"{API_BASE_URL}/category/{slug}"
    return ArticleListResponse(
        meta=build_page_meta(
            page, find_max_page(soup), base, CATEGORY_PAGE_TEMPLATE, bare_first_page=False
        ),
        data=parse_article_list(soup, API_BASE_URL),
    )


def get_categories() -> CategoryListResponse:
    """Category tiles from the fixed listing pages.

    A page that fails to load is skipped as long as another one succeeds.
    """
    urls = category_page_urls()
    soups = []
    for url in urls:
        html = fetch_page(url)
        if html is None:
            logger.warning("Skipping category page: url=%s", url)
            continue
        soups.append(parse_html(html))

    if not soups:
        raise PageFetchError(urls[0])
    return CategoryListResponse(data=collect_categories(soups))
