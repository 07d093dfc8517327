"""Page fetching and HTML parsing for id.my-best.com."""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from mybest.config import CATEGORY_PAGE_PATHS, REQUEST_TIMEOUT, SOURCE_BASE_URL, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_page(url: str) -> str | None:
    """Fetch one page.

    Args:
        url: absolute page URL

    Returns:
        HTML text, or None on failure.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept-Language": "id-ID,id;q=0.9,en-US;q=0.8,en;q=0.7",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }

    try:
        resp = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return resp.text
    except requests.RequestException as e:
        logger.error("Page fetch failed: url=%s, error=%s", url, e)
        return None


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def article_url(article_id: str) -> str:
    return f"{SOURCE_BASE_URL}/{quote(article_id, safe='')}"


def press_list_url(page: int) -> str:
    """Global article list; page 1 has no query string."""
    if page > 1:
        return f"{SOURCE_BASE_URL}/presses?page={page}"
    return f"{SOURCE_BASE_URL}/presses"


def category_url(slug: str, page: int) -> str:
    url = f"{SOURCE_BASE_URL}/categories/{quote(slug, safe='')}"
    if page > 1:
        return f"{url}?page={page}"
    return url


def category_page_urls() -> list[str]:
    """The fixed listing pages scanned for category tiles."""
    return [SOURCE_BASE_URL + path for path in CATEGORY_PAGE_PATHS]
