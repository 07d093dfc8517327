"""Article list extraction and pagination."""

from __future__ import annotations

from bs4 import BeautifulSoup

from mybest.models import ArticlePreview, PageMeta
from mybest.normalize import clean_text

_LIST_ITEM_SELECTOR = "div[data-testid='content_list_item']"
_PAGINATION_SELECTOR = "nav[role='navigation'] li"

# Page link templates
GLOBAL_PAGE_TEMPLATE = "{base}/{page}"
CATEGORY_PAGE_TEMPLATE = "{base}?page={page}"


def parse_article_list(soup: BeautifulSoup, api_base: str) -> list[ArticlePreview]:
    """Extract article previews from a list page, skipping repeated ids."""
    previews: list[ArticlePreview] = []
    seen: set[str] = set()

    for item in soup.select(_LIST_ITEM_SELECTOR):
        anchor = item.find("a", href=True)
        link = anchor["href"] if anchor else ""
        article_id = link.rstrip("/").split("/")[-1]
        if not article_id or article_id in seen:
            continue
        seen.add(article_id)
        previews.append(ArticlePreview(
            title=clean_text(item.find("h2")),
            original_id=article_id,
            api_link=f"{api_base}/detail/{article_id}",
            source_link=link,
        ))

    return previews


def find_max_page(soup: BeautifulSoup) -> int:
    """Return the largest page number shown in the page navigation, 0 if none."""
    max_page = 0
    for li in soup.select(_PAGINATION_SELECTOR):
        text = clean_text(li)
        if text.isdecimal():
            max_page = max(max_page, int(text))
    return max_page


def build_page_meta(
    current_page: int,
    total_pages: int,
    base: str,
    template: str = GLOBAL_PAGE_TEMPLATE,
    bare_first_page: bool = True,
) -> PageMeta:
    """Derive next/prev/last links for a list page.

    Args:
        current_page: 1-based page being served.
        total_pages: largest known page, 0 = unknown (no links emitted).
        base: API base path the template is applied to.
        template: ``GLOBAL_PAGE_TEMPLATE`` or ``CATEGORY_PAGE_TEMPLATE``.
        bare_first_page: page 1 links to ``base`` itself.
    """
    meta = PageMeta(current_page=current_page, total_pages=total_pages)
    if total_pages <= 0:
        return meta

    def page_url(page: int) -> str:
        if page == 1 and bare_first_page:
            return base
        return template.format(base=base, page=page)

    meta.last_page_url = page_url(total_pages)
    if current_page < total_pages:
        meta.has_next = True
        meta.next_page_url = page_url(current_page + 1)
    if current_page > 1:
        meta.has_prev = True
        meta.prev_page_url = page_url(current_page - 1)
    return meta
