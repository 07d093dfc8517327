"""Comparison article extraction.

A detail page describes the same ranked product list twice:
  1. the rendered comparison table (rating point, shop links)
  2. JSON-LD blocks (breadcrumb category, article headline, ItemList of products)

Both are read from one parsed document by independent functions and then
joined on rank by ``merge_products``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace

from bs4 import BeautifulSoup

from mybest.affiliate import rewrite_affiliate_link
from mybest.fetcher import parse_html
from mybest.models import ArticleDetail, ProductRecord, SupplementaryRow
from mybest.normalize import clean_text, extract_rank, format_rupiah, title_case

logger = logging.getLogger(__name__)

_TABLE_ROW_SELECTOR = "table[data-testid='comparison-table'] tbody tr"
_JSON_LD_SELECTOR = "script[type='application/ld+json']"

# Comparison table column layout
_RANK_CELL = 0
_LINK_CELL = 3
_POINT_CELL = 4


class StructuredDataError(ValueError):
    """A JSON-LD block decoded but does not have the expected shape."""


@dataclass
class StructuredArticle:
    """What the JSON-LD blocks of an article page provide."""

    title: str = ""
    intro: str = ""
    category: str = ""
    products: list[ProductRecord] = field(default_factory=list)


# --- Comparison table ---


def parse_comparison_table(soup: BeautifulSoup) -> dict[int, SupplementaryRow]:
    """Build the rank-keyed side table from the comparison table.

    Rows without a numeric rank are skipped. A repeated rank overwrites the
    earlier row.
    """
    side_table: dict[int, SupplementaryRow] = {}

    for row in soup.select(_TABLE_ROW_SELECTOR):
        cells = row.find_all("td")
        if not cells:
            continue

        rank = extract_rank(clean_text(cells[_RANK_CELL]))
        if rank <= 0:
            continue

        affiliate_link = ""
        if len(cells) > _LINK_CELL:
            affiliate_link = _first_affiliate_link(cells[_LINK_CELL])

        point = clean_text(cells[_POINT_CELL]) if len(cells) > _POINT_CELL else ""

        if rank in side_table:
            logger.warning("Duplicate rank %d in comparison table, keeping the later row", rank)
        side_table[rank] = SupplementaryRow(rank=rank, point=point, affiliate_link=affiliate_link)

    return side_table


def _first_affiliate_link(cell) -> str:
    """Return the first anchor href in the cell the rewriter accepts."""
    for anchor in cell.find_all("a", href=True):
        link = rewrite_affiliate_link(anchor["href"])
        if link:
            return link
    return ""


# --- JSON-LD ---


def parse_structured_data(soup: BeautifulSoup) -> StructuredArticle:
    """Read category, headline, intro and products from the JSON-LD blocks.

    Blocks are recognised by content sniffing. Blocks that fail to decode or
    have an unexpected shape are skipped.
    """
    article = StructuredArticle()

    for script in soup.select(_JSON_LD_SELECTOR):
        content = script.string or script.get_text()
        if not content:
            continue

        if "BreadcrumbList" in content:
            try:
                category = _decode_breadcrumb(json.loads(content))
            except (json.JSONDecodeError, StructuredDataError) as e:
                logger.debug("Breadcrumb block skipped: %s", e)
            else:
                if category:
                    article.category = category

        if '"Article"' in content and "mainEntity" in content:
            try:
                title, intro, products = _decode_article(json.loads(content))
            except (json.JSONDecodeError, StructuredDataError) as e:
                logger.debug("Article block skipped: %s", e)
            else:
                article.title = title
                article.intro = intro
                article.products.extend(products)

    return article


def _decode_breadcrumb(data) -> str:
    """Return the title-cased name of the second breadcrumb entry, "" if absent."""
    elements = _get_list(_expect_dict(data, "breadcrumb"), "itemListElement")
    if len(elements) < 2:
        return ""
    second = _expect_dict(elements[1], "breadcrumb entry")
    return title_case(_get_str(second, "name"))


def _decode_article(data) -> tuple[str, str, list[ProductRecord]]:
    data = _expect_dict(data, "article")
    title = _get_str(data, "headline")
    intro = _get_str(data, "description")

    products: list[ProductRecord] = []
    for entity in _get_list(data, "mainEntity"):
        entity = _expect_dict(entity, "mainEntity entry")
        if entity.get("@type") != "ItemList":
            continue
        for element in _get_list(entity, "itemListElement"):
            products.append(_decode_list_item(_expect_dict(element, "itemListElement")))

    return title, intro, products


def _decode_list_item(element: dict) -> ProductRecord:
    rank = element.get("position", 0)
    if not isinstance(rank, int) or isinstance(rank, bool):
        raise StructuredDataError(f"position is not an integer: {rank!r}")

    item = _expect_dict(element.get("item") or {}, "item")
    brand_name = _get_str(_expect_dict(item.get("brand") or {}, "brand"), "name")
    images = _get_images(item)
    offers = _expect_dict(item.get("offers") or {}, "offers")

    return ProductRecord(
        rank=rank,
        brand_name=brand_name,
        product_name=derive_product_name(_get_str(item, "name"), brand_name),
        price=format_rupiah(offers.get("lowPrice")),
        images=images,
        image_url=images[0] if images else "",
    )


def derive_product_name(raw_name: str, brand_name: str) -> str:
    """Strip the brand label from a JSON-LD product name.

    "Brand X\\nModel Y" -> "Model Y" (first line repeats the brand);
    otherwise the brand is removed as a prefix: "Brand X Model Y" -> "Model Y".
    """
    if "\n" in raw_name:
        return raw_name.split("\n")[1]
    return raw_name.removeprefix(brand_name).strip()


def _expect_dict(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise StructuredDataError(f"{what} is not an object")
    return value


def _get_str(d: dict, key: str) -> str:
    value = d.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise StructuredDataError(f"{key} is not a string")
    return value


def _get_list(d: dict, key: str) -> list:
    value = d.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise StructuredDataError(f"{key} is not a list")
    return value


def _get_images(item: dict) -> list[str]:
    # schema.org allows a single URL as well as a list
    image = item.get("image")
    if isinstance(image, str):
        return [image]
    images = _get_list(item, "image")
    if not all(isinstance(url, str) for url in images):
        raise StructuredDataError("image list contains non-string entries")
    return list(images)


# --- Merge ---


def merge_products(
    products: list[ProductRecord], side_table: dict[int, SupplementaryRow]
) -> list[ProductRecord]:
    """Join JSON-LD products with comparison table rows on rank.

    Products keep their order. Ranks only present in the side table are
    dropped.
    """
    merged: list[ProductRecord] = []
    for product in products:
        extras = side_table.get(product.rank)
        if extras is None:
            merged.append(replace(product, point="", affiliate_link=""))
        else:
            merged.append(replace(product, point=extras.point, affiliate_link=extras.affiliate_link))
    return merged


def parse_article_detail(html: str | BeautifulSoup, article_id: str) -> ArticleDetail:
    """Extract a full ArticleDetail from one detail page."""
    soup = parse_html(html) if isinstance(html, str) else html

    side_table = parse_comparison_table(soup)
    structured = parse_structured_data(soup)

    return ArticleDetail(
        id=article_id,
        title=structured.title,
        category=structured.category,
        intro=structured.intro,
        products=merge_products(structured.products, side_table),
    )
