"""Category tile discovery.

Category tiles are anchors to ``/categories/<id>`` or ``/tags/<id>`` holding
an image and a label. The label markup is inconsistent between pages, so the
name is resolved by a cascade of strategies: the first valid candidate wins.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Callable, Iterable

from bs4 import BeautifulSoup, Tag

from mybest.config import API_BASE_URL, ASSET_HOST_TOKEN
from mybest.models import CategoryTile
from mybest.normalize import title_case

logger = logging.getLogger(__name__)

_CATEGORY_HREF_PATTERN = re.compile(r"/(?:categories|tags)/([^/?#]+)/?(?:[?#].*)?$")
_IMG_SRC_PATTERN = re.compile(r"""<img[^>]*?\bsrc=["']([^"']+)["']""", re.IGNORECASE)

# Markup that never carries the label text
_DECORATIVE_TAGS = ["img", "svg", "i", "picture", "noscript", "script", "style"]
_BLOCK_TAGS = ["div", "p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "section", "br"]
_CONTAINER_TAGS = ["div", "span", "p"]

_FRAGMENT_MARKER = "<<fragment>>"

NameStrategy = Callable[[Tag], str]


def discover_categories(
    soup: BeautifulSoup,
    seen: set[str],
    asset_token: str = ASSET_HOST_TOKEN,
    api_base: str = API_BASE_URL,
) -> list[CategoryTile]:
    """Scan one page for category tiles.

    Args:
        soup: parsed listing page.
        seen: slugs already discovered; updated in place.
        asset_token: substring identifying category images.
        api_base: API base used to build ``api_link``.
    """
    tiles: list[CategoryTile] = []

    for anchor in soup.find_all("a", href=True):
        slug = category_slug(anchor["href"])
        if not slug or slug in seen:
            continue
        seen.add(slug)

        tiles.append(CategoryTile(
            name=resolve_category_name(anchor, slug),
            image_url=find_category_image(anchor, asset_token),
            slug=slug,
            api_link=f"{api_base}/category/{slug}",
        ))

    return tiles


def collect_categories(
    soups: Iterable[BeautifulSoup],
    asset_token: str = ASSET_HOST_TOKEN,
    api_base: str = API_BASE_URL,
) -> list[CategoryTile]:
    """Run discovery over several pages, first-seen slug wins."""
    seen: set[str] = set()
    tiles: list[CategoryTile] = []
    for soup in soups:
        tiles.extend(discover_categories(soup, seen, asset_token, api_base))
    logger.info("Discovered %d categories", len(tiles))
    return tiles


def category_slug(href: str) -> str:
    """Return the numeric trailing segment of a category/tag href, "" otherwise."""
    match = _CATEGORY_HREF_PATTERN.search(href)
    if not match:
        return ""
    segment = match.group(1)
    return segment if segment.isdecimal() else ""


# --- Image ---


def find_category_image(anchor: Tag, asset_token: str = ASSET_HOST_TOKEN) -> str:
    """Prefer the <noscript> fallback image, then a direct <img src>."""
    for noscript in anchor.find_all("noscript"):
        # Depending on the parser, noscript content is either markup or raw text
        img = noscript.find("img", src=lambda src: src and asset_token in src)
        if img is not None:
            return img["src"]
        for src in _IMG_SRC_PATTERN.findall(noscript.get_text()):
            if asset_token in src:
                return src

    img = anchor.find("img", src=lambda src: src and asset_token in src)
    if img is not None:
        return img["src"]
    return ""


# --- Name ---


def resolve_category_name(anchor: Tag, slug: str) -> str:
    for strategy in NAME_STRATEGIES:
        name = strategy(anchor)
        if is_valid_name(name):
            return title_case(name)
    return title_case(f"Category {slug}")


def is_valid_name(name: str) -> bool:
    # "{" means leaked CSS or template syntax
    return bool(name) and "{" not in name


def name_from_image_sibling(anchor: Tag) -> str:
    """Text of the plain container next to the tile image."""
    img = anchor.find("img")
    if img is None:
        return ""

    node = img
    while node is not None and node is not anchor:
        for sibling in node.find_next_siblings(_CONTAINER_TAGS):
            if sibling.find(["img", "noscript"]) is not None:
                continue
            first = sibling.find(True) or sibling
            return _strip_decorations(first).get_text(" ", strip=True)
        node = node.parent
    return ""


def name_from_fragments(anchor: Tag) -> str:
    """First plausible text fragment of the anchor, split at block boundaries."""
    clone = _strip_decorations(anchor)
    for block in clone.find_all(_BLOCK_TAGS):
        block.insert_before(_FRAGMENT_MARKER)

    for fragment in clone.get_text().split(_FRAGMENT_MARKER):
        fragment = " ".join(fragment.split())
        if len(fragment) >= 2 and not fragment.startswith(".") and "{" not in fragment:
            return fragment
    return ""


def _strip_decorations(node: Tag) -> Tag:
    clone = copy.copy(node)
    for tag in clone.find_all(_DECORATIVE_TAGS):
        tag.decompose()
    return clone


NAME_STRATEGIES: list[NameStrategy] = [
    name_from_image_sibling,
    name_from_fragments,
]
