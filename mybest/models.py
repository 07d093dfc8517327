"""Data model definitions."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class SupplementaryRow:
    """Extra attributes read from one row of the comparison table."""

    rank: int  # 1-based position in the comparison list
    point: str
    affiliate_link: str  # "" = no usable marketplace link


@dataclass
class ProductRecord:
    """One ranked product of a comparison article."""

    rank: int
    brand_name: str
    product_name: str
    price: str  # display string, e.g. "Rp 199.000"
    images: list[str] = field(default_factory=list)
    image_url: str = ""  # primary image = images[0] or ""
    point: str = ""
    affiliate_link: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ArticleDetail:
    """A comparison article with its merged product list."""

    id: str
    title: str = ""
    category: str = ""
    intro: str = ""
    products: list[ProductRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ArticlePreview:
    """One entry of an article list page."""

    title: str
    original_id: str
    api_link: str
    source_link: str


@dataclass
class CategoryTile:
    """A category tile discovered on a listing page."""

    name: str
    image_url: str
    slug: str  # numeric category id
    api_link: str


@dataclass
class PageMeta:
    """Pagination metadata. Links are empty when not applicable."""

    current_page: int
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False
    next_page_url: str = ""
    prev_page_url: str = ""
    last_page_url: str = ""


@dataclass
class ArticleListResponse:
    meta: PageMeta
    data: list[ArticlePreview] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CategoryListResponse:
    data: list[CategoryTile] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"total": len(self.data), "data": [asdict(c) for c in self.data]}
