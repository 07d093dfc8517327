"""Mocked tests for the service module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mybest.config import API_BASE_URL, SOURCE_BASE_URL
from mybest.service import (
    PageFetchError,
    get_article_detail,
    get_article_list,
    get_categories,
    get_category_articles,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class TestGetArticleDetail:
    """Tests for get_article_detail."""

    @patch("mybest.service.fetch_page")
    def test_detail(self, mock_fetch):
        mock_fetch.return_value = _load_fixture("article_detail.html")

        detail = get_article_detail("12345")

        mock_fetch.assert_called_once_with(f"{SOURCE_BASE_URL}/12345")
        assert detail.id == "12345"
        assert len(detail.products) == 3

    @patch("mybest.service.fetch_page")
    def test_fetch_failure(self, mock_fetch):
        mock_fetch.return_value = None

        with pytest.raises(PageFetchError) as exc_info:
            get_article_detail("12345")
        assert exc_info.value.url == f"{SOURCE_BASE_URL}/12345"


class TestGetArticleList:
    """Tests for get_article_list."""

    @patch("mybest.service.fetch_page")
    def test_first_page(self, mock_fetch):
        mock_fetch.return_value = _load_fixture("article_list.html")

        response = get_article_list(1)

        mock_fetch.assert_called_once_with(f"{SOURCE_BASE_URL}/presses")
        assert response.meta.total_pages == 12
        assert response.meta.next_page_url == f"{API_BASE_URL}/2"
        assert response.meta.prev_page_url == ""
        assert len(response.data) == 2

    @patch("mybest.service.fetch_page")
    def test_later_page(self, mock_fetch):
        mock_fetch.return_value = _load_fixture("article_list.html")

        response = get_article_list(2)

        mock_fetch.assert_called_once_with(f"{SOURCE_BASE_URL}/presses?page=2")
        assert response.meta.prev_page_url == API_BASE_URL
        assert response.meta.last_page_url == f"{API_BASE_URL}/12"


class TestGetCategoryArticles:
    """Tests for get_category_articles."""

    @patch("mybest.service.fetch_page")
    def test_category_pagination(self, mock_fetch):
        mock_fetch.return_value = _load_fixture("article_list.html")

        response = get_category_articles("101", 3)

        mock_fetch.assert_called_once_with(f"{SOURCE_BASE_URL}/categories/101?page=3")
        base = f"{API_BASE_URL}/category/101"
        assert response.meta.next_page_url == f"{base}?page=4"
        assert response.meta.prev_page_url == f"{base}?page=2"
        assert response.data[0].api_link == f"{API_BASE_URL}/detail/12345"


class TestGetCategories:
    """Tests for get_categories."""

    @patch("mybest.service.fetch_page")
    def test_both_pages(self, mock_fetch):
        mock_fetch.side_effect = [
            _load_fixture("categories_home.html"),
            _load_fixture("categories_index.html"),
        ]

        response = get_categories()

        assert mock_fetch.call_count == 2
        assert [c.slug for c in response.data] == ["101", "202", "303", "404"]
        assert response.to_dict()["total"] == 4

    @patch("mybest.service.fetch_page")
    def test_one_page_fails(self, mock_fetch):
        mock_fetch.side_effect = [None, _load_fixture("categories_index.html")]

        response = get_categories()

        assert [c.slug for c in response.data] == ["101", "404"]
        assert response.data[0].name == "Skincare Lainnya"

    @patch("mybest.service.fetch_page")
    def test_all_pages_fail(self, mock_fetch):
        mock_fetch.return_value = None

        with pytest.raises(PageFetchError):
            get_categories()
