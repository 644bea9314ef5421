"""Unit tests for the content repository.

Tests query construction and result unwrapping for articles and pages.
"""

import httpx
import pytest

from arsite.content.repository import ContentRepository
from arsite.content.schemas import Article, Page
from arsite.infrastructure.strapi.client import StrapiClient
from arsite.shared.exceptions import RemoteRequestError

EMPTY_COLLECTION = {
    "data": [],
    "meta": {"pagination": {"page": 1, "pageSize": 25, "pageCount": 0, "total": 0}},
}


def build_repository(settings, handler) -> ContentRepository:
    return ContentRepository(StrapiClient(settings, transport=httpx.MockTransport(handler)))


class TestArticles:
    """Test article queries."""

    @pytest.mark.asyncio
    async def test_list_articles(self, settings, json_handler, article_collection):
        handler = json_handler(article_collection)
        repository = build_repository(settings, handler)

        result = await repository.list_articles(page=1, page_size=25)

        assert [article.attributes.slug for article in result.data] == ["hi"]
        params = handler.last_request.url.params
        assert handler.last_request.url.path == "/api/articles"
        assert params["populate"] == "*"
        assert params["pagination[page]"] == "1"
        assert params["pagination[pageSize]"] == "25"
        assert params["sort"] == "publishedAt:desc"

    @pytest.mark.asyncio
    async def test_get_article_by_slug(self, settings, json_handler, article_collection):
        handler = json_handler(article_collection)
        repository = build_repository(settings, handler)

        article = await repository.get_article_by_slug("hi")

        assert isinstance(article, Article)
        assert handler.last_request.url.params["filters[slug][$eq]"] == "hi"

    @pytest.mark.asyncio
    async def test_get_article_by_slug_not_found(self, settings, json_handler):
        repository = build_repository(settings, json_handler(EMPTY_COLLECTION))

        assert await repository.get_article_by_slug("missing") is None

    @pytest.mark.asyncio
    async def test_invalid_page(self, settings, json_handler):
        handler = json_handler(EMPTY_COLLECTION)
        repository = build_repository(settings, handler)

        with pytest.raises(ValueError):
            await repository.list_articles(page=0)

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_empty_slug(self, settings, json_handler):
        repository = build_repository(settings, json_handler(EMPTY_COLLECTION))

        with pytest.raises(ValueError):
            await repository.get_article_by_slug("")

    @pytest.mark.asyncio
    async def test_errors_propagate(self, settings, json_handler):
        repository = build_repository(settings, json_handler({}, status_code=500))

        with pytest.raises(RemoteRequestError):
            await repository.list_articles()


class TestPages:
    """Test marketing page queries."""

    @pytest.mark.asyncio
    async def test_list_pages(self, settings, json_handler, page_entry):
        handler = json_handler(
            {
                "data": [page_entry],
                "meta": {"pagination": {"page": 1, "pageSize": 10, "pageCount": 1, "total": 1}},
            }
        )
        repository = build_repository(settings, handler)

        result = await repository.list_pages(page_size=10)

        assert result.pagination.total == 1
        assert handler.last_request.url.path == "/api/pages"

    @pytest.mark.asyncio
    async def test_get_page_by_slug(self, settings, json_handler, page_entry):
        handler = json_handler(
            {
                "data": [page_entry],
                "meta": {"pagination": {"page": 1, "pageSize": 25, "pageCount": 1, "total": 1}},
            }
        )
        repository = build_repository(settings, handler)

        page = await repository.get_page_by_slug("about")

        assert isinstance(page, Page)
        assert page.attributes.title == "About us"
