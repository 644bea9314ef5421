"""Typed accessors for the site's content types."""

from typing import Any

from arsite.content.schemas import Article, CollectionResponse, Page
from arsite.infrastructure.strapi.client import RequestOptions, StrapiClient

DEFAULT_PAGE_SIZE = 25


def _list_params(page: int, page_size: int) -> dict[str, Any]:
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return {
        "populate": "*",
        "pagination[page]": page,
        "pagination[pageSize]": page_size,
        "sort": "publishedAt:desc",
    }


def _slug_params(slug: str) -> dict[str, Any]:
    if not slug:
        raise ValueError("slug must not be empty")
    return {"populate": "*", "filters[slug][$eq]": slug}


class ContentRepository:
    """Read-only queries the pages of the site are rendered from."""

    def __init__(self, client: StrapiClient):
        self.client = client

    async def list_articles(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> CollectionResponse[Article]:
        return await self.client.fetch_validated(
            "/articles",
            CollectionResponse[Article],
            RequestOptions(params=_list_params(page, page_size)),
        )

    async def get_article_by_slug(self, slug: str) -> Article | None:
        """Return the article with ``slug``, or None if none is published."""
        result = await self.client.fetch_validated(
            "/articles",
            CollectionResponse[Article],
            RequestOptions(params=_slug_params(slug)),
        )
        return result.data[0] if result.data else None

    async def list_pages(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> CollectionResponse[Page]:
        return await self.client.fetch_validated(
            "/pages",
            CollectionResponse[Page],
            RequestOptions(params=_list_params(page, page_size)),
        )

    async def get_page_by_slug(self, slug: str) -> Page | None:
        result = await self.client.fetch_validated(
            "/pages",
            CollectionResponse[Page],
            RequestOptions(params=_slug_params(slug)),
        )
        return result.data[0] if result.data else None
