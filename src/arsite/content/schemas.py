"""Pydantic models for Strapi content responses.

Every model here is strict: unknown fields are rejected and instances are
frozen. Wire names are camelCase (``publishedAt``, ``pageSize``), attribute
names are snake_case.
"""

from datetime import datetime
from typing import Any, Generic, NewType, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Identifier kinds. Only produced by validating a response, so an ArticleId
# can't be passed where a PageId is expected without a type checker noticing.
ArticleId = NewType("ArticleId", UUID)
PageId = NewType("PageId", UUID)

T = TypeVar("T")


class ContentModel(BaseModel):
    """Strict base for everything parsed out of a Strapi response."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Content types
# ============================================================================


class ArticleAttributes(ContentModel):
    """Fields of the ``article`` collection type."""

    title: str = Field(..., min_length=1)
    content: str
    slug: str = Field(..., min_length=1)
    published_at: datetime | None = Field(
        default=None,
        description="Null for drafts when previewing unpublished content",
    )
    created_at: datetime
    updated_at: datetime


class Article(ContentModel):
    id: ArticleId
    attributes: ArticleAttributes


class PageAttributes(ContentModel):
    """Fields of the ``page`` collection type (marketing pages)."""

    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: str | None = None
    content: str
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class Page(ContentModel):
    id: PageId
    attributes: PageAttributes


# ============================================================================
# Envelopes
# ============================================================================


class Pagination(ContentModel):
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    page_count: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_page_count(self) -> "Pagination":
        expected = -(-self.total // self.page_size)
        if self.page_count != expected:
            raise ValueError(
                f"pageCount {self.page_count} does not match "
                f"ceil(total / pageSize) = {expected}"
            )
        return self


class CollectionMeta(ContentModel):
    pagination: Pagination


class CollectionResponse(ContentModel, Generic[T]):
    """Envelope of a collection endpoint: ``{data: [...], meta: {pagination}}``."""

    data: list[T]
    meta: CollectionMeta

    @model_validator(mode="after")
    def check_data_fits_page(self) -> "CollectionResponse[T]":
        pagination = self.meta.pagination
        remaining = max(0, pagination.total - (pagination.page - 1) * pagination.page_size)
        limit = min(pagination.page_size, remaining)
        if len(self.data) > limit:
            raise ValueError(
                f"{len(self.data)} items returned but page {pagination.page} "
                f"(pageSize {pagination.page_size}, total {pagination.total}) "
                f"holds at most {limit}"
            )
        return self

    @property
    def pagination(self) -> Pagination:
        return self.meta.pagination


class SingleResponse(ContentModel, Generic[T]):
    """Envelope of a single-item endpoint: ``{data: {...}, meta: {}}``."""

    data: T
    meta: dict[str, Any] = Field(default_factory=dict)
