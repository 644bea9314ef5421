"""Content schemas and the validation step they are matched through."""

from arsite.content.schemas import (
    Article,
    ArticleAttributes,
    ArticleId,
    CollectionMeta,
    CollectionResponse,
    ContentModel,
    Page,
    PageAttributes,
    PageId,
    Pagination,
    SingleResponse,
)
from arsite.content.validation import (
    FieldError,
    Validated,
    ValidationFailure,
    validate_payload,
)

__all__ = [
    # Schemas
    "ContentModel",
    "Article",
    "ArticleAttributes",
    "ArticleId",
    "Page",
    "PageAttributes",
    "PageId",
    "Pagination",
    "CollectionMeta",
    "CollectionResponse",
    "SingleResponse",
    # Validation
    "FieldError",
    "Validated",
    "ValidationFailure",
    "validate_payload",
]
