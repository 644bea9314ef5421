"""Strapi content API client."""

from arsite.infrastructure.strapi.client import (
    RequestOptions,
    StrapiClient,
    fetch_validated,
)

__all__ = [
    "RequestOptions",
    "StrapiClient",
    "fetch_validated",
]
