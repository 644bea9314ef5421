"""
Pytest configuration and fixtures for arsite tests.
"""
import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from arsite.config import Settings, get_settings, load_configuration

TEST_STRAPI_URL = "http://localhost:1337"

ENV_VARS = (
    "NODE_ENV",
    "APP_ENV",
    "APP_DEBUG",
    "NEXT_PUBLIC_STRAPI_URL",
    "STRAPI_URL",
    "STRAPI_API_TOKEN",
    "STRAPI_API_TOKEN_FILE",
    "STRAPI_API_PREFIX",
    "STRAPI_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolate every test from the developer's environment and .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings for a local Strapi without an API token."""
    monkeypatch.setenv("NODE_ENV", "test")
    monkeypatch.setenv("NEXT_PUBLIC_STRAPI_URL", TEST_STRAPI_URL)
    return load_configuration()


@pytest.fixture
def token_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings for a local Strapi with an API token."""
    monkeypatch.setenv("NODE_ENV", "test")
    monkeypatch.setenv("NEXT_PUBLIC_STRAPI_URL", TEST_STRAPI_URL)
    monkeypatch.setenv("STRAPI_API_TOKEN", "test-token")
    return load_configuration()


@pytest.fixture
def article_entry() -> dict[str, Any]:
    return {
        "id": "11111111-1111-1111-1111-111111111111",
        "attributes": {
            "title": "Hi",
            "content": "Body",
            "slug": "hi",
            "publishedAt": "2024-01-01T00:00:00.000Z",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        },
    }


@pytest.fixture
def page_entry() -> dict[str, Any]:
    return {
        "id": "22222222-2222-2222-2222-222222222222",
        "attributes": {
            "title": "About us",
            "slug": "about",
            "description": "Who we are",
            "content": "We automate things.",
            "publishedAt": "2024-02-01T00:00:00.000Z",
            "createdAt": "2024-02-01T00:00:00.000Z",
            "updatedAt": "2024-02-02T00:00:00.000Z",
        },
    }


@pytest.fixture
def article_collection(article_entry: dict[str, Any]) -> dict[str, Any]:
    return {
        "data": [article_entry],
        "meta": {"pagination": {"page": 1, "pageSize": 25, "pageCount": 1, "total": 1}},
    }


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def json_handler() -> Callable[..., RecordingHandler]:
    """Build a handler answering every request with ``body`` as JSON."""

    def build(body: Any, status_code: int = 200) -> RecordingHandler:
        return RecordingHandler(
            lambda request: httpx.Response(
                status_code,
                content=json.dumps(body).encode(),
                headers={"Content-Type": "application/json"},
            )
        )

    return build
