"""Client for the Strapi REST API.

Every call issues exactly one HTTP request (redirects are followed) and
returns data that has been validated against a caller-supplied schema.
There is no retry, no cache and no shared connection pool: each call opens
and closes its own ``httpx.AsyncClient``, so concurrent page renders never
share state.

Example usage:
    client = StrapiClient()

    articles = await client.fetch_validated(
        "/articles?populate=*",
        CollectionResponse[Article],
    )
"""

import json
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx

from arsite.config import Settings, get_settings
from arsite.content.validation import (
    FieldError,
    ValidationFailure,
    schema_name,
    validate_payload,
)
from arsite.shared.exceptions import (
    RemoteRequestError,
    ResponseValidationError,
    TransportError,
)
from arsite.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides. Defaults describe a plain read."""

    method: str = "GET"
    body: Any = None  # JSON-serialisable value, or str/bytes sent as-is
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)


DEFAULT_OPTIONS = RequestOptions()


class StrapiClient:
    """Validated access to the Strapi content API.

    Args:
        settings: Loaded configuration; defaults to the process-wide settings
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.settings.api_base_url

    def build_url(self, path: str) -> str:
        """Join base URL, API prefix and ``path``.

        Raises:
            ValueError: If ``path`` is empty or blank.
        """
        if not path or not path.strip():
            raise ValueError("path must be a non-empty API-relative path")
        path = path.strip()
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def build_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if self.settings.strapi_api_token:
            headers["Authorization"] = f"Bearer {self.settings.strapi_api_token}"
        if extra:
            headers.update(extra)
        return headers

    def _build_request(
        self,
        client: httpx.AsyncClient,
        url: str,
        options: RequestOptions,
    ) -> httpx.Request:
        kwargs: dict[str, Any] = {"headers": self.build_headers(options.headers)}
        request_url = httpx.URL(url)
        if options.params:
            # Passing params= to httpx would replace the query already in the path
            request_url = request_url.copy_merge_params(options.params)
        if isinstance(options.body, (str, bytes)):
            kwargs["content"] = options.body
        elif options.body is not None:
            kwargs["content"] = json.dumps(options.body)
        return client.build_request(options.method.upper(), request_url, **kwargs)

    async def fetch_validated(
        self,
        path: str,
        schema: type[T],
        options: RequestOptions | None = None,
    ) -> T:
        """Fetch ``path`` and validate the JSON body against ``schema``.

        Args:
            path: API-relative path, e.g. ``/articles?populate=*``
            schema: Type the body must match, e.g. ``SingleResponse[Page]``
            options: Method, body, extra headers and query parameters

        Returns:
            The validated value

        Raises:
            ValueError: If ``path`` is empty
            RemoteRequestError: Non-success HTTP status
            TransportError: No response (connection failure, timeout)
            ResponseValidationError: Body is not JSON or does not match ``schema``
        """
        options = options or DEFAULT_OPTIONS
        url = self.build_url(path)
        method = options.method.upper()

        async with httpx.AsyncClient(
            timeout=self.settings.strapi_timeout_seconds,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            request = self._build_request(client, url, options)
            try:
                response = await client.send(request)
            except httpx.RequestError as e:
                logger.error(
                    "strapi_transport_error",
                    method=method,
                    url=url,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise TransportError(
                    f"Strapi request failed: {type(e).__name__}: {e}",
                    url=url,
                ) from e

        if not response.is_success:
            logger.error(
                "strapi_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )
            raise RemoteRequestError(
                status_code=response.status_code,
                status_text=response.reason_phrase,
                url=url,
            )

        try:
            raw = response.json()
        except ValueError as e:
            failure = ValidationFailure(
                schema_name=schema_name(schema),
                errors=(
                    FieldError(
                        location="<body>",
                        message=f"Response body is not valid JSON: {e}",
                        error_type="json_invalid",
                    ),
                ),
            )
            self._log_invalid(method, url, failure)
            raise ResponseValidationError(
                schema_name=failure.schema_name,
                errors=failure.errors,
                url=url,
            ) from e

        result = validate_payload(schema, raw)
        if isinstance(result, ValidationFailure):
            self._log_invalid(method, url, result)
            raise ResponseValidationError(
                schema_name=result.schema_name,
                errors=result.errors,
                url=url,
            )

        logger.debug(
            "strapi_request_ok",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return result.value

    @staticmethod
    def _log_invalid(method: str, url: str, failure: ValidationFailure) -> None:
        logger.error(
            "strapi_response_invalid",
            method=method,
            url=url,
            schema=failure.schema_name,
            errors=[error.as_dict() for error in failure.errors],
        )


async def fetch_validated(
    path: str,
    schema: type[T],
    options: RequestOptions | None = None,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> T:
    """Shortcut for ``StrapiClient(settings).fetch_validated(...)``."""
    client = StrapiClient(settings, transport=transport)
    return await client.fetch_validated(path, schema, options)
