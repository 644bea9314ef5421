"""Custom exception hierarchy for arsite."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from arsite.content.validation import FieldError


class ARSiteError(Exception):
    """Base exception for all arsite errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ----- Startup Errors -----


class ConfigurationError(ARSiteError):
    """Environment is missing a required value or holds a malformed one.

    Never caught inside the package: the process must not start half-configured.
    """

    pass


# ----- External Service Errors -----


class ExternalServiceError(ARSiteError):
    """Error from the content backend."""

    pass


class RemoteRequestError(ExternalServiceError):
    """Content backend answered with a non-success HTTP status."""

    def __init__(self, status_code: int, status_text: str, url: str) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.url = url
        super().__init__(
            message=f"Strapi API error: {status_code} {status_text}".rstrip(),
            details={"status_code": status_code, "status_text": status_text, "url": url},
        )


class ResponseValidationError(ExternalServiceError):
    """Response body is not JSON or does not match the expected schema."""

    def __init__(
        self,
        schema_name: str,
        errors: "tuple[FieldError, ...]",
        url: str,
    ) -> None:
        self.schema_name = schema_name
        self.errors = errors
        self.url = url
        if errors:
            first = errors[0]
            message = (
                f"Invalid {schema_name} response: {first.location}: {first.message}"
            )
        else:
            message = f"Invalid {schema_name} response"
        super().__init__(
            message=message,
            details={
                "schema": schema_name,
                "url": url,
                "errors": [error.as_dict() for error in errors],
            },
        )

    @property
    def locations(self) -> list[str]:
        return [error.location for error in self.errors]


class TransportError(ExternalServiceError):
    """No response was obtained (connection refused, timeout, protocol error)."""

    def __init__(self, message: str, url: str) -> None:
        self.url = url
        super().__init__(message=message, details={"url": url})
