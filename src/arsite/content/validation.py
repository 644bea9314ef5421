"""Schema-match step between raw JSON and typed content.

Decoded JSON is untyped. Nothing outside this module looks at it: callers get
either ``Validated`` (holding a fully typed value) or ``ValidationFailure``
(holding field-level errors), never a half-populated object.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class FieldError:
    """A single mismatch between payload and schema."""

    location: str  # dotted path, e.g. "data.0.attributes.slug"
    message: str
    error_type: str  # pydantic error type, e.g. "missing", "uuid_parsing"
    received: str | None = None  # repr of the offending input, truncated

    def as_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "message": self.message,
            "type": self.error_type,
            "received": self.received,
        }


@dataclass(frozen=True)
class Validated(Generic[T]):
    value: T


@dataclass(frozen=True)
class ValidationFailure:
    schema_name: str
    errors: tuple[FieldError, ...]


MAX_RECEIVED_REPR = 120


def schema_name(schema: Any) -> str:
    """Readable name for a schema, including generic parameters."""
    return getattr(schema, "__name__", None) or repr(schema)


@lru_cache(maxsize=128)
def _adapter(schema: Any) -> TypeAdapter[Any]:
    # Schemas are static module-level types, so caching per type is bounded
    return TypeAdapter(schema)


def _format_location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def _format_received(value: Any) -> str:
    text = repr(value)
    if len(text) > MAX_RECEIVED_REPR:
        text = text[: MAX_RECEIVED_REPR - 3] + "..."
    return text


def failure_from_pydantic(schema: Any, exc: PydanticValidationError) -> ValidationFailure:
    errors = tuple(
        FieldError(
            location=_format_location(error["loc"]),
            message=error["msg"],
            error_type=error["type"],
            received=_format_received(error.get("input")),
        )
        for error in exc.errors()
    )
    return ValidationFailure(schema_name=schema_name(schema), errors=errors)


def validate_payload(schema: type[T], raw: Any) -> Validated[T] | ValidationFailure:
    """Match decoded JSON against ``schema``.

    Args:
        schema: Any type pydantic can validate (model, generic envelope,
            ``list[Model]``, ...)
        raw: Output of ``json.loads`` / ``Response.json()``

    Returns:
        ``Validated`` on success, ``ValidationFailure`` otherwise. Shape
        errors never raise.
    """
    try:
        value = _adapter(schema).validate_python(raw)
    except PydanticValidationError as exc:
        return failure_from_pydantic(schema, exc)
    return Validated(value=value)
