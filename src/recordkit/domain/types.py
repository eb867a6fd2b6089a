"""Reusable field annotations with stable rule names.

Each constrained annotation raises a ``PydanticCustomError`` whose type is
the rule name reported in a :class:`~recordkit.domain.errors.Violation`:

- ``UuidStr`` -> ``uuid``
- ``UrlStr`` / ``url()`` -> ``url``
- ``text()`` -> ``min_length`` / ``max_length``
- ``non_empty()`` -> ``min_items``
- ``at_least()`` -> ``minimum``
- ``Timestamp`` -> ``timestamp`` (datetimes and ISO 8601 strings only)

Validated values keep their input spelling: a UUID stays the string the
caller supplied, a URL is checked but not normalized.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, AnyUrl, BeforeValidator, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def is_uuid(value: str) -> bool:
    """Check whether *value* is a hyphenated 8-4-4-4-12 hex UUID string."""
    return UUID_PATTERN.match(value) is not None


def _coerce_uuid(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    return value


def _check_uuid(value: str) -> str:
    if not is_uuid(value):
        raise PydanticCustomError("uuid", "must be a valid UUID")
    return value


UuidStr = Annotated[
    str,
    BeforeValidator(_coerce_uuid),
    AfterValidator(_check_uuid),
    Field(json_schema_extra={"format": "uuid"}),
]

_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _check_timestamp_input(value: Any) -> Any:
    """Only datetimes and ISO 8601 strings; no epoch numbers."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and _ISO_DATE_PREFIX.match(value):
        return value
    raise PydanticCustomError("timestamp", "must be a valid timestamp")


Timestamp = Annotated[datetime, BeforeValidator(_check_timestamp_input)]


def url(message: str = "must be a valid URL") -> Any:
    """Absolute URL kept as text. *message* overrides the violation text."""

    def check(value: str) -> str:
        try:
            _URL_ADAPTER.validate_python(value)
        except PydanticValidationError:
            raise PydanticCustomError("url", message) from None
        return value

    return Annotated[str, AfterValidator(check), Field(json_schema_extra={"format": "uri"})]


UrlStr = url()


def text(
    message: str | None = None,
    *,
    min_length: int = 1,
    max_length: int | None = None,
) -> Any:
    """Length-bounded string.

    Args:
        message: Violation text for a too-short value.
        min_length: Minimum number of characters (inclusive).
        max_length: Maximum number of characters (inclusive), or None.
    """
    too_short = message or f"must be at least {min_length} character(s)"

    def check(value: str) -> str:
        if len(value) < min_length:
            raise PydanticCustomError("min_length", too_short)
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "max_length", f"must be at most {max_length} character(s)"
            )
        return value

    schema: dict[str, Any] = {"minLength": min_length}
    if max_length is not None:
        schema["maxLength"] = max_length
    return Annotated[str, AfterValidator(check), Field(json_schema_extra=schema)]


def non_empty(item: Any, message: str | None = None, *, min_items: int = 1) -> Any:
    """List of *item* holding at least *min_items* entries."""
    too_few = message or f"must contain at least {min_items} item(s)"

    def check(value: list[Any]) -> list[Any]:
        if len(value) < min_items:
            raise PydanticCustomError("min_items", too_few)
        return value

    return Annotated[
        list[item],  # type: ignore[valid-type]
        AfterValidator(check),
        Field(json_schema_extra={"minItems": min_items}),
    ]


def at_least(minimum: float, message: str | None = None, *, kind: type = float) -> Any:
    """Number of type *kind* no smaller than *minimum*."""
    too_small = message or f"must be at least {minimum}"

    def check(value: float) -> float:
        if value < minimum:
            raise PydanticCustomError("minimum", too_small)
        return value

    return Annotated[kind, AfterValidator(check), Field(json_schema_extra={"minimum": minimum})]
