"""Tests for reusable field annotations in recordkit.domain.types."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from recordkit.domain.types import (
    Timestamp,
    UrlStr,
    UuidStr,
    at_least,
    is_uuid,
    non_empty,
    text,
    url,
)


def _error_type(annotation: object, value: object) -> str:
    with pytest.raises(PydanticValidationError) as exc_info:
        TypeAdapter(annotation).validate_python(value)
    return exc_info.value.errors()[0]["type"]


class TestIsUuid:
    def test_hyphenated(self) -> None:
        assert is_uuid(str(uuid.uuid4())) is True

    def test_uppercase(self) -> None:
        assert is_uuid(str(uuid.uuid4()).upper()) is True

    @pytest.mark.parametrize(
        "value",
        ["", "abc", str(uuid.uuid4()).replace("-", ""), "{" + str(uuid.uuid4()) + "}"],
    )
    def test_rejects(self, value: str) -> None:
        assert is_uuid(value) is False


class TestUuidStr:
    def test_accepts_string(self) -> None:
        uid = str(uuid.uuid4())
        assert TypeAdapter(UuidStr).validate_python(uid) == uid

    def test_coerces_uuid_object(self) -> None:
        uid = uuid.uuid4()
        assert TypeAdapter(UuidStr).validate_python(uid) == str(uid)

    def test_rule_name(self) -> None:
        assert _error_type(UuidStr, "nope") == "uuid"

    def test_json_schema_format(self) -> None:
        assert TypeAdapter(UuidStr).json_schema()["format"] == "uuid"


class TestUrl:
    def test_accepts_absolute_url(self) -> None:
        assert TypeAdapter(UrlStr).validate_python("https://example.com/a?b=1") == (
            "https://example.com/a?b=1"
        )

    def test_value_is_not_normalized(self) -> None:
        assert TypeAdapter(UrlStr).validate_python("https://example.com") == "https://example.com"

    def test_rule_name(self) -> None:
        assert _error_type(UrlStr, "not a url") == "url"

    def test_custom_message(self) -> None:
        with pytest.raises(PydanticValidationError) as exc_info:
            TypeAdapter(url("Must be a valid URL.")).validate_python("nope")
        assert exc_info.value.errors()[0]["msg"] == "Must be a valid URL."


class TestText:
    def test_empty_string_fails_min_length(self) -> None:
        assert _error_type(text(), "") == "min_length"

    def test_custom_message(self) -> None:
        with pytest.raises(PydanticValidationError) as exc_info:
            TypeAdapter(text("Title is required.")).validate_python("")
        assert exc_info.value.errors()[0]["msg"] == "Title is required."

    def test_max_length(self) -> None:
        assert _error_type(text(min_length=2, max_length=5), "pt-BR-x") == "max_length"

    def test_within_bounds(self) -> None:
        assert TypeAdapter(text(min_length=2, max_length=5)).validate_python("en") == "en"


class TestNonEmpty:
    def test_min_items(self) -> None:
        assert _error_type(non_empty(str), []) == "min_items"

    def test_item_type_is_checked(self) -> None:
        assert _error_type(non_empty(UuidStr), ["nope"]) == "uuid"

    def test_accepts(self) -> None:
        assert TypeAdapter(non_empty(str, min_items=2)).validate_python(["a", "b"]) == ["a", "b"]


class TestAtLeast:
    def test_minimum(self) -> None:
        assert _error_type(at_least(1), 0) == "minimum"

    def test_boundary_is_inclusive(self) -> None:
        assert TypeAdapter(at_least(1)).validate_python(1) == 1

    def test_int_kind_rejects_fraction(self) -> None:
        assert _error_type(at_least(1, kind=int), 1.5) == "int_from_float"


class TestTimestamp:
    def test_iso_string(self) -> None:
        value = TypeAdapter(Timestamp).validate_python("2024-01-01T00:00:00Z")
        assert value == datetime(2024, 1, 1, tzinfo=UTC)

    def test_datetime(self) -> None:
        moment = datetime(2024, 1, 1, tzinfo=UTC)
        assert TypeAdapter(Timestamp).validate_python(moment) == moment

    @pytest.mark.parametrize("value", [0, 1700000000, 1.5, "1700000000", True])
    def test_epoch_numbers_are_rejected(self, value: object) -> None:
        assert _error_type(Timestamp, value) == "timestamp"

    def test_garbage_string(self) -> None:
        assert _error_type(Timestamp, "yesterday") == "timestamp"
