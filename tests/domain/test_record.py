"""Tests for the Record base contract, extend(), and Contract validation."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from recordkit.domain.errors import ValidationError
from recordkit.domain.record import (
    RECORD,
    Contract,
    FieldSpec,
    SchemaModel,
    defaulted,
    extend,
    optional,
    required,
    stamped,
)
from recordkit.domain.types import Timestamp, UuidStr, non_empty, text

IdFactory = Callable[[], str]

EXTENDED = extend(RECORD, "Extended", {"extra_field": required(str)})


class Address(SchemaModel):
    street_name: str
    post_code: str | None = None


LOCATED = extend(
    RECORD,
    "Located",
    {
        "home": optional(Address),
        "previous": defaulted(list[Address], []),
        "by_label": defaulted(dict[str, Address], {}),
    },
)


class TestRecordValidation:
    def test_valid_uuid_and_timestamp(self, now: datetime) -> None:
        uid = str(uuid.uuid4())
        value = RECORD.validate({"id": uid, "createdAt": "2024-01-01T00:00:00Z"}, now=now)
        assert value.id == uid
        assert value.created_at == datetime(2024, 1, 1, tzinfo=UTC)
        assert value.updated_at is None

    def test_uppercase_uuid_kept_as_given(self) -> None:
        uid = str(uuid.uuid4()).upper()
        assert RECORD.validate({"id": uid}).id == uid

    def test_uuid_object_is_accepted(self) -> None:
        uid = uuid.uuid4()
        assert RECORD.validate({"id": uid}).id == str(uid)

    def test_missing_id_names_id(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"createdAt": "2024-01-01T00:00:00Z"})
        assert exc_info.value.fields == ["id"]
        assert exc_info.value.violations[0].rule == "required"

    @pytest.mark.parametrize(
        "bad", ["not-a-uuid", "1234", "", "zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz"]
    )
    def test_malformed_id(self, bad: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"id": bad})
        (violation,) = exc_info.value.violations
        assert violation.field == "id"
        assert violation.rule == "uuid"

    def test_non_string_id_is_a_type_violation(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"id": 42})
        assert exc_info.value.violations[0].rule == "type"

    def test_empty_input_has_exactly_one_violation(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({})
        assert len(exc_info.value.violations) == 1
        assert exc_info.value.violations[0].field == "id"

    def test_omitted_created_at_defaults_to_now(self, new_id: IdFactory, now: datetime) -> None:
        value = RECORD.validate({"id": new_id()}, now=now)
        assert value.created_at == now

    def test_default_is_read_per_call(self, new_id: IdFactory, now: datetime) -> None:
        later = now + timedelta(hours=1)
        first = RECORD.validate({"id": new_id()}, now=now)
        second = RECORD.validate({"id": new_id()}, now=later)
        assert first.created_at == now
        assert second.created_at == later

    def test_omitted_now_reads_the_clock(self, new_id: IdFactory) -> None:
        before = datetime.now(UTC)
        value = RECORD.validate({"id": new_id()})
        after = datetime.now(UTC)
        assert before <= value.created_at <= after

    def test_invalid_updated_at_names_updated_at(self, new_id: IdFactory) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"id": new_id(), "updatedAt": "not-a-date"})
        (violation,) = exc_info.value.violations
        assert violation.field == "updatedAt"
        assert violation.rule == "timestamp"

    @pytest.mark.parametrize("epoch", [0, 1700000000, "1700000000"])
    def test_epoch_created_at_is_rejected(self, new_id: IdFactory, epoch: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"id": new_id(), "createdAt": epoch})
        (violation,) = exc_info.value.violations
        assert violation.field == "createdAt"
        assert violation.rule == "timestamp"

    def test_invalid_created_at_is_not_replaced(self, new_id: IdFactory) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"id": new_id(), "createdAt": "yesterday"})
        assert exc_info.value.fields == ["createdAt"]

    def test_snake_case_keys_are_accepted(self, new_id: IdFactory, now: datetime) -> None:
        value = RECORD.validate({"id": new_id(), "created_at": now, "updated_at": now})
        assert value.created_at == now
        assert value.updated_at == now

    def test_non_mapping_input(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate(["not", "a", "mapping"])
        (violation,) = exc_info.value.violations
        assert violation.field == ""
        assert violation.rule == "type"

    def test_value_is_frozen(self, new_id: IdFactory) -> None:
        value = RECORD.validate({"id": new_id()})
        with pytest.raises(Exception):
            value.id = new_id()  # type: ignore[misc]

    def test_revalidation_is_idempotent(self, new_id: IdFactory, now: datetime) -> None:
        value = EXTENDED.validate({"id": new_id(), "extraField": "x"}, now=now)
        assert EXTENDED.validate(value, now=now + timedelta(days=1)) == value
        assert EXTENDED.validate(EXTENDED.dump(value)) == value


class TestUnknownKeys:
    def test_ignored_by_default(self, new_id: IdFactory) -> None:
        value = RECORD.validate({"id": new_id(), "colour": "blue"})
        assert "colour" not in RECORD.dump(value)

    def test_rejected_on_request(self, new_id: IdFactory) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"id": new_id(), "colour": "blue"}, reject_unknown=True)
        (violation,) = exc_info.value.violations
        assert violation.field == "colour"
        assert violation.rule == "unknown"

    def test_reported_alongside_other_violations(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RECORD.validate({"colour": "blue"}, reject_unknown=True)
        assert exc_info.value.fields == ["id", "colour"]

    def test_snake_case_names_are_known(self, new_id: IdFactory, now: datetime) -> None:
        value = RECORD.validate({"id": new_id(), "created_at": now}, reject_unknown=True)
        assert value.created_at == now

    def test_nested_object(self, new_id: IdFactory) -> None:
        raw = {"id": new_id(), "home": {"streetName": "Main", "floor": 2}}
        with pytest.raises(ValidationError) as exc_info:
            LOCATED.validate(raw, reject_unknown=True)
        (violation,) = exc_info.value.violations
        assert violation.field == "home.floor"
        assert violation.rule == "unknown"

    def test_list_items_and_dict_values(self, new_id: IdFactory) -> None:
        raw = {
            "id": new_id(),
            "previous": [{"streetName": "Old"}, {"streetName": "Older", "city": "x"}],
            "byLabel": {"work": {"streetName": "Dock", "desk": 4}},
        }
        with pytest.raises(ValidationError) as exc_info:
            LOCATED.validate(raw, reject_unknown=True)
        assert exc_info.value.fields == ["previous.1.city", "byLabel.work.desk"]

    def test_nested_snake_case_names_are_known(self, new_id: IdFactory) -> None:
        raw = {"id": new_id(), "home": {"street_name": "Main", "post_code": "N1"}}
        value = LOCATED.validate(raw, reject_unknown=True)
        assert value.home.post_code == "N1"

    def test_nested_keys_ignored_by_default(self, new_id: IdFactory) -> None:
        raw = {"id": new_id(), "home": {"streetName": "Main", "floor": 2}}
        assert LOCATED.validate(raw).home.street_name == "Main"


class TestExtend:
    def test_accepts_extra_field(self, new_id: IdFactory, now: datetime) -> None:
        value = EXTENDED.validate({"id": new_id(), "createdAt": now, "extraField": "x"})
        assert value.extra_field == "x"

    def test_missing_extension_field_is_named(self, new_id: IdFactory) -> None:
        with pytest.raises(ValidationError) as exc_info:
            EXTENDED.validate({"id": new_id()})
        assert exc_info.value.fields == ["extraField"]

    def test_base_fields_validate_identically(self) -> None:
        raw = {"id": "nope", "updatedAt": "nope"}
        with pytest.raises(ValidationError) as base_exc:
            RECORD.validate(raw)
        with pytest.raises(ValidationError) as ext_exc:
            EXTENDED.validate({**raw, "extraField": "x"})
        assert base_exc.value.violations == ext_exc.value.violations

    def test_violations_are_aggregated(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            EXTENDED.validate({"id": "nope", "updatedAt": "nope"})
        assert exc_info.value.fields == ["id", "updatedAt", "extraField"]

    def test_base_is_unchanged(self) -> None:
        assert "extra_field" not in RECORD.fields
        assert set(EXTENDED.fields) == {"id", "created_at", "updated_at", "extra_field"}

    def test_extension_wins_on_collision(self, now: datetime) -> None:
        loose = extend(RECORD, "LooseId", {"id": required(str)})
        assert loose.validate({"id": "not-a-uuid"}, now=now).id == "not-a-uuid"
        assert RECORD.fields["id"].annotation is UuidStr

    def test_collision_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="recordkit.domain.record"):
            extend(RECORD, "Restamped", {"created_at": stamped("Creation time.")})
        assert "created_at" in caplog.text

    def test_extensions_compose(self, new_id: IdFactory) -> None:
        twice = extend(EXTENDED, "Twice", {"second": defaulted(int, 2)})
        value = twice.validate({"id": new_id(), "extraField": "x"})
        assert value.extra_field == "x"
        assert value.second == 2

    def test_fields_mapping_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            RECORD.fields["new"] = required(str)  # type: ignore[index]


class TestNestedPaths:
    def test_list_item_paths(self, new_id: IdFactory) -> None:
        group = extend(RECORD, "Group", {"members": required(non_empty(UuidStr, min_items=2))})
        with pytest.raises(ValidationError) as exc_info:
            group.validate({"id": new_id(), "members": [new_id(), "bad"]})
        (violation,) = exc_info.value.violations
        assert violation.field == "members.1"
        assert violation.rule == "uuid"

    def test_min_items(self, new_id: IdFactory) -> None:
        group = extend(RECORD, "Group", {"members": required(non_empty(UuidStr, min_items=2))})
        with pytest.raises(ValidationError) as exc_info:
            group.validate({"id": new_id(), "members": [new_id()]})
        assert exc_info.value.violations[0].rule == "min_items"


class TestIntrospection:
    def test_field_names_are_wire_names(self) -> None:
        assert EXTENDED.field_names == ["id", "createdAt", "updatedAt", "extraField"]

    def test_required_fields(self) -> None:
        assert EXTENDED.required_fields == ["id", "extraField"]

    def test_describe_rows(self) -> None:
        rows = {row["name"]: row for row in RECORD.describe()}
        assert rows["id"]["type"] == "uuid"
        assert rows["id"]["required"] is True
        assert rows["createdAt"]["default"] == "<now>"
        assert rows["createdAt"]["required"] is False
        assert rows["updatedAt"]["type"] == "date-time"

    def test_json_schema_uses_wire_names(self) -> None:
        schema = EXTENDED.json_schema()
        assert schema["title"] == "Extended"
        assert "extraField" in schema["properties"]
        assert "id" in schema["required"]

    def test_explicit_alias(self, new_id: IdFactory) -> None:
        ips = FieldSpec(list[str] | None, default=None, alias="allowedIPs")
        contract = extend(RECORD, "Aliased", {"allowed_ips": ips})
        value = contract.validate({"id": new_id(), "allowedIPs": ["10.0.0.1"]})
        assert value.allowed_ips == ["10.0.0.1"]
        assert contract.dump(value)["allowedIPs"] == ["10.0.0.1"]

    def test_model_is_built_once(self) -> None:
        assert EXTENDED.model is EXTENDED.model

    def test_contracts_compare_by_identity(self) -> None:
        copy = Contract(name=RECORD.name, fields=RECORD.fields)
        assert copy != RECORD


class TestCheck:
    def test_valid(self, new_id: IdFactory) -> None:
        result = RECORD.check({"id": new_id()})
        assert result.valid is True
        assert result.violations == []

    def test_invalid(self) -> None:
        result = RECORD.check({})
        assert result.valid is False
        assert result.value is None
        assert result.errors == ["id: is required"]


class TestRevise:
    def test_stamps_updated_at(self, new_id: IdFactory, now: datetime) -> None:
        note = extend(RECORD, "Memo", {"body": required(text("Body is required."))})
        original = note.validate({"id": new_id(), "body": "draft"}, now=now)
        later = now + timedelta(minutes=5)
        revised = note.revise(original, {"body": "final"}, now=later)
        assert revised.body == "final"
        assert revised.updated_at == later
        assert revised.created_at == now
        assert original.body == "draft"
        assert original.updated_at is None

    def test_invalid_change_raises(self, new_id: IdFactory) -> None:
        note = extend(RECORD, "Memo", {"body": required(text("Body is required."))})
        original = note.validate({"id": new_id(), "body": "draft"})
        with pytest.raises(ValidationError) as exc_info:
            note.revise(original, {"body": ""})
        assert exc_info.value.violations[0].message == "Body is required."


class TestFieldHelpers:
    def test_required(self) -> None:
        assert required(str).is_required is True

    def test_optional(self) -> None:
        spec = optional(Timestamp)
        assert spec.is_required is False
        assert spec.default is None

    def test_stamped(self) -> None:
        spec = stamped()
        assert spec.default_now is True
        assert spec.is_required is False
