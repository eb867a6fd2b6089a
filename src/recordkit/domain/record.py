"""Record base contract and the ``extend`` composition pattern.

A :class:`Contract` is an immutable value: a name plus a mapping of field
names to :class:`FieldSpec` definitions.  Domain contracts are produced by
:func:`extend`, which merges field maps (extension entries win on a name
collision) and returns a new contract.  There is no class hierarchy
between contracts; the pydantic model behind each one is generated from
its merged field map on first use.

Validation is a pure function of ``(raw, now)``:

- fields declared with ``default_now=True`` receive *now* when absent,
- every field is checked and every failure is collected,
- the result is a frozen model instance or a
  :class:`~recordkit.domain.errors.ValidationError`.

INVARIANT: "now" defaults are substituted per validation call, never at
contract declaration time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import cached_property
from types import MappingProxyType, UnionType
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticUndefined

from recordkit.domain.errors import ValidationError, ValidationResult, Violation, format_path
from recordkit.domain.types import Timestamp, UuidStr

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Read the system clock as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class SchemaModel(BaseModel):
    """Base for every generated record model and embedded object.

    Attributes are snake_case; raw documents use camelCase wire names.
    Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Field definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSpec:
    """Declarative definition of one contract field.

    Attributes:
        annotation: Python type (usually from :mod:`recordkit.domain.types`).
        default: Default value, or ``PydanticUndefined`` when required.
        default_factory: Callable producing a fresh default (lists, dicts).
        default_now: Substitute the validation-time clock when absent.
        description: Human description, exported to JSON Schema.
        alias: Wire name override; camelCase of the attribute otherwise.
    """

    annotation: Any
    default: Any = PydanticUndefined
    default_factory: Callable[[], Any] | None = None
    default_now: bool = False
    description: str | None = None
    alias: str | None = None

    @property
    def is_required(self) -> bool:
        return (
            self.default is PydanticUndefined
            and self.default_factory is None
            and not self.default_now
        )

    def to_field_info(self) -> Any:
        kwargs: dict[str, Any] = {"description": self.description}
        if self.alias is not None:
            kwargs["alias"] = self.alias
        if self.default_now:
            return Field(default_factory=utc_now, **kwargs)
        if self.default_factory is not None:
            return Field(default_factory=self.default_factory, **kwargs)
        return Field(default=self.default, **kwargs)


def required(annotation: Any, description: str | None = None) -> FieldSpec:
    """A field that must be present."""
    return FieldSpec(annotation, description=description)


def optional(annotation: Any, description: str | None = None) -> FieldSpec:
    """A field that may be absent; absent values validate to ``None``."""
    return FieldSpec(annotation | None, default=None, description=description)


def defaulted(annotation: Any, default: Any, description: str | None = None) -> FieldSpec:
    """A field that takes *default* when absent."""
    return FieldSpec(annotation, default=default, description=description)


def stamped(description: str | None = None) -> FieldSpec:
    """A timestamp field that defaults to the validation-time clock."""
    return FieldSpec(Timestamp, default_now=True, description=description)


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Contract:
    """An immutable, named set of validated fields.

    Construct base contracts directly and derive the rest with
    :func:`extend`.  Contracts compare by identity.
    """

    name: str
    fields: Mapping[str, FieldSpec]
    doc: str | None = None
    _aliases: Mapping[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(
            self,
            "_aliases",
            MappingProxyType(
                {name: spec.alias or to_camel(name) for name, spec in self.fields.items()}
            ),
        )

    @cached_property
    def model(self) -> type[SchemaModel]:
        """The frozen pydantic model generated from :attr:`fields`."""
        definitions = {
            name: (spec.annotation, spec.to_field_info()) for name, spec in self.fields.items()
        }
        model: type[SchemaModel] = create_model(  # type: ignore[call-overload]
            self.name,
            __base__=SchemaModel,
            __doc__=self.doc,
            __module__=__name__,
            **definitions,
        )
        return model

    # --- Introspection ---

    @property
    def field_names(self) -> list[str]:
        """Wire (camelCase) names in declaration order."""
        return list(self._aliases.values())

    @property
    def required_fields(self) -> list[str]:
        """Wire names of fields that must be supplied."""
        return [self._aliases[n] for n, spec in self.fields.items() if spec.is_required]

    def wire_name(self, name: str) -> str:
        return self._aliases[name]

    def describe(self) -> list[dict[str, Any]]:
        """Per-field summary used by the CLI contract table."""
        rows: list[dict[str, Any]] = []
        properties = self.json_schema().get("properties", {})
        for name, spec in self.fields.items():
            alias = self._aliases[name]
            if spec.default_now:
                default: Any = "<now>"
            elif spec.default is not PydanticUndefined and spec.default is not None:
                default = spec.default
            else:
                default = None
            rows.append(
                {
                    "name": alias,
                    "attribute": name,
                    "type": _type_label(properties.get(alias, {})),
                    "required": spec.is_required,
                    "default": default,
                    "description": spec.description or "",
                }
            )
        return rows

    def json_schema(self) -> dict[str, Any]:
        """JSON Schema for raw documents (camelCase keys)."""
        return self.model.model_json_schema(by_alias=True)

    # --- Validation ---

    def validate(
        self,
        raw: Any,
        *,
        now: datetime | None = None,
        reject_unknown: bool = False,
    ) -> SchemaModel:
        """Validate *raw* and return a frozen model instance.

        Args:
            raw: Decoded document (mapping) or a previously validated value.
            now: Clock reading used for ``default_now`` fields.  Read from
                the system clock once per call when omitted.
            reject_unknown: Report keys the contract does not declare.

        Raises:
            ValidationError: With every violation found.
        """
        data = self._prepare(raw, now if now is not None else utc_now())
        extra = _unknown_keys(self.model, data) if reject_unknown else []
        try:
            value = self.model.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(self.name, exc, extra) from None
        if extra:
            raise ValidationError(self.name, extra)
        return value

    def check(
        self,
        raw: Any,
        *,
        now: datetime | None = None,
        reject_unknown: bool = False,
    ) -> ValidationResult:
        """Non-raising :meth:`validate`."""
        try:
            value = self.validate(raw, now=now, reject_unknown=reject_unknown)
        except ValidationError as exc:
            return ValidationResult(valid=False, violations=list(exc.violations))
        return ValidationResult(valid=True, value=value)

    def revise(
        self,
        value: SchemaModel,
        changes: Mapping[str, Any],
        *,
        now: datetime | None = None,
    ) -> SchemaModel:
        """Produce a new validated value with *changes* applied.

        ``updatedAt`` is stamped with *now* (the system clock when omitted).
        The original value is left untouched.
        """
        stamp = now if now is not None else utc_now()
        data = self.dump(value)
        for key, new_value in changes.items():
            data[self._aliases.get(key, key)] = new_value
        if "updated_at" in self.fields:
            data[self._aliases["updated_at"]] = stamp
        return self.validate(data, now=stamp)

    def dump(self, value: SchemaModel) -> dict[str, Any]:
        """Serialize *value* to a JSON-compatible dict with wire names."""
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)

    # --- Internals ---

    def _prepare(self, raw: Any, now: datetime) -> Any:
        if isinstance(raw, BaseModel):
            raw = raw.model_dump(by_alias=True, exclude_none=True)
        if not isinstance(raw, Mapping):
            return raw
        data = dict(raw)
        for name, spec in self.fields.items():
            if not spec.default_now:
                continue
            alias = self._aliases[name]
            if alias not in data and name not in data:
                data[alias] = now
        return data


# ---------------------------------------------------------------------------
# Unknown keys
# ---------------------------------------------------------------------------


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _fits(annotation: Any, data: Any) -> bool:
    """Whether *data* has the container shape *annotation* describes."""
    origin = get_origin(annotation)
    if _is_model(annotation) or origin is dict:
        return isinstance(data, Mapping)
    if origin in (list, tuple):
        return isinstance(data, (list, tuple))
    return False


def _tag_mismatches(annotation: Any, data: Any) -> int:
    """Count ``Literal`` fields of a model that *data* contradicts."""
    if not _is_model(annotation) or not isinstance(data, Mapping):
        return 0
    count = 0
    for name, info in annotation.model_fields.items():
        if get_origin(info.annotation) is not Literal:
            continue
        value = data.get(info.alias or name, data.get(name))
        if value is not None and value not in get_args(info.annotation):
            count += 1
    return count


def _unknown_keys(
    annotation: Any, data: Any, path: tuple[int | str, ...] = ()
) -> list[Violation]:
    """Walk *data* against *annotation* and report undeclared object keys.

    Descends into embedded models, lists, tuples and dict values.  For a
    union, the member whose shape and ``Literal`` tags best match *data*
    is walked.
    """
    annotation = _strip_annotated(annotation)
    origin = get_origin(annotation)

    if origin is Union or origin is UnionType:
        members = [
            _strip_annotated(arg) for arg in get_args(annotation) if arg is not type(None)
        ]
        if not members:
            return []
        reports = [_unknown_keys(member, data, path) for member in members]
        best = min(
            range(len(members)),
            key=lambda i: (
                not _fits(members[i], data),
                _tag_mismatches(members[i], data),
                len(reports[i]),
            ),
        )
        return reports[best]

    if _is_model(annotation):
        if not isinstance(data, Mapping):
            return []
        known: dict[Any, Any] = {}
        for name, info in annotation.model_fields.items():
            known[name] = info
            if info.alias:
                known[info.alias] = info
        violations: list[Violation] = []
        for key, value in data.items():
            info = known.get(key)
            if info is None:
                violations.append(
                    Violation(
                        field=format_path((*path, key)),
                        rule="unknown",
                        message="is not a known field",
                    )
                )
            else:
                violations.extend(_unknown_keys(info.annotation, value, (*path, key)))
        return violations

    args = get_args(annotation)
    if origin in (list, tuple) and isinstance(data, (list, tuple)):
        violations = []
        for idx, item in enumerate(data):
            if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
                item_type = args[idx] if idx < len(args) else Any
            else:
                item_type = args[0] if args else Any
            violations.extend(_unknown_keys(item_type, item, (*path, idx)))
        return violations
    if origin is dict and isinstance(data, Mapping) and len(args) == 2:
        violations = []
        for key, value in data.items():
            violations.extend(_unknown_keys(args[1], value, (*path, key)))
        return violations
    return []


def _type_label(schema: Mapping[str, Any]) -> str:
    """Short type name for a JSON Schema property."""
    if "anyOf" in schema:
        labels = [_type_label(s) for s in schema["anyOf"] if s.get("type") != "null"]
        return " | ".join(labels) or "null"
    if "enum" in schema:
        return " | ".join(repr(v) for v in schema["enum"])
    if "const" in schema:
        return repr(schema["const"])
    if "$ref" in schema:
        return str(schema["$ref"]).rsplit("/", 1)[-1]
    kind = schema.get("type")
    if kind == "array":
        return f"array[{_type_label(schema.get('items', {}))}]"
    fmt = schema.get("format")
    if kind == "string" and fmt in {"uuid", "uri", "date-time"}:
        return fmt
    return str(kind or "any")


def extend(
    base: Contract,
    name: str,
    fields: Mapping[str, FieldSpec],
    *,
    doc: str | None = None,
) -> Contract:
    """Return a new contract with *fields* layered on top of *base*.

    The merged field set is ``base.fields | fields``; when *fields*
    redefines a base field the new definition wins.  *base* is unchanged.
    """
    shadowed = sorted(set(base.fields) & set(fields))
    if shadowed:
        logger.debug("Contract %s redefines %s fields: %s", name, base.name, shadowed)
    return Contract(name=name, fields={**base.fields, **fields}, doc=doc)


RECORD = Contract(
    name="Record",
    fields={
        "id": required(UuidStr, "Unique identifier (UUID) of the record."),
        "created_at": stamped("Timestamp when the record was created."),
        "updated_at": optional(Timestamp, "Timestamp when the record was last updated."),
    },
    doc="Identity and audit fields shared by every record.",
)
