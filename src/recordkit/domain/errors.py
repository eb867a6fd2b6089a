"""ValidationError and Violation — the single failure kind of a contract.

INVARIANT: Validation never partially succeeds. A failed validation
reports every violated rule, not just the first one found.

Violations are translated from pydantic's error list so that callers see
stable rule names (``required``, ``uuid``, ``url``, ``timestamp`` ...)
and camelCase wire paths (``accessManagement.users.0``) regardless of the
pydantic version in use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError

# pydantic error type -> rule name
_RULES: dict[str, str] = {
    "missing": "required",
    "string_too_short": "min_length",
    "string_too_long": "max_length",
    "too_short": "min_items",
    "too_long": "max_items",
    "greater_than_equal": "minimum",
    "greater_than": "minimum",
    "less_than_equal": "maximum",
    "less_than": "maximum",
    "literal_error": "enum",
    "enum": "enum",
    "union_tag_invalid": "enum",
    "union_tag_not_found": "required",
    "extra_forbidden": "unknown",
}

# Error types raised by recordkit.domain.types validators; already rule names.
_CUSTOM_RULES: frozenset[str] = frozenset(
    {"uuid", "url", "min_length", "max_length", "min_items", "minimum", "timestamp"}
)

_MESSAGES: dict[str, str] = {
    "required": "is required",
}


def rule_for(error_type: str) -> str:
    """Map a pydantic error type onto a stable rule name.

    Anything not recognised is reported as ``type``.
    """
    if error_type in _RULES:
        return _RULES[error_type]
    if error_type in _CUSTOM_RULES:
        return error_type
    if error_type.startswith(("datetime", "date_", "time_")):
        return "timestamp"
    return "type"


def format_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic ``loc`` tuple as a dotted field path."""
    return ".".join(str(part) for part in loc)


@dataclass(frozen=True)
class Violation:
    """One failed rule: the field path, the rule name, and a human message."""

    field: str
    rule: str
    message: str

    def __str__(self) -> str:
        if not self.field:
            return self.message
        return f"{self.field}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "rule": self.rule, "message": self.message}


class ValidationError(Exception):
    """Raised when raw input does not satisfy a contract.

    Attributes:
        contract: Name of the contract that rejected the input.
        violations: Every violated rule, in the order they were found.
    """

    def __init__(self, contract: str, violations: list[Violation]) -> None:
        self.contract = contract
        self.violations = tuple(violations)
        count = len(self.violations)
        noun = "violation" if count == 1 else "violations"
        lines = [f"{contract}: {count} {noun}"]
        lines.extend(f"  {v}" for v in self.violations)
        super().__init__("\n".join(lines))

    @property
    def fields(self) -> list[str]:
        """Field paths that failed, without duplicates, in report order."""
        return list(dict.fromkeys(v.field for v in self.violations))

    def to_dict(self) -> dict[str, Any]:
        return {
            "contract": self.contract,
            "violations": [v.to_dict() for v in self.violations],
        }

    @classmethod
    def from_pydantic(
        cls,
        contract: str,
        exc: PydanticValidationError,
        extra: list[Violation] | None = None,
    ) -> ValidationError:
        """Translate a pydantic ``ValidationError`` into a contract error."""
        violations = [violation_from_error(err) for err in exc.errors(include_url=False)]
        if extra:
            violations.extend(extra)
        return cls(contract, violations)


def violation_from_error(err: Any) -> Violation:
    """Build a :class:`Violation` from one entry of ``exc.errors()``."""
    rule = rule_for(str(err["type"]))
    message = _MESSAGES.get(rule, str(err["msg"]))
    if rule == "timestamp":
        message = "must be a valid timestamp"
    return Violation(field=format_path(tuple(err["loc"])), rule=rule, message=message)


@dataclass(frozen=True)
class ValidationResult:
    """Result of a non-raising contract check."""

    valid: bool
    value: Any = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [str(v) for v in self.violations]
