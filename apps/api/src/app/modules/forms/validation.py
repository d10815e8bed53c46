"""
Rule-Table Validation

Each form declares a list of FieldRule entries. ``validate_fields`` runs all of
them in declaration order, collecting blocking errors and advisory warnings
keyed by the HTML field name, and records normalized values for persistence.
"""

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date

from app.modules.forms.normalizers import (
    is_valid_email,
    is_valid_phone,
    normalize_date_of_birth,
    normalize_phone,
)


class FieldKind(str, enum.Enum):
    """How a field's value is checked and normalized."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one canonical field."""

    name: str
    error_key: str
    required_message: str = ""
    required: bool = True
    kind: FieldKind = FieldKind.TEXT
    min_length: int | None = None
    short_message: str = ""
    invalid_message: str = ""


@dataclass
class ValidationResult:
    """Errors block persistence; warnings are reported alongside success."""

    errors: dict[str, str] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)
    values: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, message)

    def add_warning(self, key: str, message: str) -> None:
        self.warnings.setdefault(key, message)


def _reject(result: ValidationResult, rule: FieldRule, message: str) -> None:
    if rule.required:
        result.add_error(rule.error_key, message)
    else:
        result.add_warning(rule.error_key, message)


def _apply_rule(
    result: ValidationResult, rule: FieldRule, value: str, today: date | None
) -> None:
    if not value:
        if rule.required:
            result.add_error(rule.error_key, rule.required_message)
        result.values[rule.name] = ""
        return

    if rule.kind is FieldKind.TEXT:
        if rule.min_length and len(value) < rule.min_length:
            result.add_warning(rule.error_key, rule.short_message)
        result.values[rule.name] = value

    elif rule.kind is FieldKind.EMAIL:
        if not is_valid_email(value):
            _reject(result, rule, rule.invalid_message)
        result.values[rule.name] = value

    elif rule.kind is FieldKind.PHONE:
        normalized = normalize_phone(value)
        if is_valid_phone(normalized):
            result.values[rule.name] = normalized
        else:
            _reject(result, rule, rule.invalid_message)
            # Only canonical digit strings are stored; a rejected optional phone is dropped
            result.values[rule.name] = value if rule.required else ""

    elif rule.kind is FieldKind.DATE:
        normalized = normalize_date_of_birth(value, today=today)
        if normalized is None:
            result.add_error(rule.error_key, rule.invalid_message)
            result.values[rule.name] = value
        else:
            result.values[rule.name] = normalized


def validate_fields(
    fields: Mapping[str, str],
    rules: Sequence[FieldRule],
    today: date | None = None,
) -> ValidationResult:
    """
    Run every rule against the resolved fields.

    No rule short-circuits the pass, so one response carries the full set of
    errors and warnings. Fields without a rule are copied through unchanged.

    Args:
        fields: Canonical field name -> resolved value
        rules: Rules in declaration order
        today: Reference date for date-of-birth bounds

    Returns:
        ValidationResult with errors, warnings and normalized values
    """
    result = ValidationResult()
    for rule in rules:
        _apply_rule(result, rule, fields.get(rule.name, ""), today)

    for name, value in fields.items():
        result.values.setdefault(name, value)

    return result
