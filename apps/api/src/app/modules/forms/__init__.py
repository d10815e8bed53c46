"""
Forms Module

Shared building blocks for the public form endpoints: alias-based field
resolution, value normalizers, rule-table validation and the submission
error taxonomy.
"""

from .errors import PersistenceError, SubmissionError, SubmissionValidationError
from .fields import resolve_field, resolve_fields
from .validation import FieldKind, FieldRule, ValidationResult, validate_fields

__all__ = [
    "FieldKind",
    "FieldRule",
    "PersistenceError",
    "SubmissionError",
    "SubmissionValidationError",
    "ValidationResult",
    "resolve_field",
    "resolve_fields",
    "validate_fields",
]
