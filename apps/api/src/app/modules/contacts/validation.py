"""
Contact Form Rules
"""

from collections.abc import Mapping

from app.modules.contacts.schemas import DEFAULT_SUBJECT
from app.modules.forms.validation import FieldKind, FieldRule, ValidationResult, validate_fields

CONTACT_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "name",
        "contactName",
        "Please provide your name",
        min_length=2,
        short_message="Name seems very short",
    ),
    FieldRule(
        "email",
        "contactEmail",
        "Please provide your email address",
        kind=FieldKind.EMAIL,
        invalid_message="Please enter a valid email address",
    ),
    FieldRule(
        "phone",
        "contactPhone",
        required=False,
        kind=FieldKind.PHONE,
        invalid_message="Phone number must be 10-15 digits",
    ),
    FieldRule(
        "message",
        "contactMessage",
        "Please enter your message",
        min_length=10,
        short_message="Message seems very short",
    ),
)


def validate_contact(fields: Mapping[str, str]) -> ValidationResult:
    """Validate resolved contact fields; a blank subject falls back to the default."""
    result = validate_fields(fields, CONTACT_RULES)

    if not result.values.get("subject"):
        result.values["subject"] = DEFAULT_SUBJECT
        result.add_warning("contactSubject", f'No subject provided, using "{DEFAULT_SUBJECT}"')

    return result
