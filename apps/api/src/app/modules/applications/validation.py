"""
Admission Form Rules

Rule table for the admission form. Error and warning keys are the HTML field
names so the front end can highlight the offending input.
"""

from collections.abc import Mapping
from datetime import date

from app.modules.forms.validation import FieldKind, FieldRule, ValidationResult, validate_fields

APPLICATION_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "full_name",
        "fullName",
        "Student full name is required",
        min_length=3,
        short_message="Student name seems very short",
    ),
    FieldRule(
        "dob",
        "dob",
        "Date of birth is required",
        kind=FieldKind.DATE,
        invalid_message="Please enter a valid date of birth (YYYY-MM-DD format preferred)",
    ),
    FieldRule("religion", "religion", "Religion is required"),
    FieldRule("gender", "gender", "Gender is required"),
    FieldRule("class_interest", "classInterest", "Class of interest is required"),
    FieldRule("address", "address", "Residential address is required"),
    FieldRule("nationality", "nationality", "Nationality is required"),
    FieldRule("state", "state", "State is required"),
    FieldRule("city", "city", "City is required"),
    FieldRule(
        "mother_name",
        "motherName",
        "Mother's name is required",
        min_length=3,
        short_message="Mother's name seems very short",
    ),
    FieldRule(
        "father_name",
        "fatherName",
        "Father's name is required",
        min_length=3,
        short_message="Father's name seems very short",
    ),
    FieldRule(
        "mother_phone",
        "motherPhone",
        "Mother's phone number is required",
        kind=FieldKind.PHONE,
        invalid_message="Mother phone number must be 10-15 digits",
    ),
    FieldRule(
        "father_phone",
        "fatherPhone",
        "Father's phone number is required",
        kind=FieldKind.PHONE,
        invalid_message="Father phone number must be 10-15 digits",
    ),
    FieldRule(
        "parent_email",
        "parentEmail",
        "Parent email address is required",
        kind=FieldKind.EMAIL,
        invalid_message="Please enter a valid parent email address",
    ),
    FieldRule("parent_address", "parentAddress", "Parent address is required"),
    FieldRule(
        "student_email",
        "studentEmail",
        required=False,
        kind=FieldKind.EMAIL,
        invalid_message="Student email format appears incorrect",
    ),
    FieldRule(
        "student_phone",
        "studentPhone",
        required=False,
        kind=FieldKind.PHONE,
        invalid_message="Student phone number may be invalid",
    ),
)


def validate_application(fields: Mapping[str, str], today: date | None = None) -> ValidationResult:
    """Validate resolved admission fields against the rule table."""
    return validate_fields(fields, APPLICATION_RULES, today=today)
