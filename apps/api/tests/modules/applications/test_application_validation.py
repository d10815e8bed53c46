"""
Unit tests for the admission form rule table.
"""

from datetime import date

import pytest

from app.modules.applications.schemas import (
    APPLICATION_FIELD_ALIASES,
    APPLICATION_FIELD_DEFAULTS,
)
from app.modules.applications.validation import validate_application
from app.modules.forms.fields import resolve_fields

TODAY = date(2024, 6, 1)


@pytest.fixture
def resolved(valid_application_payload):
    return resolve_fields(
        valid_application_payload, APPLICATION_FIELD_ALIASES, APPLICATION_FIELD_DEFAULTS
    )


class TestValidateApplication:
    """Tests for validate_application."""

    def test_valid_application(self, resolved):
        result = validate_application(resolved, today=TODAY)

        assert result.is_valid
        assert result.warnings == {}
        assert result.values["dob"] == "2015-03-21"
        assert result.values["mother_phone"] == "2348031234567"
        assert result.values["father_phone"] == "2348059876543"

    def test_empty_submission_reports_every_required_field(self):
        fields = resolve_fields({}, APPLICATION_FIELD_ALIASES, APPLICATION_FIELD_DEFAULTS)
        result = validate_application(fields, today=TODAY)

        assert set(result.errors) == {
            "fullName",
            "dob",
            "religion",
            "gender",
            "classInterest",
            "address",
            "state",
            "city",
            "motherName",
            "fatherName",
            "motherPhone",
            "fatherPhone",
            "parentEmail",
            "parentAddress",
        }
        # nationality falls back to its default
        assert "nationality" not in result.errors

    @pytest.mark.parametrize(
        ("field", "error_key", "message"),
        [
            ("full_name", "fullName", "Student full name is required"),
            ("mother_phone", "motherPhone", "Mother's phone number is required"),
            ("parent_email", "parentEmail", "Parent email address is required"),
        ],
    )
    def test_missing_required_field(self, resolved, field, error_key, message):
        resolved[field] = ""
        result = validate_application(resolved, today=TODAY)

        assert result.errors == {error_key: message}

    def test_dob_year_out_of_range(self, resolved):
        resolved["dob"] = "1850-01-01"
        result = validate_application(resolved, today=TODAY)

        assert result.errors == {
            "dob": "Please enter a valid date of birth (YYYY-MM-DD format preferred)"
        }

    def test_dob_day_first_normalized(self, resolved):
        resolved["dob"] = "21/03/2015"
        result = validate_application(resolved, today=TODAY)

        assert result.is_valid
        assert result.values["dob"] == "2015-03-21"

    def test_invalid_parent_phone(self, resolved):
        resolved["father_phone"] = "0803"
        result = validate_application(resolved, today=TODAY)

        assert result.errors == {"fatherPhone": "Father phone number must be 10-15 digits"}

    def test_invalid_parent_email(self, resolved):
        resolved["parent_email"] = "okafor.family"
        result = validate_application(resolved, today=TODAY)

        assert result.errors == {"parentEmail": "Please enter a valid parent email address"}

    def test_short_names_are_warnings(self, resolved):
        resolved["full_name"] = "Bo"
        resolved["mother_name"] = "Jo"
        result = validate_application(resolved, today=TODAY)

        assert result.is_valid
        assert result.warnings == {
            "fullName": "Student name seems very short",
            "motherName": "Mother's name seems very short",
        }

    def test_optional_student_contacts_only_warn(self, resolved):
        resolved["student_email"] = "not-an-email"
        resolved["student_phone"] = "123"
        result = validate_application(resolved, today=TODAY)

        assert result.is_valid
        assert result.warnings == {
            "studentEmail": "Student email format appears incorrect",
            "studentPhone": "Student phone number may be invalid",
        }
