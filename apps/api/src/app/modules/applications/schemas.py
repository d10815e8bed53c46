"""
Admission Applications Schemas

Input aliases for the admission form and Pydantic schemas for the validated
record and the response summary.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict

# Canonical field -> accepted input names, in precedence order.
# Generic names (``name``, ``phone``, ``email``) come after form-specific ones.
APPLICATION_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "full_name": ("fullName", "full_name", "name"),
    "dob": ("dob", "dateOfBirth", "birth_date", "birthdate"),
    "religion": ("religion",),
    "class_interest": ("classInterest", "class_interest", "class"),
    "gender": ("gender", "sex"),
    "address": ("address", "home_address"),
    "nationality": ("nationality", "country"),
    "state": ("state", "province", "region"),
    "city": ("city", "town"),
    "student_phone": ("studentPhone", "student_phone", "phone"),
    "student_email": ("studentEmail", "student_email"),
    "mother_name": ("motherName", "mother_name", "mother"),
    "father_name": ("fatherName", "father_name", "father"),
    "mother_phone": ("motherPhone", "mother_phone", "mother_contact"),
    "father_phone": ("fatherPhone", "father_phone", "father_contact"),
    "parent_email": ("parentEmail", "parent_email", "email"),
    "parent_address": ("parentAddress", "parent_address"),
}

APPLICATION_FIELD_DEFAULTS: dict[str, str] = {
    "nationality": "Nigeria",
}


class ApplicationCreate(BaseModel):
    """Validated, normalized application ready for insertion."""

    application_id: str
    full_name: str
    date_of_birth: date
    religion: str
    class_interest: str
    gender: str
    address: str
    nationality: str
    state: str
    city: str
    student_phone: str | None = None
    student_email: str | None = None
    mother_name: str
    father_name: str
    mother_phone: str
    father_phone: str
    parent_email: str
    parent_address: str
    ip_address: str | None = None


class ApplicationSummary(BaseModel):
    """``data`` block of a successful application response."""

    model_config = ConfigDict(from_attributes=True)

    application_id: str
    database_id: int | None = None
    full_name: str
    dob: str
    religion: str
    class_interest: str
    gender: str
    nationality: str
    state: str
    city: str
    mother_name: str
    father_name: str
    parent_email: str
    parent_address: str
    student_phone: str | None = None
    student_email: str | None = None
    mother_phone: str | None = None
    father_phone: str | None = None
    address: str | None = None


class ApplicationSubmitted(BaseModel):
    """Outcome of the submission pipeline, before it becomes an envelope."""

    application_id: str
    database_id: int | None = None
    email_sent: bool
    warnings: dict[str, str]
    data: ApplicationSummary
