"""
Admission Applications Service Layer

Business logic for the admission form:

1. Resolve aliased input fields into canonical names
2. Validate and normalize (date of birth, phone numbers, emails)
3. Generate the external application reference
4. Persist the application row
5. Notify the admissions office (best-effort)

Validation errors are the only failure allowed before a side effect. Once the
row is committed the submission is a success, whatever happens to the email.
"""

import contextlib
import logging
import secrets
import string
from collections.abc import Mapping
from datetime import date, datetime
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.email import send_application_notification
from app.modules.applications import repository
from app.modules.applications.schemas import (
    APPLICATION_FIELD_ALIASES,
    APPLICATION_FIELD_DEFAULTS,
    ApplicationCreate,
    ApplicationSubmitted,
    ApplicationSummary,
)
from app.modules.applications.validation import validate_application
from app.modules.forms.errors import PersistenceError, SubmissionValidationError
from app.modules.forms.fields import resolve_fields
from app.modules.forms.normalizers import format_phone_for_display

logger = logging.getLogger(__name__)

# Constants
APPLICATION_ID_PREFIX = "APP"
APPLICATION_ID_SUFFIX_LENGTH = 6
_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
MAX_ID_ATTEMPTS = 5

SAVE_FAILED_MESSAGE = "We could not save your application. Please try again later."


def generate_application_id(now: datetime | None = None) -> str:
    """
    Generate an external application reference.

    Format: ``APP`` + ``YYYYMMDD`` (school timezone) + 6 uppercase alphanumerics,
    e.g. ``APP20240115X7K2QD``.
    """
    now = now or datetime.now(ZoneInfo(settings.app_timezone))
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(APPLICATION_ID_SUFFIX_LENGTH))
    return f"{APPLICATION_ID_PREFIX}{now:%Y%m%d}{suffix}"


async def _allocate_application_id(db: AsyncSession) -> str:
    """Generate a reference that is not already taken."""
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = generate_application_id()
        if await repository.get_by_application_id(db, candidate) is None:
            return candidate
        logger.warning(f"Application id collision on {candidate}, regenerating")
    # application_id carries a unique constraint
    return generate_application_id()


def _build_create(values: Mapping[str, str], application_id: str, ip_address: str | None) -> ApplicationCreate:
    return ApplicationCreate(
        application_id=application_id,
        full_name=values["full_name"],
        date_of_birth=date.fromisoformat(values["dob"]),
        religion=values["religion"],
        class_interest=values["class_interest"],
        gender=values["gender"],
        address=values["address"],
        nationality=values["nationality"],
        state=values["state"],
        city=values["city"],
        student_phone=values.get("student_phone") or None,
        student_email=values.get("student_email") or None,
        mother_name=values["mother_name"],
        father_name=values["father_name"],
        mother_phone=values["mother_phone"],
        father_phone=values["father_phone"],
        parent_email=values["parent_email"],
        parent_address=values["parent_address"],
        ip_address=ip_address,
    )


def _build_summary(data: ApplicationCreate, database_id: int | None) -> ApplicationSummary:
    return ApplicationSummary(
        application_id=data.application_id,
        database_id=database_id,
        full_name=data.full_name,
        dob=data.date_of_birth.isoformat(),
        religion=data.religion,
        class_interest=data.class_interest,
        gender=data.gender,
        nationality=data.nationality,
        state=data.state,
        city=data.city,
        mother_name=data.mother_name,
        father_name=data.father_name,
        parent_email=data.parent_email,
        parent_address=data.parent_address,
        student_phone=data.student_phone,
        student_email=data.student_email,
        mother_phone=data.mother_phone or None,
        father_phone=data.father_phone or None,
        address=data.address or None,
    )


def _notification_rows(data: ApplicationCreate) -> list[tuple[str, str]]:
    """Label/value pairs shown in the admissions email."""
    return [
        ("Student Name", data.full_name),
        ("Date of Birth", data.date_of_birth.isoformat()),
        ("Gender", data.gender),
        ("Class of Interest", data.class_interest),
        ("Religion", data.religion),
        ("Nationality", data.nationality),
        ("State", data.state),
        ("City", data.city),
        ("Residential Address", data.address),
        ("Student Phone", format_phone_for_display(data.student_phone or "")),
        ("Student Email", data.student_email or ""),
        ("Mother's Name", data.mother_name),
        ("Mother's Phone", format_phone_for_display(data.mother_phone)),
        ("Father's Name", data.father_name),
        ("Father's Phone", format_phone_for_display(data.father_phone)),
        ("Parent Email", data.parent_email),
        ("Parent Address", data.parent_address),
    ]


async def submit_application(
    db: AsyncSession,
    payload: Mapping[str, str],
    ip_address: str | None = None,
) -> ApplicationSubmitted:
    """
    Run the admission pipeline for one submission.

    Args:
        db: Database session
        payload: Flat input mapping from the request body
        ip_address: Caller address stored with the row

    Returns:
        ApplicationSubmitted with the reference, email outcome and summary

    Raises:
        SubmissionValidationError: If any blocking validation error was found
        PersistenceError: If the row could not be written
    """
    fields = resolve_fields(payload, APPLICATION_FIELD_ALIASES, APPLICATION_FIELD_DEFAULTS)
    result = validate_application(fields)

    if not result.is_valid:
        logger.info(f"Application rejected with {len(result.errors)} validation error(s)")
        raise SubmissionValidationError(result.errors, result.warnings)

    try:
        application_id = await _allocate_application_id(db)
        data = _build_create(result.values, application_id, ip_address)
        application = await repository.create(db, data)
    except (SQLAlchemyError, OSError) as e:
        logger.exception(f"Database insert error for application: {e}")
        with contextlib.suppress(SQLAlchemyError):
            await db.rollback()
        raise PersistenceError(SAVE_FAILED_MESSAGE) from e

    logger.info(f"Application saved successfully. ID: {application.id}, App ID: {application_id}")

    # Send notification (non-blocking - log error but don't fail the request)
    email_sent = False
    try:
        email_sent = await send_application_notification(
            application_id=application_id,
            student_name=data.full_name,
            rows=_notification_rows(data),
            reply_to=data.parent_email,
            reply_to_name=f"{data.mother_name} / {data.father_name}",
        )
        if not email_sent:
            logger.error(f"Failed to send admissions notification for {application_id}")
    except Exception as e:
        logger.error(f"Exception sending admissions notification for {application_id}: {e}")

    return ApplicationSubmitted(
        application_id=application_id,
        database_id=application.id,
        email_sent=email_sent,
        warnings=result.warnings,
        data=_build_summary(data, application.id),
    )
