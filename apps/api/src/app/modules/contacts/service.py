"""
Contact Messages Service Layer

Resolves, validates and stores a contact form message, then forwards it to
the school inbox. Forwarding is best-effort.
"""

import contextlib
import logging
from collections.abc import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.email import send_contact_notification
from app.modules.contacts import repository
from app.modules.contacts.schemas import (
    CONTACT_FIELD_ALIASES,
    ContactCreate,
    ContactSubmitted,
    ContactSummary,
)
from app.modules.contacts.validation import validate_contact
from app.modules.forms.errors import PersistenceError, SubmissionValidationError
from app.modules.forms.fields import resolve_fields
from app.modules.forms.normalizers import format_phone_for_display, is_valid_phone

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "We could not save your message. Please try again later."
RESPONSE_MESSAGE_LIMIT = 200


def _truncate(message: str, limit: int = RESPONSE_MESSAGE_LIMIT) -> str:
    if len(message) > limit:
        return message[:limit] + "..."
    return message


async def submit_contact(
    db: AsyncSession,
    payload: Mapping[str, str],
    ip_address: str | None = None,
) -> ContactSubmitted:
    """
    Run the contact pipeline for one submission.

    Raises:
        SubmissionValidationError: If any blocking validation error was found
        PersistenceError: If the row could not be written
    """
    fields = resolve_fields(payload, CONTACT_FIELD_ALIASES)
    result = validate_contact(fields)

    if not result.is_valid:
        logger.info(f"Contact message rejected with {len(result.errors)} validation error(s)")
        raise SubmissionValidationError(result.errors, result.warnings)

    values = result.values
    data = ContactCreate(
        name=values["name"],
        email=values["email"],
        phone=values["phone"] or None,
        subject=values["subject"],
        message=values["message"],
        ip_address=ip_address,
    )

    try:
        contact = await repository.create(db, data)
    except (SQLAlchemyError, OSError) as e:
        logger.exception(f"Database insert error for contact message: {e}")
        with contextlib.suppress(SQLAlchemyError):
            await db.rollback()
        raise PersistenceError(SAVE_FAILED_MESSAGE) from e

    logger.info(f"Contact saved with ID: {contact.id}")

    email_sent = False
    try:
        display_phone = data.phone
        if display_phone and is_valid_phone(display_phone):
            display_phone = format_phone_for_display(display_phone)
        email_sent = await send_contact_notification(
            name=data.name,
            email=data.email,
            subject=data.subject,
            message=data.message,
            phone=display_phone,
        )
        if not email_sent:
            logger.error(f"Failed to forward contact message {contact.id}")
    except Exception as e:
        logger.error(f"Exception forwarding contact message {contact.id}: {e}")

    return ContactSubmitted(
        contact_id=contact.id,
        email_sent=email_sent,
        warnings=result.warnings,
        data=ContactSummary(
            contact_id=contact.id,
            name=data.name,
            email=data.email,
            subject=data.subject,
            phone=data.phone,
            message=_truncate(data.message),
        ),
    )
