"""
Contact Messages Router

Endpoints:
- POST /submit_contact - Send a message through the contact form
- OPTIONS /submit_contact - CORS preflight
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.intake import MalformedBodyError, client_ip, read_submission
from app.core.responses import (
    EnvelopeResponse,
    envelope,
    method_not_allowed,
    preflight_response,
)
from app.modules.contacts import service
from app.modules.forms.errors import SubmissionError, SubmissionValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "Thank you! Your message has been received. We will contact you shortly."


@router.post(
    "/submit_contact",
    summary="Submit Contact Message",
    description="""
Send a message to the school through the contact form.

Accepts `application/json` or form-encoded bodies with either the HTML field
names (`contactName`, `contactEmail`, ...) or plain names (`name`, `email`, ...).
A missing subject defaults to "General Inquiry" and is reported as a warning.
""",
)
async def submit_contact(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> EnvelopeResponse:
    """Submit a contact form message."""
    try:
        payload = await read_submission(request)
    except MalformedBodyError as e:
        return envelope(e.status_code, e.message)

    try:
        outcome = await service.submit_contact(db, payload, ip_address=client_ip(request))
    except SubmissionValidationError as e:
        logger.info(f"Contact validation failed: {sorted(e.errors)}")
        return envelope(e.status_code, e.message, errors=e.errors, warnings=e.warnings)
    except SubmissionError as e:
        logger.error(f"Contact service error: {e.message}")
        return envelope(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected error submitting contact message: {e}")
        return envelope(500, "An unexpected error occurred. Please try again later.")

    return envelope(
        200,
        SUCCESS_MESSAGE,
        emailSent=outcome.email_sent,
        warnings=outcome.warnings,
        contactId=outcome.contact_id,
        databaseSaved=True,
        data=outcome.data.model_dump(by_alias=True, exclude_none=True),
    )


@router.options("/submit_contact", include_in_schema=False)
async def submit_contact_preflight() -> Response:
    return preflight_response()


@router.api_route(
    "/submit_contact",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def submit_contact_wrong_method() -> EnvelopeResponse:
    return method_not_allowed()
