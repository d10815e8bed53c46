"""
Admission Applications Router

Public endpoint for the website's admission form. Accepts JSON or form
bodies and always answers with the JSON envelope.

Endpoints:
- POST /submit_application - Submit an admission application
- OPTIONS /submit_application - CORS preflight
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
from app.modules.applications import service
from app.modules.forms.errors import SubmissionError, SubmissionValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = (
    "Application submitted successfully! "
    "Our admissions team will contact you within 2-3 business days."
)


@router.post(
    "/submit_application",
    summary="Submit Admission Application",
    description="""
Submit a student admission application.

Accepts `application/json` or form-encoded bodies. Field names may use the
HTML form names (`fullName`, `parentEmail`) or the storage names
(`full_name`, `parent_email`).

**Responses:**
- 200: saved; `application_id`, `emailSent`, `warnings`, `databaseSaved`, `data`
- 400: malformed JSON body
- 422: validation errors in `errors` (keyed by form field)
- 500: the application could not be saved
""",
)
async def submit_application(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> EnvelopeResponse:
    """
    Submit an admission application.

    Args:
        request: Incoming request (JSON or form body)
        db: Database session (injected)

    Returns:
        JSON envelope with the application reference on success
    """
    try:
        payload = await read_submission(request)
    except MalformedBodyError as e:
        return envelope(e.status_code, e.message)

    try:
        outcome = await service.submit_application(db, payload, ip_address=client_ip(request))
    except SubmissionValidationError as e:
        logger.info(f"Application validation failed: {sorted(e.errors)}")
        return envelope(e.status_code, e.message, errors=e.errors, warnings=e.warnings)
    except SubmissionError as e:
        logger.error(f"Application service error: {e.message}")
        return envelope(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected error submitting application: {e}")
        return envelope(500, "An unexpected error occurred. Please try again later.")

    return envelope(
        200,
        SUCCESS_MESSAGE,
        application_id=outcome.application_id,
        emailSent=outcome.email_sent,
        warnings=outcome.warnings,
        databaseSaved=True,
        data=outcome.data.model_dump(exclude_none=True),
    )


@router.options("/submit_application", include_in_schema=False)
async def submit_application_preflight() -> Response:
    return preflight_response()


@router.api_route(
    "/submit_application",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def submit_application_wrong_method() -> EnvelopeResponse:
    return method_not_allowed()
