"""
Request Intake

Content negotiation for form endpoints. JSON bodies and form bodies
(urlencoded or multipart) are reduced to one flat ``dict[str, str]`` before
any business logic runs.
"""

import json
import logging
from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

logger = logging.getLogger(__name__)


class MalformedBodyError(Exception):
    """Raised when the request body cannot be parsed."""

    def __init__(self, message: str = "Invalid JSON format in request."):
        self.message = message
        self.error_code = "MALFORMED_BODY"
        self.status_code = 400
        super().__init__(message)


def _coerce(value: Any) -> str | None:
    """Reduce a scalar input value to a string; None for anything else."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return None


def flatten_fields(data: dict[str, Any]) -> dict[str, str]:
    """Keep only string-representable values, keyed by field name."""
    fields: dict[str, str] = {}
    for key, value in data.items():
        coerced = _coerce(value)
        if coerced is not None:
            fields[str(key)] = coerced
    return fields


def is_json_request(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return "application/json" in content_type.lower()


async def read_submission(request: Request) -> dict[str, str]:
    """
    Parse the request body into a flat field mapping.

    Args:
        request: Incoming request

    Returns:
        Mapping of field name to string value

    Raises:
        MalformedBodyError: If a JSON body is invalid or not an object, or a
            form body cannot be parsed
    """
    content_type = request.headers.get("content-type", "")
    logger.debug(f"Submission content type: {content_type or '<none>'}")

    if is_json_request(request):
        raw = await request.body()
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            logger.warning(f"JSON parse error: {e}")
            raise MalformedBodyError() from e

        if not isinstance(parsed, dict):
            logger.warning(f"JSON body is a {type(parsed).__name__}, expected an object")
            raise MalformedBodyError()

        return flatten_fields(parsed)

    try:
        form = await request.form()
    except (HTTPException, MultiPartException) as e:
        logger.warning(f"Form parse error: {e}")
        raise MalformedBodyError("Invalid form data in request.") from e

    data = {
        key: value for key, value in form.items() if not isinstance(value, UploadFile)
    }
    return flatten_fields(data)


def client_ip(request: Request) -> str:
    """Remote address of the caller, or ``unknown``."""
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
