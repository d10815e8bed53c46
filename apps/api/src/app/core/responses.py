"""
JSON Response Envelope

Every form endpoint answers with the same shape:

    {"status": "success" | "error", "success": bool, "message": str, ...}

Empty ``errors``, ``warnings`` and ``data`` collections are serialized as
``[]`` so callers can rely on the type of those keys.
"""

import json
from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse

from app.core.config import Settings, settings

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Accept, Origin, X-Requested-With",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, DELETE, PUT",
    "Access-Control-Max-Age": "86400",
}

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

HSTS_HEADER = "max-age=31536000; includeSubDomains; preload"

_COLLECTION_KEYS = ("errors", "warnings", "data")


def response_headers(config: Settings = settings) -> dict[str, str]:
    """CORS and security headers sent with every form response."""
    headers = {**CORS_HEADERS, **SECURITY_HEADERS}
    if config.is_production:
        headers["Strict-Transport-Security"] = HSTS_HEADER
    return headers


class EnvelopeResponse(JSONResponse):
    """JSON response with an explicit UTF-8 charset and unescaped unicode."""

    media_type = "application/json; charset=UTF-8"

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False).encode("utf-8")


def build_payload(status_code: int, message: str, **extra: Any) -> dict[str, Any]:
    """Build the envelope body without wrapping it in a response."""
    success = 200 <= status_code < 300
    payload: dict[str, Any] = {
        "status": "success" if success else "error",
        "success": success,
        "message": message,
    }
    payload.update(extra)

    for key in _COLLECTION_KEYS:
        if key in payload and not payload[key]:
            payload[key] = []

    return payload


def envelope(status_code: int, message: str, **extra: Any) -> EnvelopeResponse:
    """
    Serialize the uniform JSON envelope.

    Args:
        status_code: HTTP status code; 2xx maps to ``success``
        message: Human readable message
        **extra: Additional top-level keys (errors, warnings, data, ids, flags)

    Returns:
        EnvelopeResponse with CORS and security headers attached
    """
    return EnvelopeResponse(
        content=build_payload(status_code, message, **extra),
        status_code=status_code,
        headers=response_headers(),
    )


def preflight_response() -> Response:
    """CORS preflight: 200 with no body."""
    return Response(status_code=200, headers=response_headers())


def method_not_allowed() -> EnvelopeResponse:
    return envelope(405, "Please submit the form using POST method.")
