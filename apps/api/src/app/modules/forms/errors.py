"""
Form Submission Errors

Exceptions raised by the submission services. Routers translate them into
JSON envelopes using ``status_code`` and ``message``.
"""


class SubmissionError(Exception):
    """Base exception for submission service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class SubmissionValidationError(SubmissionError):
    """Raised when a submission has blocking validation errors."""

    def __init__(self, errors: dict[str, str], warnings: dict[str, str] | None = None):
        self.errors = errors
        self.warnings = warnings or {}
        super().__init__(
            message="Please fix the following errors:",
            error_code="VALIDATION_FAILED",
            status_code=422,
        )


class PersistenceError(SubmissionError):
    """Raised when the submission could not be written to the database.

    The message is safe to show to callers; driver details stay in the logs.
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="PERSISTENCE_FAILED",
            status_code=500,
        )
