"""
Value Normalizers

Date-of-birth parsing, phone canonicalization and email format checks shared
by the admissions and contact forms.
"""

import re
from datetime import date, datetime

from dateutil import parser as date_parser
from email_validator import EmailNotValidError, validate_email

# Tried in order; a format only counts if it reproduces the input exactly
DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y", "%d-%m-%Y", "%m-%d-%Y")
MIN_BIRTH_YEAR = 1900

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15
COUNTRY_CODE = "234"

_NON_DIGITS = re.compile(r"\D")
_LOOSE_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _year_in_range(value: date, today: date) -> bool:
    return MIN_BIRTH_YEAR <= value.year <= today.year


def normalize_date_of_birth(value: str, today: date | None = None) -> str | None:
    """
    Parse a date of birth into ``YYYY-MM-DD``.

    Explicit formats are tried first (ISO, then day-first, then month-first),
    then a permissive parse. The year must lie within [1900, current year].

    Args:
        value: Raw date string
        today: Reference date for the upper year bound (defaults to today)

    Returns:
        The ISO date string, or None if the value is not an acceptable date
    """
    value = value.strip()
    if not value:
        return None
    today = today or date.today()

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt).date()
        except ValueError:
            continue
        if parsed.strftime(fmt) == value and _year_in_range(parsed, today):
            return parsed.isoformat()

    try:
        parsed = date_parser.parse(value).date()
    except (ValueError, OverflowError):
        return None

    if not _year_in_range(parsed, today):
        return None
    return parsed.isoformat()


def normalize_phone(value: str) -> str:
    """
    Canonicalize a phone number to a country-coded digit string.

    - no digits at all: ``""``
    - 11 digits with a leading ``0``: the ``0`` becomes ``234``
    - 10 to 15 digits: the digits unchanged
    - anything else: the stripped input, so validation can reject it
    """
    value = value.strip()
    digits = _NON_DIGITS.sub("", value)
    if not digits:
        return ""

    if len(digits) == 11 and digits.startswith("0"):
        return COUNTRY_CODE + digits[1:]

    if PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        return digits

    return value


def is_valid_phone(normalized: str) -> bool:
    return normalized.isdigit() and PHONE_MIN_DIGITS <= len(normalized) <= PHONE_MAX_DIGITS


def format_phone_for_display(normalized: str) -> str:
    """``2348031234567`` -> ``+2348031234567``; other values pass through."""
    if normalized.isdigit():
        return f"+{normalized}"
    return normalized


def is_valid_email(value: str) -> bool:
    """Accept addresses email-validator accepts, or a plain local@domain.tld."""
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
        return True
    except EmailNotValidError:
        return bool(_LOOSE_EMAIL.match(value))


def is_strict_email(value: str) -> bool:
    """Strict check used before putting an address in a mail header."""
    try:
        validate_email(value, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False
