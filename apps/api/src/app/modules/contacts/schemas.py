"""
Contact Messages Schemas
"""

from pydantic import BaseModel, ConfigDict, Field

CONTACT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("contactName", "contact_name", "name", "full_name"),
    "email": ("contactEmail", "contact_email", "email"),
    "phone": ("contactPhone", "contact_phone", "phone", "mobile"),
    "subject": ("contactSubject", "contact_subject", "subject", "title"),
    "message": ("contactMessage", "contact_message", "message", "content"),
}

DEFAULT_SUBJECT = "General Inquiry"


class ContactCreate(BaseModel):
    """Validated contact message ready for insertion."""

    name: str
    email: str
    phone: str | None = None
    subject: str
    message: str
    ip_address: str | None = None


class ContactSummary(BaseModel):
    """``data`` block of a successful contact response."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: int | None = Field(None, serialization_alias="contactId")
    name: str
    email: str
    subject: str
    phone: str | None = None
    message: str | None = None


class ContactSubmitted(BaseModel):
    """Outcome of the contact pipeline, before it becomes an envelope."""

    contact_id: int | None = None
    email_sent: bool
    warnings: dict[str, str]
    data: ContactSummary
