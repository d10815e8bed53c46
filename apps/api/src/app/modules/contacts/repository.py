"""
Contact Messages Repository
"""

from sqlalchemy.ext.asyncio import AsyncSession

from .models import Contact
from .schemas import ContactCreate


async def create(db: AsyncSession, data: ContactCreate) -> Contact:
    """Insert a contact message and return it with its generated key."""

    new_contact = Contact(
        name=data.name,
        email=data.email,
        phone=data.phone,
        subject=data.subject,
        message=data.message,
        ip_address=data.ip_address,
    )

    db.add(new_contact)
    await db.commit()
    await db.refresh(new_contact)

    return new_contact
