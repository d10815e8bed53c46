"""
Admission Applications Repository

Database operations for admission applications. The public pipeline only
appends rows; it never updates them.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Application
from .schemas import ApplicationCreate


async def create(db: AsyncSession, data: ApplicationCreate) -> Application:
    """Insert a new application and return it with its generated key."""

    new_application = Application(
        application_id=data.application_id,
        # Student
        full_name=data.full_name,
        date_of_birth=data.date_of_birth,
        religion=data.religion,
        class_interest=data.class_interest,
        gender=data.gender,
        address=data.address,
        nationality=data.nationality,
        state=data.state,
        city=data.city,
        student_phone=data.student_phone,
        student_email=data.student_email,
        # Parents
        mother_name=data.mother_name,
        father_name=data.father_name,
        mother_phone=data.mother_phone,
        father_phone=data.father_phone,
        parent_email=data.parent_email,
        parent_address=data.parent_address,
        # Tracking
        ip_address=data.ip_address,
    )

    db.add(new_application)
    await db.commit()
    await db.refresh(new_application)

    return new_application


async def get_by_application_id(db: AsyncSession, application_id: str) -> Application | None:
    """Look up an application by its external reference."""
    result = await db.execute(
        select(Application).where(Application.application_id == application_id)
    )
    return result.scalar_one_or_none()
