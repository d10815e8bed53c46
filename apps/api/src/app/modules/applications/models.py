"""
Admission Applications Models

Database model for admission applications submitted from the website.
Rows are append-only from the public form; review happens elsewhere.
"""

import enum
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """Status of an admission application."""

    PENDING = "pending"


class Application(Base):
    """
    Admission application.

    ``id`` is the storage key; ``application_id`` is the human-readable
    reference (APP + date + suffix) quoted in correspondence.
    """

    __tablename__ = "applications"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)

    # Student
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    religion: Mapped[str] = mapped_column(String(100), nullable=False)
    class_interest: Mapped[str] = mapped_column(String(100), nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    nationality: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    student_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    student_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Parents
    mother_name: Mapped[str] = mapped_column(String(200), nullable=False)
    father_name: Mapped[str] = mapped_column(String(200), nullable=False)
    mother_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    father_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_address: Mapped[str] = mapped_column(Text, nullable=False)

    # Tracking
    submission_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ApplicationStatus.PENDING.value
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)

    __table_args__ = (
        Index("ix_applications_status", "status"),
        Index("ix_applications_parent_email", "parent_email"),
    )
