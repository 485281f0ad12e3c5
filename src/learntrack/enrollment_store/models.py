"""SQLAlchemy models for Enrollment Store."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
)

from learntrack.enrollment_store.exceptions import InvalidStatusError


class EnrollmentStatus(StrEnum):
    """Enrollment status enum.

    IN_PROGRESS is part of the value space but no lifecycle action assigns it.
    """

    ENROLLED = "ENROLLED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DROPPED = "DROPPED"


def parse_status(value: str) -> EnrollmentStatus:
    """Parse a status name, ignoring case.

    Args:
        value: Status name such as "completed" or "DROPPED"

    Returns:
        The matching EnrollmentStatus

    Raises:
        InvalidStatusError: If the name is not a known status
    """
    try:
        return EnrollmentStatus(value.strip().upper())
    except ValueError as e:
        raise InvalidStatusError(f"Invalid status: {value}") from e


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Enrollment(Base):
    """Enrollment model - one learner's relationship to one course."""

    __tablename__ = "enrollments"

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollment_user_course"),
        CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="ck_enrollment_progress_range",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    course_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # Display names copied from the catalog at enrollment time
    user_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    course_title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    progress_percentage: Mapped[int] = mapped_column(Integer, nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Every UPDATE checks the version it read, so a concurrent write fails the flush
    __mapper_args__ = {"version_id_col": version}

    def __init__(
        self,
        user_id: int,
        course_id: int,
        enrolled_at: datetime,
        id: str | None = None,
        status: str | None = None,
        progress_percentage: int = 0,
        completed_at: datetime | None = None,
        user_name: str = "",
        course_title: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.user_id = user_id
        self.course_id = course_id
        self.status = status if status is not None else EnrollmentStatus.ENROLLED.value
        self.progress_percentage = progress_percentage
        self.enrolled_at = enrolled_at
        self.completed_at = completed_at
        self.user_name = user_name
        self.course_title = course_title

    @property
    def enrollment_status(self) -> EnrollmentStatus:
        """Get status as EnrollmentStatus enum."""
        return EnrollmentStatus(self.status)

    @enrollment_status.setter
    def enrollment_status(self, value: EnrollmentStatus) -> None:
        """Set status from EnrollmentStatus enum."""
        self.status = value.value

    @property
    def is_completed(self) -> bool:
        return self.status == EnrollmentStatus.COMPLETED.value

    def __repr__(self) -> str:
        return (
            f"<Enrollment(id={self.id!r}, user_id={self.user_id!r}, "
            f"course_id={self.course_id!r}, status={self.status!r})>"
        )


@dataclass
class EnrollmentStats:
    """Aggregated statistics over enrollments."""

    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    completion_rate: float = 0.0
    avg_progress: float = 0.0
