"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Enrollment models


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: int
    course_id: int
    user_name: str
    course_title: str
    status: str
    progress_percentage: int
    enrolled_at: datetime
    completed_at: datetime | None


def enrollment_to_response(enrollment: Any) -> EnrollmentResponse:
    """Convert an Enrollment model to EnrollmentResponse."""
    return EnrollmentResponse.model_validate(enrollment)


# Reporting models


class EnrollmentStatsResponse(BaseModel):
    """Response model for enrollment statistics."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    by_status: dict[str, int]
    completion_rate: float
    avg_progress: float


def stats_to_response(stats: Any) -> EnrollmentStatsResponse:
    """Convert an EnrollmentStats to EnrollmentStatsResponse."""
    return EnrollmentStatsResponse.model_validate(stats)


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    enrollments: int
