"""Enrollment query, count and statistics endpoints.

Registered ahead of the enrollment routes so that /enrollments/count and
/enrollments/stats are not taken for enrollment IDs.
"""

from fastapi import APIRouter, Query

from learntrack.api.dependencies import ReportsDep
from learntrack.api.models import (
    APIResponse,
    EnrollmentResponse,
    EnrollmentStatsResponse,
    enrollment_to_response,
    stats_to_response,
)

router = APIRouter(prefix="/enrollments", tags=["reports"])


@router.get("/status/{status}", response_model=APIResponse[list[EnrollmentResponse]])
def list_by_status(status: str, reports: ReportsDep) -> APIResponse[list[EnrollmentResponse]]:
    """List enrollments with a status (case-insensitive)."""
    return APIResponse(data=[enrollment_to_response(e) for e in reports.list_by_status(status)])


@router.get("/count", response_model=APIResponse[int])
def count_all(reports: ReportsDep) -> APIResponse[int]:
    """Total number of enrollments."""
    return APIResponse(data=reports.count_all())


@router.get("/count/course/{course_id}", response_model=APIResponse[int])
def count_by_course(course_id: int, reports: ReportsDep) -> APIResponse[int]:
    """Number of enrollments in a course."""
    return APIResponse(data=reports.count_by_course(course_id))


@router.get("/count/user/{user_id}", response_model=APIResponse[int])
def count_by_user(user_id: int, reports: ReportsDep) -> APIResponse[int]:
    """Number of courses a user is enrolled in."""
    return APIResponse(data=reports.count_by_user(user_id))


@router.get("/count/status/{status}", response_model=APIResponse[int])
def count_by_status(status: str, reports: ReportsDep) -> APIResponse[int]:
    """Number of enrollments with a status."""
    return APIResponse(data=reports.count_by_status(status))


@router.get("/stats", response_model=APIResponse[EnrollmentStatsResponse])
def get_stats(
    reports: ReportsDep,
    course_id: int | None = Query(default=None, description="Restrict to one course"),
) -> APIResponse[EnrollmentStatsResponse]:
    """Aggregated enrollment statistics."""
    return APIResponse(data=stats_to_response(reports.stats(course_id=course_id)))
