"""Enrollment lifecycle endpoints."""

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import JSONResponse

from learntrack.api.dependencies import EngineDep, ReportsDep
from learntrack.api.models import (
    APIResponse,
    EnrollmentResponse,
    enrollment_to_response,
)

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.get("", response_model=APIResponse[list[EnrollmentResponse]])
def list_enrollments(reports: ReportsDep) -> APIResponse[list[EnrollmentResponse]]:
    """List all enrollments."""
    return APIResponse(data=[enrollment_to_response(e) for e in reports.list_all()])


@router.post(
    "",
    response_model=APIResponse[EnrollmentResponse],
    status_code=status.HTTP_201_CREATED,
)
def enroll(
    engine: EngineDep,
    user_id: int = Query(..., description="User to enroll"),
    course_id: int = Query(..., description="Course to enroll in"),
) -> APIResponse[EnrollmentResponse]:
    """Enroll a user in a published course."""
    enrollment = engine.enroll(user_id, course_id)
    return APIResponse(data=enrollment_to_response(enrollment))


@router.get("/user/{user_id}", response_model=APIResponse[list[EnrollmentResponse]])
def list_by_user(user_id: int, reports: ReportsDep) -> APIResponse[list[EnrollmentResponse]]:
    """List a user's enrollments."""
    return APIResponse(data=[enrollment_to_response(e) for e in reports.list_by_user(user_id)])


@router.get("/course/{course_id}", response_model=APIResponse[list[EnrollmentResponse]])
def list_by_course(
    course_id: int, reports: ReportsDep
) -> APIResponse[list[EnrollmentResponse]]:
    """List a course's enrollments."""
    enrollments = reports.list_by_course(course_id)
    return APIResponse(data=[enrollment_to_response(e) for e in enrollments])


@router.delete(
    "/user/{user_id}/course/{course_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
def unenroll(user_id: int, course_id: int, engine: EngineDep) -> Response:
    """Permanently remove a user's enrollment in a course."""
    if not engine.unenroll(user_id, course_id):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Enrollment not found").model_dump(),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{enrollment_id}", response_model=APIResponse[EnrollmentResponse])
def get_enrollment(enrollment_id: str, reports: ReportsDep) -> APIResponse[EnrollmentResponse]:
    """Get an enrollment by ID."""
    return APIResponse(data=enrollment_to_response(reports.get(enrollment_id)))


@router.put("/{enrollment_id}/progress", response_model=APIResponse[EnrollmentResponse])
def update_progress(
    enrollment_id: str,
    engine: EngineDep,
    progress_percentage: int = Query(..., description="Progress from 0 to 100"),
) -> APIResponse[EnrollmentResponse]:
    """Update progress; 100 completes the enrollment."""
    enrollment = engine.update_progress(enrollment_id, progress_percentage)
    return APIResponse(data=enrollment_to_response(enrollment))


@router.post("/{enrollment_id}/complete", response_model=APIResponse[EnrollmentResponse])
def complete(enrollment_id: str, engine: EngineDep) -> APIResponse[EnrollmentResponse]:
    """Mark an enrollment completed."""
    return APIResponse(data=enrollment_to_response(engine.complete(enrollment_id)))


@router.post("/{enrollment_id}/drop", response_model=APIResponse[EnrollmentResponse])
def drop(enrollment_id: str, engine: EngineDep) -> APIResponse[EnrollmentResponse]:
    """Mark an enrollment dropped."""
    return APIResponse(data=enrollment_to_response(engine.drop(enrollment_id)))
