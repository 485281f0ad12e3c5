"""Health check endpoint."""

from fastapi import APIRouter

from learntrack.api.dependencies import ReportsDep
from learntrack.api.models import APIResponse, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=APIResponse[HealthResponse])
def health(reports: ReportsDep) -> APIResponse[HealthResponse]:
    """Report service health; touches the database."""
    return APIResponse(data=HealthResponse(status="ok", enrollments=reports.count_all()))
