"""REST API for LearnTrack."""

from learntrack.api.app import create_app, register_exception_handlers
from learntrack.api.models import (
    APIResponse,
    EnrollmentResponse,
    EnrollmentStatsResponse,
)

__all__ = [
    "APIResponse",
    "EnrollmentResponse",
    "EnrollmentStatsResponse",
    "create_app",
    "register_exception_handlers",
]
