"""Lifecycle package - Enrollment creation and status transitions."""

from learntrack.lifecycle.engine import EnrollmentEngine
from learntrack.lifecycle.exceptions import (
    CourseNotFoundError,
    CourseNotPublishedError,
    InvalidProgressError,
    LifecycleError,
    UserNotFoundError,
)
from learntrack.lifecycle.transitions import (
    Action,
    EnrollmentSnapshot,
    next_state,
)

__all__ = [
    "Action",
    "CourseNotFoundError",
    "CourseNotPublishedError",
    "EnrollmentEngine",
    "EnrollmentSnapshot",
    "InvalidProgressError",
    "LifecycleError",
    "UserNotFoundError",
    "next_state",
]
