"""Enrollment Store - Durable storage for enrollment records."""

from learntrack.enrollment_store.exceptions import (
    EnrollmentExistsError,
    EnrollmentNotFoundError,
    EnrollmentStoreError,
    InvalidStatusError,
    StaleEnrollmentError,
)
from learntrack.enrollment_store.models import (
    Enrollment,
    EnrollmentStats,
    EnrollmentStatus,
    parse_status,
)
from learntrack.enrollment_store.store import EnrollmentStore

__all__ = [
    "Enrollment",
    "EnrollmentExistsError",
    "EnrollmentNotFoundError",
    "EnrollmentStats",
    "EnrollmentStatus",
    "EnrollmentStore",
    "EnrollmentStoreError",
    "InvalidStatusError",
    "StaleEnrollmentError",
    "parse_status",
]
