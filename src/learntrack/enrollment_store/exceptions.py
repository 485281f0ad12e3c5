"""Custom exceptions for Enrollment Store."""

from learntrack.exceptions import (
    ConflictError,
    InvalidArgumentError,
    LearnTrackError,
    NotFoundError,
)


class EnrollmentStoreError(LearnTrackError):
    """Base exception for Enrollment Store errors."""


class EnrollmentNotFoundError(EnrollmentStoreError, NotFoundError):
    """Enrollment with given ID does not exist."""


class EnrollmentExistsError(EnrollmentStoreError, ConflictError):
    """User is already enrolled in this course."""


class StaleEnrollmentError(EnrollmentStoreError, ConflictError):
    """Enrollment was changed by another writer since it was read."""


class InvalidStatusError(EnrollmentStoreError, InvalidArgumentError):
    """Status string does not name a known enrollment status."""
