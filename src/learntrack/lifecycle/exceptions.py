"""Exceptions for the lifecycle engine."""

from learntrack.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    LearnTrackError,
    NotFoundError,
)


class LifecycleError(LearnTrackError):
    """Base exception for lifecycle errors."""


class UserNotFoundError(LifecycleError, NotFoundError):
    """User does not exist in the catalog."""


class CourseNotFoundError(LifecycleError, NotFoundError):
    """Course does not exist in the catalog."""


class CourseNotPublishedError(LifecycleError, InvalidStateError):
    """Course is not open for enrollment."""


class InvalidProgressError(LifecycleError, InvalidArgumentError):
    """Progress percentage outside [0, 100]."""
