"""EnrollmentEngine - Enrollment lifecycle rules."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from learntrack.enrollment_store import Enrollment, EnrollmentExistsError
from learntrack.lifecycle.exceptions import (
    CourseNotFoundError,
    CourseNotPublishedError,
    InvalidProgressError,
    UserNotFoundError,
)
from learntrack.lifecycle.transitions import (
    Action,
    apply_snapshot,
    next_state,
    snapshot_of,
)
from learntrack.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from learntrack.catalog import CatalogLookup
    from learntrack.enrollment_store import EnrollmentStore

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


class EnrollmentEngine:
    """Validates enrollment requests and drives status transitions.

    All checks run before anything is written. Each mutation is a single
    read, transition and save against the store; the store rejects a save
    whose record changed in between, so concurrent updates are never lost.
    """

    def __init__(
        self,
        store: EnrollmentStore,
        catalog: CatalogLookup,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the engine.

        Args:
            store: EnrollmentStore holding enrollment records.
            catalog: Catalog used to check users and course publication.
            clock: Source of the current time.
        """
        self.store = store
        self.catalog = catalog
        self._clock = clock

    def enroll(self, user_id: int, course_id: int) -> Enrollment:
        """Enroll a user in a course.

        Args:
            user_id: The learner's ID.
            course_id: The course's ID.

        Returns:
            The new enrollment, ENROLLED with 0% progress.

        Raises:
            UserNotFoundError: If the user does not exist.
            CourseNotFoundError: If the course does not exist.
            EnrollmentExistsError: If the user is already enrolled in the course.
            CourseNotPublishedError: If the course is not published.
            CatalogUnavailableError: If the catalog cannot be queried.
        """
        user = self.catalog.get_user(user_id)
        if user is None:
            logger.warning("Enroll rejected: user %s not found", user_id)
            raise UserNotFoundError(f"User not found: {user_id}")

        course = self.catalog.get_course(course_id)
        if course is None:
            logger.warning("Enroll rejected: course %s not found", course_id)
            raise CourseNotFoundError(f"Course not found: {course_id}")

        if self.store.find_by_user_and_course(user_id, course_id) is not None:
            logger.warning("Enroll rejected: user %s already in course %s", user_id, course_id)
            raise EnrollmentExistsError(
                f"User {user_id} is already enrolled in course {course_id}"
            )

        if not course.is_published:
            logger.warning(
                "Enroll rejected: course %s is %s, not published", course_id, course.status
            )
            raise CourseNotPublishedError(
                f"Cannot enroll in course {course_id}: status is {course.status}"
            )

        # A racing enroll for the same pair loses at the unique constraint
        enrollment = self.store.insert(
            Enrollment(
                user_id=user_id,
                course_id=course_id,
                enrolled_at=self._clock(),
                user_name=user.full_name,
                course_title=course.title,
            )
        )
        logger.info(
            "Enrolled user %s in course %s (enrollment %s)", user_id, course_id, enrollment.id
        )
        return enrollment

    def update_progress(self, enrollment_id: str, progress_percentage: int) -> Enrollment:
        """Record progress; reaching 100 completes the enrollment.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
            InvalidProgressError: If the value is outside [0, 100].
            StaleEnrollmentError: If the enrollment changed concurrently.
        """
        return self._transition(enrollment_id, Action.SET_PROGRESS, progress_percentage)

    def complete(self, enrollment_id: str) -> Enrollment:
        """Mark an enrollment completed regardless of its progress.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
            StaleEnrollmentError: If the enrollment changed concurrently.
        """
        return self._transition(enrollment_id, Action.COMPLETE)

    def drop(self, enrollment_id: str) -> Enrollment:
        """Mark an enrollment dropped, keeping its record and progress.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
            StaleEnrollmentError: If the enrollment changed concurrently.
        """
        return self._transition(enrollment_id, Action.DROP)

    def unenroll(self, user_id: int, course_id: int) -> bool:
        """Permanently remove a user's enrollment in a course.

        Returns:
            True if an enrollment was removed, False if there was none.
        """
        removed = self.store.delete_by_user_and_course(user_id, course_id)
        if removed:
            logger.info("Unenrolled user %s from course %s", user_id, course_id)
        else:
            logger.info("Unenroll: user %s has no enrollment in course %s", user_id, course_id)
        return removed

    def _transition(
        self,
        enrollment_id: str,
        action: Action,
        progress: int | None = None,
    ) -> Enrollment:
        enrollment = self.store.get(enrollment_id)
        before = snapshot_of(enrollment)

        try:
            after = next_state(before, action, now=self._clock(), progress=progress)
        except InvalidProgressError:
            logger.warning(
                "Rejected %s on enrollment %s: progress %r", action, enrollment_id, progress
            )
            raise

        apply_snapshot(enrollment, after)
        saved = self.store.save(enrollment)

        logger.info(
            "Enrollment %s: %s (%s %s%% -> %s %s%%)",
            enrollment_id,
            action,
            before.status,
            before.progress_percentage,
            after.status,
            after.progress_percentage,
        )
        return saved
