"""EnrollmentReports - Read-only queries and aggregates over enrollments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from learntrack.enrollment_store import EnrollmentStats, EnrollmentStatus, parse_status

if TYPE_CHECKING:
    from learntrack.enrollment_store import Enrollment, EnrollmentStore


class EnrollmentReports:
    """Query surface over the Enrollment Store.

    Status arguments are accepted as strings in any case; unknown names
    raise InvalidStatusError.
    """

    def __init__(self, store: EnrollmentStore) -> None:
        self.store = store

    # --- Listings ---

    def list_all(self) -> list[Enrollment]:
        return self.store.list_all()

    def get(self, enrollment_id: str) -> Enrollment:
        """Get one enrollment.

        Raises:
            EnrollmentNotFoundError: If it does not exist
        """
        return self.store.get(enrollment_id)

    def list_by_user(self, user_id: int) -> list[Enrollment]:
        return self.store.find_by_user(user_id)

    def list_by_course(self, course_id: int) -> list[Enrollment]:
        return self.store.find_by_course(course_id)

    def list_by_status(self, status: str) -> list[Enrollment]:
        return self.store.find_by_status(parse_status(status))

    # --- Counts ---

    def count_all(self) -> int:
        return self.store.count_all()

    def count_by_course(self, course_id: int) -> int:
        return self.store.count_by_course(course_id)

    def count_by_user(self, user_id: int) -> int:
        return self.store.count_by_user(user_id)

    def count_by_status(self, status: str) -> int:
        return self.store.count_by_status(parse_status(status))

    def stats(self, course_id: int | None = None) -> EnrollmentStats:
        """Aggregate enrollment statistics.

        Args:
            course_id: Restrict to one course (None = all)

        Returns:
            EnrollmentStats with per-status counts, completion rate and
            average progress
        """
        breakdown = self.store.status_breakdown(course_id=course_id)
        total = sum(breakdown.values())
        completed = breakdown[EnrollmentStatus.COMPLETED]

        return EnrollmentStats(
            total=total,
            by_status={status.value: count for status, count in breakdown.items()},
            completion_rate=completed / total if total else 0.0,
            avg_progress=self.store.average_progress(course_id=course_id),
        )
