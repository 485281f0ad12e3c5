"""EnrollmentStore - Main API for Enrollment Store operations."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from learntrack.enrollment_store.database import Database
from learntrack.enrollment_store.exceptions import (
    EnrollmentExistsError,
    EnrollmentNotFoundError,
    StaleEnrollmentError,
)
from learntrack.enrollment_store.models import Enrollment, EnrollmentStatus

UNIQUE_PAIR_CONSTRAINT = "uq_enrollment_user_course"


class EnrollmentStore:
    """Main API for Enrollment Store operations.

    Every method runs in its own session and commits before returning, so
    each call is one transaction against the database.
    """

    def __init__(self, db_path: str = "learntrack.db") -> None:
        """Initialize Enrollment Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    @property
    def database(self) -> Database:
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Writes ---

    def insert(self, enrollment: Enrollment) -> Enrollment:
        """Insert a new enrollment.

        The (user_id, course_id) unique constraint is checked by the database
        at commit, so two racing inserts for the same pair cannot both succeed.

        Args:
            enrollment: A new, unsaved Enrollment

        Returns:
            The stored Enrollment

        Raises:
            EnrollmentExistsError: If the user is already enrolled in the course
        """
        session = self._db.get_session()
        try:
            session.add(enrollment)
            session.commit()
            session.refresh(enrollment)
            return enrollment
        except IntegrityError as e:
            session.rollback()
            message = str(e)
            if UNIQUE_PAIR_CONSTRAINT in message or "UNIQUE constraint failed" in message:
                raise EnrollmentExistsError(
                    f"User {enrollment.user_id} is already enrolled "
                    f"in course {enrollment.course_id}"
                ) from e
            raise
        finally:
            session.close()

    def save(self, enrollment: Enrollment) -> Enrollment:
        """Persist changes made to a previously loaded enrollment.

        Args:
            enrollment: An enrollment returned by this store, with mutations applied

        Returns:
            The updated Enrollment as stored

        Raises:
            EnrollmentNotFoundError: If the enrollment no longer exists
            StaleEnrollmentError: If another writer updated it since it was read
        """
        session = self._db.get_session()
        try:
            if session.get(Enrollment, enrollment.id) is None:
                raise EnrollmentNotFoundError(f"Enrollment with id '{enrollment.id}' not found")

            merged = session.merge(enrollment)
            session.commit()
            session.refresh(merged)
            return merged
        except StaleDataError as e:
            session.rollback()
            raise StaleEnrollmentError(
                f"Enrollment '{enrollment.id}' was modified concurrently"
            ) from e
        finally:
            session.close()

    def delete(self, enrollment_id: str) -> None:
        """Hard-delete an enrollment.

        Args:
            enrollment_id: The enrollment's unique ID

        Raises:
            EnrollmentNotFoundError: If enrollment doesn't exist
        """
        session = self._db.get_session()
        try:
            result = session.execute(delete(Enrollment).where(Enrollment.id == enrollment_id))
            session.commit()
            if result.rowcount == 0:
                raise EnrollmentNotFoundError(f"Enrollment with id '{enrollment_id}' not found")
        finally:
            session.close()

    def delete_by_user_and_course(self, user_id: int, course_id: int) -> bool:
        """Hard-delete the enrollment for a user/course pair.

        Returns:
            True if a record was removed, False if none existed
        """
        session = self._db.get_session()
        try:
            stmt = delete(Enrollment).where(
                Enrollment.user_id == user_id,
                Enrollment.course_id == course_id,
            )
            result = session.execute(stmt)
            session.commit()
            return bool(result.rowcount)
        finally:
            session.close()

    # --- Lookups ---

    def get(self, enrollment_id: str) -> Enrollment:
        """Get enrollment by ID.

        Raises:
            EnrollmentNotFoundError: If enrollment doesn't exist
        """
        enrollment = self.find_by_id(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(f"Enrollment with id '{enrollment_id}' not found")
        return enrollment

    def find_by_id(self, enrollment_id: str) -> Enrollment | None:
        session = self._db.get_session()
        try:
            return session.get(Enrollment, enrollment_id)
        finally:
            session.close()

    def find_by_user_and_course(self, user_id: int, course_id: int) -> Enrollment | None:
        session = self._db.get_session()
        try:
            stmt = select(Enrollment).where(
                Enrollment.user_id == user_id,
                Enrollment.course_id == course_id,
            )
            return session.execute(stmt).scalar_one_or_none()
        finally:
            session.close()

    def list_all(self) -> list[Enrollment]:
        """List all enrollments in creation order."""
        return self._list()

    def find_by_user(self, user_id: int) -> list[Enrollment]:
        return self._list(Enrollment.user_id == user_id)

    def find_by_course(self, course_id: int) -> list[Enrollment]:
        return self._list(Enrollment.course_id == course_id)

    def find_by_status(self, status: EnrollmentStatus) -> list[Enrollment]:
        return self._list(Enrollment.status == status.value)

    def _list(self, *criteria: object) -> list[Enrollment]:
        session = self._db.get_session()
        try:
            stmt = select(Enrollment).where(*criteria).order_by(Enrollment.enrolled_at)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    # --- Counts and aggregates ---

    def count_all(self) -> int:
        return self._count()

    def count_by_course(self, course_id: int) -> int:
        return self._count(Enrollment.course_id == course_id)

    def count_by_user(self, user_id: int) -> int:
        return self._count(Enrollment.user_id == user_id)

    def count_by_status(self, status: EnrollmentStatus) -> int:
        return self._count(Enrollment.status == status.value)

    def _count(self, *criteria: object) -> int:
        session = self._db.get_session()
        try:
            stmt = select(func.count(Enrollment.id)).where(*criteria)
            return int(session.execute(stmt).scalar_one())
        finally:
            session.close()

    def status_breakdown(self, course_id: int | None = None) -> dict[EnrollmentStatus, int]:
        """Count enrollments per status.

        Args:
            course_id: Restrict to one course (None = all)

        Returns:
            Mapping with an entry for every status, zero when absent
        """
        session = self._db.get_session()
        try:
            stmt = select(Enrollment.status, func.count(Enrollment.id)).group_by(
                Enrollment.status
            )
            if course_id is not None:
                stmt = stmt.where(Enrollment.course_id == course_id)

            counts = {status: 0 for status in EnrollmentStatus}
            for status, count in session.execute(stmt).all():
                counts[EnrollmentStatus(status)] = int(count)
            return counts
        finally:
            session.close()

    def average_progress(self, course_id: int | None = None) -> float:
        """Average progress percentage, 0.0 when there are no enrollments."""
        session = self._db.get_session()
        try:
            stmt = select(func.avg(Enrollment.progress_percentage))
            if course_id is not None:
                stmt = stmt.where(Enrollment.course_id == course_id)
            return float(session.execute(stmt).scalar() or 0.0)
        finally:
            session.close()
