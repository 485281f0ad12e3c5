"""Catalog lookup interface and an in-memory implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from learntrack.catalog.models import CourseInfo, CourseStatus, UserInfo

if TYPE_CHECKING:
    from collections.abc import Iterable


class CatalogLookup(Protocol):
    """Read-only view of users and courses owned by the catalog."""

    def get_user(self, user_id: int) -> UserInfo | None:
        """Return the user, or None if it does not exist."""
        ...

    def get_course(self, course_id: int) -> CourseInfo | None:
        """Return the course, or None if it does not exist."""
        ...


class InMemoryCatalog:
    """Catalog backed by dictionaries.

    Used for local runs seeded from configuration, and in tests. Users may be
    given as bare IDs or as UserInfo.
    """

    def __init__(
        self,
        users: Iterable[int | UserInfo] | None = None,
        courses: Iterable[CourseInfo] | None = None,
    ) -> None:
        self._users: dict[int, UserInfo] = {}
        for user in users or []:
            if not isinstance(user, UserInfo):
                user = UserInfo(user_id=user)
            self._users[user.user_id] = user
        self._courses: dict[int, CourseInfo] = {c.course_id: c for c in courses or []}

    def get_user(self, user_id: int) -> UserInfo | None:
        return self._users.get(user_id)

    def get_course(self, course_id: int) -> CourseInfo | None:
        return self._courses.get(course_id)

    def add_user(self, user_id: int, full_name: str = "") -> UserInfo:
        user = UserInfo(user_id=user_id, full_name=full_name)
        self._users[user_id] = user
        return user

    def remove_user(self, user_id: int) -> None:
        self._users.pop(user_id, None)

    def add_course(
        self,
        course_id: int,
        status: CourseStatus = CourseStatus.PUBLISHED,
        title: str = "",
    ) -> CourseInfo:
        course = CourseInfo(course_id=course_id, status=status, title=title)
        self._courses[course_id] = course
        return course

    def set_course_status(self, course_id: int, status: CourseStatus) -> CourseInfo:
        """Change a course's publication status.

        Raises:
            KeyError: If the course is unknown
        """
        current = self._courses[course_id]
        updated = CourseInfo(course_id=course_id, status=status, title=current.title)
        self._courses[course_id] = updated
        return updated

    def remove_course(self, course_id: int) -> None:
        self._courses.pop(course_id, None)
