"""Data models for the Catalog client."""

from dataclasses import dataclass
from enum import StrEnum


class CourseStatus(StrEnum):
    """Publication status of a course, owned by the catalog."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True)
class CourseInfo:
    """The narrow view of a course that enrollment needs."""

    course_id: int
    status: CourseStatus
    title: str = ""

    @property
    def is_published(self) -> bool:
        return self.status == CourseStatus.PUBLISHED


@dataclass(frozen=True)
class UserInfo:
    """A learner as known to the catalog."""

    user_id: int
    full_name: str = ""
