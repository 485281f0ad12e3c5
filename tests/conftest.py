"""Shared pytest fixtures and configuration."""

from datetime import UTC, datetime, timedelta

import pytest

from learntrack.catalog import CourseStatus, InMemoryCatalog
from learntrack.enrollment_store import EnrollmentStore
from learntrack.lifecycle import EnrollmentEngine
from learntrack.reporting import EnrollmentReports

PUBLISHED_COURSE = 10
DRAFT_COURSE = 11
ARCHIVED_COURSE = 12


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


class FakeClock:
    """Deterministic clock; each call returns the current time, `advance` moves it."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


# Shared fixtures


@pytest.fixture
def store():
    """Create an in-memory EnrollmentStore."""
    s = EnrollmentStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Catalog with three users and one course per publication status."""
    c = InMemoryCatalog(users=[3])
    c.add_user(1, full_name="Ada Lovelace")
    c.add_user(2, full_name="Alan Turing")
    c.add_course(PUBLISHED_COURSE, CourseStatus.PUBLISHED, title="Intro to Python")
    c.add_course(DRAFT_COURSE, CourseStatus.DRAFT, title="Advanced Python")
    c.add_course(ARCHIVED_COURSE, CourseStatus.ARCHIVED, title="Python 2 Basics")
    return c


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(store: EnrollmentStore, catalog: InMemoryCatalog, clock: FakeClock) -> EnrollmentEngine:
    """Engine wired to the in-memory store and catalog."""
    return EnrollmentEngine(store=store, catalog=catalog, clock=clock)


@pytest.fixture
def reports(store: EnrollmentStore) -> EnrollmentReports:
    return EnrollmentReports(store)
