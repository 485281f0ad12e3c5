"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from learntrack.enrollment_store import EnrollmentStore
from learntrack.lifecycle import EnrollmentEngine
from learntrack.reporting import EnrollmentReports

# Global EnrollmentStore instance (initialized on app startup)
_store: EnrollmentStore | None = None


def init_store(db_path: str = "learntrack.db") -> EnrollmentStore:
    """Initialize the global EnrollmentStore instance."""
    global _store  # noqa: PLW0603
    _store = EnrollmentStore(db_path)
    return _store


def close_store() -> None:
    """Close the global EnrollmentStore instance."""
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None


def get_store() -> Generator[EnrollmentStore, None, None]:
    """Dependency that provides the EnrollmentStore instance."""
    if _store is None:
        raise RuntimeError("EnrollmentStore not initialized. Call init_store() first.")
    yield _store


StoreDep = Annotated[EnrollmentStore, Depends(get_store)]

# Global EnrollmentEngine instance (initialized on app startup)
_engine: EnrollmentEngine | None = None


def init_engine(engine: EnrollmentEngine) -> None:
    """Initialize the global EnrollmentEngine instance."""
    global _engine  # noqa: PLW0603
    _engine = engine


def close_engine() -> None:
    """Close the global EnrollmentEngine instance."""
    global _engine  # noqa: PLW0603
    _engine = None


def get_engine() -> Generator[EnrollmentEngine, None, None]:
    """Dependency that provides the EnrollmentEngine instance."""
    if _engine is None:
        raise RuntimeError("EnrollmentEngine not initialized. Call init_engine() first.")
    yield _engine


EngineDep = Annotated[EnrollmentEngine, Depends(get_engine)]


def get_reports(store: StoreDep) -> EnrollmentReports:
    """Dependency that provides the reporting surface over the store."""
    return EnrollmentReports(store)


ReportsDep = Annotated[EnrollmentReports, Depends(get_reports)]
