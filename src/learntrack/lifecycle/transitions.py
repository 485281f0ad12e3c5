"""Enrollment state transitions.

Both completion paths, an explicit complete and progress reaching 100, go
through next_state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime  # noqa: TC003 - dataclass field type
from enum import StrEnum
from typing import TYPE_CHECKING

from learntrack.enrollment_store import EnrollmentStatus
from learntrack.lifecycle.exceptions import InvalidProgressError

if TYPE_CHECKING:
    from learntrack.enrollment_store import Enrollment

MIN_PROGRESS = 0
MAX_PROGRESS = 100


class Action(StrEnum):
    """Mutating lifecycle actions."""

    SET_PROGRESS = "set_progress"
    COMPLETE = "complete"
    DROP = "drop"


@dataclass(frozen=True)
class EnrollmentSnapshot:
    """The mutable part of an enrollment."""

    status: EnrollmentStatus
    progress_percentage: int
    completed_at: datetime | None = None


def snapshot_of(enrollment: Enrollment) -> EnrollmentSnapshot:
    return EnrollmentSnapshot(
        status=enrollment.enrollment_status,
        progress_percentage=enrollment.progress_percentage,
        completed_at=enrollment.completed_at,
    )


def apply_snapshot(enrollment: Enrollment, snapshot: EnrollmentSnapshot) -> None:
    """Copy a snapshot's fields onto an enrollment."""
    enrollment.enrollment_status = snapshot.status
    enrollment.progress_percentage = snapshot.progress_percentage
    enrollment.completed_at = snapshot.completed_at


def validate_progress(progress: int) -> int:
    """Check a progress value is a whole percentage in range.

    Raises:
        InvalidProgressError: If the value is not an int in [0, 100]
    """
    if isinstance(progress, bool) or not isinstance(progress, int):
        raise InvalidProgressError(f"Progress must be an integer, got {progress!r}")
    if not MIN_PROGRESS <= progress <= MAX_PROGRESS:
        raise InvalidProgressError(
            f"Progress must be between {MIN_PROGRESS} and {MAX_PROGRESS}, got {progress}"
        )
    return progress


def next_state(
    current: EnrollmentSnapshot,
    action: Action,
    now: datetime,
    progress: int | None = None,
) -> EnrollmentSnapshot:
    """Compute the state an enrollment moves to.

    Args:
        current: State before the action
        action: The requested action
        now: Timestamp to use if the action completes the enrollment
        progress: New percentage, required for SET_PROGRESS

    Returns:
        The resulting snapshot; `current` is not modified

    Raises:
        InvalidProgressError: If SET_PROGRESS gets a missing or out-of-range value
    """
    match action:
        case Action.SET_PROGRESS:
            if progress is None:
                raise InvalidProgressError("Progress is required")
            progress = validate_progress(progress)
            if progress >= MAX_PROGRESS:
                # Threshold completion keeps the first completion time
                return EnrollmentSnapshot(
                    status=EnrollmentStatus.COMPLETED,
                    progress_percentage=progress,
                    completed_at=current.completed_at or now,
                )
            return replace(current, progress_percentage=progress)
        case Action.COMPLETE:
            return EnrollmentSnapshot(
                status=EnrollmentStatus.COMPLETED,
                progress_percentage=MAX_PROGRESS,
                completed_at=now,
            )
        case Action.DROP:
            return replace(current, status=EnrollmentStatus.DROPPED)
    raise ValueError(f"Unknown action: {action!r}")
