"""Error kinds shared by every LearnTrack component.

Each package derives its concrete errors from one of these kinds, so callers
(and the HTTP layer) can react to the kind without knowing the component.
"""


class LearnTrackError(Exception):
    """Base exception for LearnTrack errors."""


class NotFoundError(LearnTrackError):
    """A user, course or enrollment does not exist."""


class ConflictError(LearnTrackError):
    """The request collides with existing state."""


class InvalidStateError(LearnTrackError):
    """The action is not permitted in the entity's current state."""


class InvalidArgumentError(LearnTrackError):
    """Malformed input."""


class DependencyUnavailableError(LearnTrackError):
    """An external collaborator could not be reached or answered badly."""
