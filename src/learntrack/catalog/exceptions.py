"""Custom exceptions for the Catalog client."""

from learntrack.exceptions import DependencyUnavailableError, LearnTrackError


class CatalogError(LearnTrackError):
    """Base exception for Catalog errors."""


class CatalogUnavailableError(CatalogError, DependencyUnavailableError):
    """Catalog could not be reached or returned an unusable response."""
