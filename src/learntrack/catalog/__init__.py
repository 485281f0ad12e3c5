"""Catalog - Read-only lookups of users and courses owned by the catalog service."""

from learntrack.catalog.exceptions import CatalogError, CatalogUnavailableError
from learntrack.catalog.http_client import HttpCatalog
from learntrack.catalog.lookup import CatalogLookup, InMemoryCatalog
from learntrack.catalog.models import CourseInfo, CourseStatus, UserInfo

__all__ = [
    "CatalogError",
    "CatalogLookup",
    "CatalogUnavailableError",
    "CourseInfo",
    "CourseStatus",
    "HttpCatalog",
    "InMemoryCatalog",
    "UserInfo",
]
