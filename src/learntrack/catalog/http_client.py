"""HttpCatalog - Reads users and courses from the catalog service over HTTP."""

from __future__ import annotations

from typing import Any

import httpx

from learntrack.catalog.exceptions import CatalogUnavailableError
from learntrack.catalog.models import CourseInfo, CourseStatus, UserInfo
from learntrack.logging import get_logger

logger = get_logger("catalog")


class HttpCatalog:
    """Catalog client for the course catalog REST service.

    Expects `GET /users/{id}` and `GET /courses/{id}` endpoints that answer
    200 with a JSON body when the entity exists and 404 when it does not.
    """

    def __init__(self, base_url: str, timeout: float = 5.0) -> None:
        """Initialize the catalog client.

        Args:
            base_url: Root URL of the catalog service, e.g. "http://catalog:8080/api"
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _get(self, path: str) -> dict[str, Any] | None:
        """GET a catalog resource.

        Returns:
            Decoded JSON body, or None on 404

        Raises:
            CatalogUnavailableError: On transport errors or unexpected responses
        """
        try:
            response = self.client.get(path)
        except httpx.HTTPError as e:
            logger.warning("Catalog request %s failed: %s", path, e)
            raise CatalogUnavailableError(f"Catalog request failed: {path}") from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.warning("Catalog request %s returned %s", path, response.status_code)
            raise CatalogUnavailableError(
                f"Catalog request failed: {response.status_code} - {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogUnavailableError(f"Catalog returned invalid JSON for {path}") from e
        if not isinstance(data, dict):
            raise CatalogUnavailableError(f"Catalog returned unexpected body for {path}")
        return data

    def get_user(self, user_id: int) -> UserInfo | None:
        data = self._get(f"/users/{user_id}")
        if data is None:
            return None
        return UserInfo(user_id=user_id, full_name=str(data.get("fullName", "")))

    def get_course(self, course_id: int) -> CourseInfo | None:
        data = self._get(f"/courses/{course_id}")
        if data is None:
            return None

        raw_status = str(data.get("status", "")).upper()
        try:
            status = CourseStatus(raw_status)
        except ValueError as e:
            raise CatalogUnavailableError(
                f"Catalog returned unknown status {raw_status!r} for course {course_id}"
            ) from e

        return CourseInfo(
            course_id=course_id,
            status=status,
            title=str(data.get("title", "")),
        )
