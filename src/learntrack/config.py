"""Configuration loading for LearnTrack.

Settings come from an optional YAML file, then LEARNTRACK_* environment
variables override individual values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from learntrack.catalog import CourseInfo, CourseStatus, HttpCatalog, InMemoryCatalog, UserInfo

if TYPE_CHECKING:
    from collections.abc import Mapping

    from learntrack.catalog import CatalogLookup

CONFIG_ENV_VAR = "LEARNTRACK_CONFIG"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class CatalogConfig:
    """Where users and courses are looked up.

    With a `url` the HTTP catalog service is used; otherwise an in-memory
    catalog is built from the `users` and `courses` seeds.
    """

    url: str | None = None
    timeout: float = 5.0
    users: list[UserInfo] = field(default_factory=list)
    courses: list[CourseInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CatalogConfig:
        """Create catalog config from a dictionary.

        Raises:
            ConfigError: If a seed entry is malformed.
        """
        courses = []
        for entry in data.get("courses", []):
            if not isinstance(entry, dict) or "id" not in entry:
                raise ConfigError(f"Catalog course entry needs an 'id': {entry!r}")
            raw_status = str(entry.get("status", CourseStatus.PUBLISHED.value)).upper()
            try:
                status = CourseStatus(raw_status)
            except ValueError as e:
                raise ConfigError(f"Unknown course status: {raw_status}") from e
            courses.append(
                CourseInfo(
                    course_id=_to_int(entry["id"], "catalog.courses.id"),
                    status=status,
                    title=str(entry.get("title", "")),
                )
            )

        return cls(
            url=data.get("url") or None,
            timeout=_to_float(data.get("timeout", 5.0), "catalog.timeout"),
            users=[_parse_user(u) for u in data.get("users", [])],
            courses=courses,
        )

    def create_catalog(self) -> CatalogLookup:
        """Build the catalog this config describes."""
        if self.url:
            return HttpCatalog(base_url=self.url, timeout=self.timeout)
        return InMemoryCatalog(users=self.users, courses=self.courses)


@dataclass
class Settings:
    """LearnTrack service settings."""

    db_path: str = "learntrack.db"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_dir: str = "logs"
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed settings object.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        catalog_data = data.get("catalog", {})
        if not isinstance(catalog_data, dict):
            raise ConfigError("'catalog' must be a mapping")
        logging_data = data.get("logging", {})
        if not isinstance(logging_data, dict):
            raise ConfigError("'logging' must be a mapping")

        return cls(
            db_path=str(data.get("db_path", "learntrack.db")),
            host=str(data.get("host", "127.0.0.1")),
            port=_to_int(data.get("port", 8000), "port"),
            log_level=str(logging_data.get("level", "INFO")).upper(),
            log_dir=str(logging_data.get("dir", "logs")),
            catalog=CatalogConfig.from_dict(catalog_data),
        )

    def apply_env(self, environ: Mapping[str, str] | None = None) -> Settings:
        """Override settings from LEARNTRACK_* environment variables.

        Args:
            environ: Environment mapping. Defaults to os.environ.

        Returns:
            self, for chaining.
        """
        env = os.environ if environ is None else environ

        if "LEARNTRACK_DB_PATH" in env:
            self.db_path = env["LEARNTRACK_DB_PATH"]
        if "LEARNTRACK_HOST" in env:
            self.host = env["LEARNTRACK_HOST"]
        if "LEARNTRACK_PORT" in env:
            self.port = _to_int(env["LEARNTRACK_PORT"], "LEARNTRACK_PORT")
        if "LEARNTRACK_LOG_LEVEL" in env:
            self.log_level = env["LEARNTRACK_LOG_LEVEL"].upper()
        if "LEARNTRACK_LOG_DIR" in env:
            self.log_dir = env["LEARNTRACK_LOG_DIR"]
        if "LEARNTRACK_CATALOG_URL" in env:
            self.catalog.url = env["LEARNTRACK_CATALOG_URL"] or None
        if "LEARNTRACK_CATALOG_TIMEOUT" in env:
            self.catalog.timeout = _to_float(
                env["LEARNTRACK_CATALOG_TIMEOUT"], "LEARNTRACK_CATALOG_TIMEOUT"
            )
        return self


def load_settings(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from a YAML file and the environment.

    Args:
        config_path: Path to a YAML file. Defaults to $LEARNTRACK_CONFIG; when
            neither is given, built-in defaults are used.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Parsed settings.

    Raises:
        ConfigError: If the file doesn't exist or is invalid.
    """
    env = os.environ if environ is None else environ
    if config_path is None:
        config_path = env.get(CONFIG_ENV_VAR) or None

    if config_path is None:
        return Settings().apply_env(env)

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return Settings.from_dict(data).apply_env(env)


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'{name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{name}' must be an integer, got {value!r}") from e


def _to_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{name}' must be a number, got {value!r}") from e


def _parse_user(entry: Any) -> UserInfo:
    """A user seed is either a bare ID or a mapping with `id` and optional `name`."""
    if isinstance(entry, dict):
        if "id" not in entry:
            raise ConfigError(f"Catalog user entry needs an 'id': {entry!r}")
        return UserInfo(
            user_id=_to_int(entry["id"], "catalog.users.id"),
            full_name=str(entry.get("name", "")),
        )
    return UserInfo(user_id=_to_int(entry, "catalog.users"))
