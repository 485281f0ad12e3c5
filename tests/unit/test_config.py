"""Unit tests for settings loading."""

from pathlib import Path

import pytest

from learntrack.catalog import CourseStatus, HttpCatalog, InMemoryCatalog, UserInfo
from learntrack.config import CatalogConfig, ConfigError, Settings, load_settings

SAMPLE_CONFIG = """\
db_path: /var/lib/learntrack/enrollments.db
host: 0.0.0.0
port: 9000
logging:
  level: debug
  dir: /var/log/learntrack
catalog:
  users:
    - 1
    - id: 2
      name: Alan Turing
  courses:
    - id: 10
      title: Intro to Python
    - id: 11
      status: draft
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "learntrack.yaml"
    path.write_text(SAMPLE_CONFIG)
    return path


@pytest.mark.unit
class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self) -> None:
        settings = load_settings(environ={})

        assert settings == Settings()
        assert settings.db_path == "learntrack.db"
        assert settings.port == 8000

    def test_load_yaml(self, config_file: Path) -> None:
        settings = load_settings(config_file, environ={})

        assert settings.db_path == "/var/lib/learntrack/enrollments.db"
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == "/var/log/learntrack"
        assert settings.catalog.users == [UserInfo(1), UserInfo(2, "Alan Turing")]
        assert [c.course_id for c in settings.catalog.courses] == [10, 11]
        assert settings.catalog.courses[0].status == CourseStatus.PUBLISHED
        assert settings.catalog.courses[1].status == CourseStatus.DRAFT

    def test_path_from_env(self, config_file: Path) -> None:
        settings = load_settings(environ={"LEARNTRACK_CONFIG": str(config_file)})

        assert settings.port == 9000

    def test_env_overrides_file(self, config_file: Path) -> None:
        settings = load_settings(
            config_file,
            environ={
                "LEARNTRACK_DB_PATH": ":memory:",
                "LEARNTRACK_PORT": "8123",
                "LEARNTRACK_LOG_LEVEL": "warning",
                "LEARNTRACK_CATALOG_URL": "http://catalog.local/api",
                "LEARNTRACK_CATALOG_TIMEOUT": "2.5",
            },
        )

        assert settings.db_path == ":memory:"
        assert settings.port == 8123
        assert settings.log_level == "WARNING"
        assert settings.catalog.url == "http://catalog.local/api"
        assert settings.catalog.timeout == 2.5

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_settings(path, environ={}) == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "missing.yaml", environ={})

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("port: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path, environ={})

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path, environ={})

    def test_bad_port(self, tmp_path: Path) -> None:
        path = tmp_path / "port.yaml"
        path.write_text("port: eighty\n")

        with pytest.raises(ConfigError, match="port"):
            load_settings(path, environ={})

    def test_bad_port_from_env(self) -> None:
        with pytest.raises(ConfigError):
            load_settings(environ={"LEARNTRACK_PORT": "abc"})


@pytest.mark.unit
class TestCatalogConfig:
    """Tests for CatalogConfig."""

    def test_unknown_course_status(self) -> None:
        with pytest.raises(ConfigError, match="Unknown course status"):
            CatalogConfig.from_dict({"courses": [{"id": 1, "status": "hidden"}]})

    def test_course_without_id(self) -> None:
        with pytest.raises(ConfigError):
            CatalogConfig.from_dict({"courses": [{"title": "No id"}]})

    def test_user_without_id(self) -> None:
        with pytest.raises(ConfigError):
            CatalogConfig.from_dict({"users": [{"name": "Nobody"}]})

    def test_creates_in_memory_catalog(self) -> None:
        config = CatalogConfig.from_dict({"users": [1], "courses": [{"id": 10}]})

        catalog = config.create_catalog()

        assert isinstance(catalog, InMemoryCatalog)
        assert catalog.get_user(1) is not None
        assert catalog.get_course(10).is_published

    def test_creates_http_catalog(self) -> None:
        catalog = CatalogConfig(url="http://catalog.local/api", timeout=1.0).create_catalog()

        assert isinstance(catalog, HttpCatalog)
        catalog.close()
