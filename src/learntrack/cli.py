"""CLI entry point for LearnTrack."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from learntrack.config import ConfigError, Settings, load_settings
from learntrack.logging import setup_logging


def _load(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="learntrack")
def main() -> None:
    """LearnTrack - course enrollment lifecycle service."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to learntrack.yaml (default: $LEARNTRACK_CONFIG)",
)
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", type=int, default=None, help="Bind port (default: from config)")
@click.option("--db", "db_path", default=None, help="SQLite database path")
def serve(
    config_path: Path | None, host: str | None, port: int | None, db_path: str | None
) -> None:
    """Run the REST API."""
    import uvicorn  # noqa: PLC0415

    from learntrack.api import create_app  # noqa: PLC0415

    settings = _load(config_path)
    if db_path is not None:
        settings.db_path = db_path
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@main.command("init-db")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to learntrack.yaml (default: $LEARNTRACK_CONFIG)",
)
@click.option("--db", "db_path", default=None, help="SQLite database path")
def init_db(config_path: Path | None, db_path: str | None) -> None:
    """Create the enrollment tables."""
    from learntrack.enrollment_store import EnrollmentStore  # noqa: PLC0415

    settings = _load(config_path)
    path = db_path or settings.db_path
    store = EnrollmentStore(path)
    store.close()
    click.echo(f"Database ready: {path}")


if __name__ == "__main__":
    main()
