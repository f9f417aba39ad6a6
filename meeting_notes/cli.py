"""
Application Entry Script.

Main entry point for the meeting notes service. All functionality is
accessible through command-line options.

Usage:
    meeting-notes --help
    meeting-notes --action server --verbose
    meeting-notes --action migrate
    meeting-notes --action seed --verbose
    meeting-notes --action config
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

from meeting_notes.backend.core.config import validate_project_root
from meeting_notes.backend.core.logging import get_logger, log_with_source, setup_logging

MIGRATIONS_INI = Path(__file__).parent / "backend" / "migrations" / "alembic.ini"


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "migrate", "seed", "config", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
) -> None:
    """
    Meeting Notes Entry Point.

    Run the API server, apply database migrations, insert sample notes,
    or view configuration.

    Examples:

        # Start development server
        meeting-notes --action server --reload --verbose

        # Create or upgrade the notes table
        meeting-notes --action migrate

        # Insert the three sample notes (skipped when notes exist)
        meeting-notes --action seed --verbose

        # View loaded configuration
        meeting-notes --action config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    log_with_source(logger, "cli", "debug", "Starting application", action=action, log_level=log_level)

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "migrate":
        run_migrations(logger)
    elif action == "seed":
        run_seed(logger)
    elif action == "config":
        show_config(logger)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server under uvicorn."""
    from meeting_notes.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    log_with_source(
        logger, "cli", "info", "Starting server",
        host=server_host, port=server_port, reload=reload,
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "meeting_notes.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        log_with_source(logger, "cli", "info", "Server stopped")
    except subprocess.CalledProcessError as e:
        log_with_source(logger, "cli", "error", "Server failed to start", exit_code=e.returncode)
        sys.exit(e.returncode)


def run_migrations(logger) -> None:
    """Apply Alembic migrations up to head."""
    cmd = [
        sys.executable, "-m", "alembic",
        "-c", str(MIGRATIONS_INI),
        "upgrade", "head",
    ]

    log_with_source(logger, "cli", "info", "Running migrations", config=str(MIGRATIONS_INI))
    click.echo(f"Running: {' '.join(cmd)}\n")

    result = subprocess.run(cmd)
    if result.returncode != 0:
        log_with_source(logger, "cli", "error", "Migrations failed", exit_code=result.returncode)
        sys.exit(result.returncode)

    click.echo(click.style("Database is up to date.", fg="green"))


async def _seed() -> int:
    from meeting_notes.backend.core.database import dispose_engine, get_session_factory
    from meeting_notes.backend.services.seed import seed_notes

    try:
        async with get_session_factory()() as session:
            notes = await seed_notes(session)
            await session.commit()
        return len(notes)
    finally:
        await dispose_engine()


def run_seed(logger) -> None:
    """Insert the sample notes into the configured database."""
    from meeting_notes.backend.core.exceptions import ApplicationError

    try:
        count = asyncio.run(_seed())
    except ApplicationError as e:
        log_with_source(logger, "cli", "error", "Seeding failed", error=e.message, code=e.code)
        click.echo(click.style(f"Seeding failed: {e.message}", fg="red"), err=True)
        sys.exit(1)

    log_with_source(logger, "cli", "info", "Seed complete", count=count)
    if count == 0:
        click.echo("Notes already present; nothing seeded.")
        return
    click.echo(click.style(f"Inserted {count} sample notes.", fg="green"))


def _echo_section(title: str, values: dict, indent: int = 2) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 40)
    _echo_values(values, indent)


def _echo_values(values: dict, indent: int) -> None:
    pad = " " * indent
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_values(value, indent + 2)
        else:
            click.echo(f"{pad}{key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration."""
    from meeting_notes.backend.core.config import get_app_config

    click.echo("Application Configuration:")

    try:
        app_config = get_app_config()
        _echo_section("Application Settings (from YAML):", app_config.application.model_dump())
        _echo_section("Database Settings (from YAML):", app_config.database.model_dump())
        _echo_section("Logging Settings (from YAML):", app_config.logging.model_dump())
    except Exception as e:
        log_with_source(logger, "cli", "error", "Failed to load configuration", error=str(e))
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"), err=True)
        sys.exit(1)

    log_with_source(logger, "cli", "info", "Configuration displayed successfully")


def show_info(logger) -> None:
    """Display application information."""
    from meeting_notes.backend.core.config import get_app_config

    app_settings = get_app_config().application
    click.echo(app_settings.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app_settings.version}")
    click.echo(f"Description: {app_settings.description}")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the API server")
    click.echo("  --action migrate  Apply database migrations")
    click.echo("  --action seed     Insert sample notes into an empty database")
    click.echo("  --action config   Display configuration")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    log_with_source(logger, "cli", "debug", "Info displayed")


if __name__ == "__main__":
    main()
