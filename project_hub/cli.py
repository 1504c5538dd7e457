"""CLI entry point for project-hub."""

import click
import uvicorn

from project_hub.config import get_settings


@click.group()
def main():
    """Local project tracking dashboard backend."""
    pass


@main.command()
@click.option("--port", type=int, default=None, help="Port to serve on (default: PORT setting).")
@click.option("--host", default=None, help="Host to bind to (default: HOST setting).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def serve(port: int | None, host: str | None, reload: bool):
    """Start the API server."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    click.echo(f"Starting project-hub on http://{host}:{port}")
    uvicorn.run(
        "project_hub.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@main.command("init-db")
def init_db_command():
    """Create any missing tables in the configured database."""
    import asyncio

    from project_hub.database import Database

    settings = get_settings()

    async def _run():
        database = Database(settings.database_url, echo=settings.database_echo)
        try:
            await database.create_schema()
        finally:
            await database.dispose()

    asyncio.run(_run())
    click.echo("Database schema ready")
