"""Database and server CLI commands."""

from typing import Optional

import typer
import uvicorn

from recordstore.api.http import create_app
from recordstore.core.services import DbManageService, DbSessionService

from .utils import console, get_state


def init_db(ctx: typer.Context) -> None:
    """Create all database tables."""
    config = get_state(ctx).config
    db = DbSessionService(config.database, config.app.environment)
    try:
        DbManageService(db.engine).create_all()
    finally:
        db.dispose()
    console.print(f"[green]✓[/green] Tables created in {config.database.url}")


def status(ctx: typer.Context) -> None:
    """Check that the database is reachable."""
    config = get_state(ctx).config
    db = DbSessionService(config.database, config.app.environment)
    try:
        healthy = db.health_check()
    finally:
        db.dispose()

    if not healthy:
        console.print(f"[red]❌ Database unreachable: {config.database.url}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Database healthy: {config.database.url}")


def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Bind host"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Serve the HTTP API with uvicorn."""
    config = get_state(ctx).config
    app = create_app(config)
    uvicorn.run(
        app,
        host=host or config.app.host,
        port=port or config.app.port,
        log_config=None,
    )
