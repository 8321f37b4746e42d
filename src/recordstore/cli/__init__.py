"""Main CLI application module."""

from pathlib import Path
from typing import Optional

import typer

from recordstore.runtime.config.config_template import load_config
from recordstore.runtime.config.settings import EnvironmentVariables
from recordstore.runtime.logging_setup import configure_logging

from .book_commands import book_app
from .db_commands import init_db, serve, status
from .utils import CliState

app = typer.Typer(
    help="📚 recordstore - transactional book store",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(book_app, name="book")
app.command("init-db")(init_db)
app.command("status")(status)
app.command("serve")(serve)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: $RECORDSTORE_CONFIG)"
    ),
    database_url: Optional[str] = typer.Option(
        None, "--database-url", help="Override the database URL"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the log level"),
) -> None:
    """Load configuration and logging for every command."""
    env_vars = EnvironmentVariables()
    if config_file is not None:
        env_vars.recordstore_config = str(config_file)
    config = load_config(env_vars)

    if database_url:
        config.database.url = database_url
    if log_level:
        config.logging.level = log_level.upper()

    configure_logging(config)
    ctx.obj = CliState(config=config)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
