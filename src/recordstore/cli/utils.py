"""Shared utilities for CLI commands."""

from dataclasses import dataclass

import typer
from rich.console import Console

from recordstore.core.services import DbManageService, DbSessionService
from recordstore.runtime.config.config_data import ConfigData

# Initialize Rich console for colored output
console = Console()


@dataclass
class CliState:
    """Configuration resolved by the root command, passed to subcommands."""

    config: ConfigData


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        raise RuntimeError("CLI state is not initialized")
    return state


def open_database(ctx: typer.Context) -> DbSessionService:
    """Create the database service, creating tables when configured to."""
    config = get_state(ctx).config
    db = DbSessionService(config.database, config.app.environment)
    if config.database.create_tables:
        DbManageService(db.engine).create_all()
    return db
