"""Runtime configuration, application context and logging setup."""

from .context import AppContext, get_config, get_context, set_config, with_context
from .logging_setup import configure_logging

__all__ = [
    "AppContext",
    "configure_logging",
    "get_config",
    "get_context",
    "set_config",
    "with_context",
]
