"""Configuration template substitution utilities."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from recordstore.runtime.config.config_data import AppConfig, ConfigData
from recordstore.runtime.config.settings import EnvironmentVariables


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Values are looked up in ``environ`` (the process environment by default).

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    if environ is None:
        environ = os.environ

    def replacer(match):
        var_expr = match.group(1)

        # Handle default values: ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return environ.get(var_name, default)

        # Handle error messages: ${VAR:?message}
        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = environ.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        else:
            var_name = var_expr
            value = environ.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name} not set")
            return value

    pattern = r'\$\{([^}]+)\}'
    return re.sub(pattern, replacer, text)


def _environment_overrides(env_mode: str) -> dict[str, str]:
    """Variables prefixed with the environment name, with the prefix removed.

    With ``APP_ENVIRONMENT=test``, ``TEST_DATABASE_URL`` overrides
    ``DATABASE_URL`` for the substitution.
    """
    prefix = f"{env_mode.upper()}_"
    return {
        var[len(prefix):]: value
        for var, value in os.environ.items()
        if var.startswith(prefix) and len(var) > len(prefix)
    }


def load_templated_yaml(file_path: Path, env_mode: str | None = None) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_mode: Environment whose prefixed variables take precedence.
            Defaults to ``APP_ENVIRONMENT`` or ``development``.

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the
            content is not a valid configuration
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    env_mode = env_mode or os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)

    overrides = _environment_overrides(env_mode)
    if overrides:
        logger.debug("Applying environment-specific overrides: {}", sorted(overrides))

    substituted_content = substitute_env_vars(content, {**os.environ, **overrides})

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        config_data = loaded.get("config", {})
        config = ConfigData(**config_data)
        if config.app.environment != env_mode:
            config.app = AppConfig.model_validate(
                {**config.app.model_dump(), "environment": env_mode}
            )
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    return config


def load_config(env_vars: EnvironmentVariables | None = None) -> ConfigData:
    """Load the configuration named by the environment, or the defaults.

    The file comes from ``RECORDSTORE_CONFIG`` (``config.yaml`` by default);
    when it does not exist the built-in defaults are used. ``LOG_LEVEL``
    overrides the configured logging level.
    """
    env_vars = env_vars or EnvironmentVariables()
    config_path = Path(env_vars.recordstore_config)

    if config_path.exists():
        config = load_templated_yaml(config_path, env_vars.app_environment)
    else:
        logger.debug("No configuration file at {}; using defaults", config_path)
        config = ConfigData()
        config.app.environment = env_vars.app_environment

    if env_vars.log_level:
        config.logging.level = env_vars.log_level.upper()
    return config
