"""
Hello Server - Configuration Module

This module handles environment variable loading, validation, and configuration
management for the Hello Server application. Every setting is optional; with an
empty environment the server listens on port 3000 on all interfaces.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


def get_env_var(var_name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable, falling back to ``default``.

    Every setting of this server is optional, so an unset or blank variable
    means "use the default" rather than an error.

    Args:
        var_name: Name of the environment variable
        default: Value used when the variable is unset or blank

    Returns:
        The stripped environment variable value or default
    """
    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_env_int(var_name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Get environment variable as integer.

    Raises:
        ConfigurationError: If the variable is set but not an integer
    """
    value = get_env_var(var_name)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"Environment variable {var_name} must be an integer, got: {value}") from e


def get_env_bool(var_name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Get environment variable as boolean."""
    value = get_env_var(var_name)
    if value is None:
        return default

    return value.lower() in ("true", "1", "yes", "on")


# =============================================================================
# LISTENER CONFIGURATION
# =============================================================================

HOST = get_env_var("HOST", default="0.0.0.0")
PORT = get_env_int("PORT", default=3000)

# =============================================================================
# APPLICATION CONFIGURATION (OPTIONAL)
# =============================================================================

FLASK_DEBUG = get_env_bool("FLASK_DEBUG", default=False)
LOG_LEVEL = get_env_var("LOG_LEVEL", default="INFO")

# =============================================================================
# GUNICORN CONFIGURATION (PRODUCTION)
# =============================================================================

GUNICORN_WORKERS = get_env_int("GUNICORN_WORKERS", default=2)
GUNICORN_THREADS = get_env_int("GUNICORN_THREADS", default=4)
GUNICORN_TIMEOUT = get_env_int("GUNICORN_TIMEOUT", default=30)
GUNICORN_WORKER_CLASS = get_env_var("GUNICORN_WORKER_CLASS", default="gthread")


def validate_config() -> None:
    """
    Validate configuration on startup.

    Raises:
        ConfigurationError: If configuration validation fails
    """
    logger.debug("Validating configuration...")

    # Port 0 asks the OS for an ephemeral port
    if PORT is None or not 0 <= PORT <= 65535:
        raise ConfigurationError(f"PORT must be between 0 and 65535, got: {PORT}")

    if not HOST:
        raise ConfigurationError("HOST must not be empty")

    if LOG_LEVEL and not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        raise ConfigurationError(f"LOG_LEVEL is not a valid logging level: {LOG_LEVEL}")

    for name in ("GUNICORN_WORKERS", "GUNICORN_THREADS", "GUNICORN_TIMEOUT"):
        value = globals()[name]
        if value is not None and value < 1:
            raise ConfigurationError(f"{name} must be a positive integer, got: {value}")

    logger.debug("Configuration validation passed")


# Validate configuration on import
try:
    validate_config()
except ConfigurationError as e:
    logger.error(f"Configuration validation failed: {e}")
    raise
