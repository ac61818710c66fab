"""
Configuration constants for tokenguard

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    """Retrieve a string from the environment, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# Demo authorization server
PORT = _get_env_int("PORT", 3333)
TOKEN = _get_env_str("TOKEN", "123456")
REFRESH_TOKEN = _get_env_str("REFRESH_TOKEN", "abcd")
ROUTE_GET_AUTH = _get_env_str("ROUTE_GET_AUTH", "/auth")
ROUTE_POST_TODO = _get_env_str("ROUTE_POST_TODO", "/todo")
ROUTE_POST_REFRESH_TOKEN = _get_env_str("ROUTE_POST_REFRESH_TOKEN", "/refresh-token")

# Client side
API_BASE_URL = _get_env_str("API_BASE_URL", f"http://localhost:{PORT}")
ACCESS_TOKEN = _get_env_str("ACCESS_TOKEN", "")
TOKEN_FILE = _get_env_str("TOKEN_FILE", "")
REQUEST_TIMEOUT_SECONDS = _get_env_float(
    "REQUEST_TIMEOUT_SECONDS", 30.0
)  # Applies uniformly to original, refresh and replay calls

# Statuses that mean "credential invalid or expired"
AUTH_FAILURE_STATUSES = (401,)

APPLICATION_JSON = "application/json"
