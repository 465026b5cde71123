"""
Centralized environment variable configuration.

This module provides a single source of truth for all environment variables,
with type conversions and default values.

Organization:
- Helper functions for type-safe env var access
- Core application settings
- Database configuration
- Fleet API integration
- Environment variable sync tuning
"""

import os

from .constants import (
  DEFAULT_ACTION_URL,
  DEFAULT_API_BASE_URL,
  DEFAULT_AUTH_URL,
  DEFAULT_HTTP_TIMEOUT,
  ENV_SYNC_MAX_RETRIES,
  ENV_SYNC_RETRY_BACKOFF,
  ENV_SYNC_RETRY_DELAY,
)


# ==========================================================================
# HELPER FUNCTIONS FOR TYPE-SAFE ENVIRONMENT VARIABLE ACCESS
# ==========================================================================


def get_int_env(key: str, default: int) -> int:
  """
  Get an integer environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Integer value from environment or default
  """
  try:
    return int(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    # Use print instead of logger to avoid circular import
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_float_env(key: str, default: float) -> float:
  """
  Get a float environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Float value from environment or default
  """
  try:
    return float(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_bool_env(key: str, default: bool = False) -> bool:
  """Get a boolean environment variable."""
  value = os.getenv(key, str(default)).lower()
  return value in ("true", "1", "yes", "on")


def get_str_env(key: str, default: str = "") -> str:
  """Get a string environment variable."""
  return os.getenv(key, default)


# ==========================================================================
# MAIN CONFIGURATION CLASS
# ==========================================================================


class EnvConfig:
  """
  Centralized environment variable configuration.

  Variables are organized into logical groups for easier maintenance.
  """

  # ==========================================================================
  # CORE APPLICATION SETTINGS
  # ==========================================================================

  ENVIRONMENT = get_str_env("ENVIRONMENT", "dev")
  LOG_LEVEL = get_str_env("LOG_LEVEL", "INFO")

  HOST = get_str_env("HOST", "0.0.0.0")
  PORT = get_int_env("PORT", 8000)

  # ==========================================================================
  # DATABASE
  # ==========================================================================

  DATABASE_URL = get_str_env("DATABASE_URL", "sqlite:///./falkordb_integration.db")
  DATABASE_ECHO = get_bool_env("DATABASE_ECHO", False)
  DATABASE_POOL_SIZE = get_int_env("DATABASE_POOL_SIZE", 5)
  DATABASE_MAX_OVERFLOW = get_int_env("DATABASE_MAX_OVERFLOW", 10)

  # ==========================================================================
  # FLEET API
  # ==========================================================================

  FALKORDB_AUTH_API_KEY = get_str_env("FALKORDB_AUTH_API_KEY", "")
  FALKORDB_SERVICE_ID = get_str_env("FALKORDB_SERVICE_ID", "")
  FALKORDB_ENVIRONMENT_ID = get_str_env("FALKORDB_ENVIRONMENT_ID", "")

  FALKORDB_AUTH_URL = get_str_env("FALKORDB_AUTH_URL", DEFAULT_AUTH_URL)
  FALKORDB_API_BASE_URL = get_str_env("FALKORDB_API_BASE_URL", DEFAULT_API_BASE_URL)
  FALKORDB_ACTION_URL = get_str_env("FALKORDB_ACTION_URL", DEFAULT_ACTION_URL)
  FALKORDB_HTTP_TIMEOUT = get_float_env("FALKORDB_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)

  # ==========================================================================
  # ENVIRONMENT VARIABLE SYNC
  # ==========================================================================

  ENV_SYNC_MAX_RETRIES = get_int_env("ENV_SYNC_MAX_RETRIES", ENV_SYNC_MAX_RETRIES)
  ENV_SYNC_RETRY_DELAY = get_float_env("ENV_SYNC_RETRY_DELAY", ENV_SYNC_RETRY_DELAY)
  ENV_SYNC_RETRY_BACKOFF = get_float_env(
    "ENV_SYNC_RETRY_BACKOFF", ENV_SYNC_RETRY_BACKOFF
  )

  @classmethod
  def is_production(cls) -> bool:
    return cls.ENVIRONMENT == "prod"

  @classmethod
  def is_staging(cls) -> bool:
    return cls.ENVIRONMENT == "staging"

  @classmethod
  def is_development(cls) -> bool:
    return cls.ENVIRONMENT == "dev"

  @classmethod
  def is_test(cls) -> bool:
    return cls.ENVIRONMENT == "test"


# ==========================================================================
# SINGLETON INSTANCE
# ==========================================================================

env = EnvConfig()
