"""
Environment variable validation for startup checks.
"""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
  """Raised when configuration validation fails."""

  pass


class EnvValidator:
  """Validates environment configuration at startup."""

  REQUIRED_FLEET_VARS = {
    "FALKORDB_AUTH_API_KEY": "API key for the fleet token service",
    "FALKORDB_SERVICE_ID": "Fleet service identifier",
    "FALKORDB_ENVIRONMENT_ID": "Fleet environment identifier",
  }

  @staticmethod
  def validate_required_vars(env_config) -> None:
    """
    Validate that all required environment variables are set.

    Missing fleet settings are fatal in production and a warning elsewhere,
    so local development can run against fakes.

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []
    warnings: List[str] = []

    for var_name, description in EnvValidator.REQUIRED_FLEET_VARS.items():
      if getattr(env_config, var_name, None):
        continue
      message = f"{var_name}: {description} is not set"
      if env_config.ENVIRONMENT == "prod":
        errors.append(message)
      else:
        warnings.append(message)

    if env_config.ENVIRONMENT == "prod" and str(
      getattr(env_config, "DATABASE_URL", "")
    ).startswith("sqlite"):
      errors.append("DATABASE_URL: SQLite is not supported in production")

    for warning in warnings:
      logger.warning(f"Configuration warning: {warning}")

    if errors:
      raise ConfigValidationError(
        "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
      )

  @staticmethod
  def get_config_summary(env_config) -> Dict[str, Any]:
    """Summarize configuration for startup logs, with secrets redacted."""
    return {
      "environment": env_config.ENVIRONMENT,
      "database": str(env_config.DATABASE_URL).split("://", 1)[0],
      "fleet_api": env_config.FALKORDB_API_BASE_URL,
      "service_id": env_config.FALKORDB_SERVICE_ID or None,
      "environment_id": env_config.FALKORDB_ENVIRONMENT_ID or None,
      "api_key_configured": bool(env_config.FALKORDB_AUTH_API_KEY),
      "env_sync_max_retries": env_config.ENV_SYNC_MAX_RETRIES,
    }
