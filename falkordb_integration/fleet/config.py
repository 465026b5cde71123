"""
Fleet API Client Configuration.

Deployment parameters are carried in an explicit struct so callers and tests
can hand the broker and normalizer their own values instead of relying on
process-wide state.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict

from falkordb_integration.config.constants import (
  DEFAULT_ACTION_URL,
  DEFAULT_API_BASE_URL,
  DEFAULT_AUTH_URL,
  DEFAULT_HTTP_TIMEOUT,
  RESERVED_RESOURCE_PREFIX,
  SUBSCRIPTION_ENVIRONMENT_TYPE,
)


@dataclass
class FleetClientConfig:
  """Configuration for the fleet API client."""

  # Endpoints
  auth_url: str = DEFAULT_AUTH_URL
  api_base_url: str = DEFAULT_API_BASE_URL
  action_url: str = DEFAULT_ACTION_URL

  # Deployment parameters
  api_key: str = ""
  service_id: str = ""
  environment_id: str = ""

  # Discovery rules
  subscription_environment_type: str = SUBSCRIPTION_ENVIRONMENT_TYPE
  reserved_resource_prefix: str = RESERVED_RESOURCE_PREFIX

  # Request settings
  timeout: float = DEFAULT_HTTP_TIMEOUT
  headers: Dict[str, str] = field(default_factory=dict)
  verify_ssl: bool = True

  @classmethod
  def from_env(cls) -> "FleetClientConfig":
    """Create configuration from the process environment."""
    from falkordb_integration.config import env

    return cls(
      auth_url=env.FALKORDB_AUTH_URL,
      api_base_url=env.FALKORDB_API_BASE_URL.rstrip("/"),
      action_url=env.FALKORDB_ACTION_URL,
      api_key=env.FALKORDB_AUTH_API_KEY,
      service_id=env.FALKORDB_SERVICE_ID,
      environment_id=env.FALKORDB_ENVIRONMENT_ID,
      timeout=env.FALKORDB_HTTP_TIMEOUT,
    )

  def with_overrides(self, **kwargs: Any) -> "FleetClientConfig":
    """
    Create a new config with overridden values.

    Args:
        **kwargs: Values to override

    Returns:
        New FleetClientConfig instance
    """
    return replace(self, **{"headers": self.headers.copy(), **kwargs})
