"""
Base Fleet API Client.

URL building and status-code classification shared by the async client.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from .config import FleetClientConfig
from .exceptions import (
  FleetAPIError,
  FleetClientError,
  FleetServerError,
  FleetTransientError,
)


class BaseFleetClient:
  """Base class for fleet API clients."""

  def __init__(self, config: Optional[FleetClientConfig] = None):
    self.config = config or FleetClientConfig.from_env()

  def _build_api_url(self, path: str) -> str:
    """Build a full fleet API URL from a relative path."""
    return f"{self.config.api_base_url.rstrip('/')}/{path.lstrip('/')}"

  def _instances_path(self) -> str:
    service_id = quote(self.config.service_id, safe="")
    environment_id = quote(self.config.environment_id, safe="")
    return f"fleet/service/{service_id}/environment/{environment_id}/instances"

  @staticmethod
  def _redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Truncate credentials before headers reach a log line."""
    redacted = dict(headers)
    if "Authorization" in redacted:
      redacted["Authorization"] = redacted["Authorization"][:8] + "..."
    return redacted

  def _handle_response_error(
    self, status_code: int, response_data: Optional[Dict[str, Any]] = None
  ) -> FleetAPIError:
    """
    Convert HTTP status code to appropriate exception.

    Args:
        status_code: HTTP status code
        response_data: Response body data

    Returns:
        Appropriate FleetAPIError subclass
    """
    error_message = f"Fleet API request failed with status {status_code}"
    if response_data and isinstance(response_data, dict):
      error_message = str(
        response_data.get("message") or response_data.get("detail") or error_message
      )

    if status_code in (502, 503, 504):
      return FleetTransientError(error_message, status_code, response_data)
    elif 400 <= status_code < 500:
      return FleetClientError(error_message, status_code, response_data)
    elif status_code >= 500:
      return FleetServerError(error_message, status_code, response_data)
    else:
      return FleetAPIError(error_message, status_code, response_data)
