"""
Fleet API client package.

Low-level async access to the managed-database fleet API.
"""

from .client import FleetClient
from .config import FleetClientConfig
from .exceptions import (
  FleetAPIError,
  FleetClientError,
  FleetResponseError,
  FleetServerError,
  FleetTransientError,
)

__all__ = [
  "FleetAPIError",
  "FleetClient",
  "FleetClientConfig",
  "FleetClientError",
  "FleetResponseError",
  "FleetServerError",
  "FleetTransientError",
]
