"""
Fleet API Client Exceptions.

Transport-level errors. The fleet operations translate these into the
service-level errors in falkordb_integration.exceptions.
"""

from typing import Any, Dict, Optional


class FleetAPIError(Exception):
  """Base exception for all fleet API errors."""

  def __init__(
    self,
    message: str,
    status_code: Optional[int] = None,
    response_data: Optional[Dict[str, Any]] = None,
  ):
    super().__init__(message)
    self.status_code = status_code
    self.response_data = response_data


class FleetTransientError(FleetAPIError):
  """
  Network failures and gateway errors.

  Examples: connection refused, timeouts, 502 Bad Gateway
  """

  pass


class FleetClientError(FleetAPIError):
  """
  Errors caused by the request itself.

  Examples: 400 Bad Request, 401 Unauthorized, 404 Not Found
  """

  pass


class FleetServerError(FleetAPIError):
  """Server errors such as 500 Internal Server Error."""

  pass


class FleetResponseError(FleetAPIError):
  """A 2xx response whose body does not have the expected shape."""

  pass
