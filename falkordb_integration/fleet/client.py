"""
Asynchronous Fleet API Client.

Thin wrapper over httpx for the four upstream calls the service makes: admin
token issuance, customer sign-in, subscription listing and per-subscription
instance listing. Requests are never retried here.
"""

import json
import time
from typing import Any, Dict, List, Optional

import httpx

from falkordb_integration.config.logging import log_fleet_call
from falkordb_integration.logger import fleet_logger as logger
from .base import BaseFleetClient
from .config import FleetClientConfig
from .exceptions import FleetResponseError, FleetTransientError


class FleetClient(BaseFleetClient):
  """Asynchronous client for fleet API operations."""

  def __init__(
    self,
    config: Optional[FleetClientConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    """
    Initialize asynchronous fleet client.

    Args:
        config: Client configuration (defaults to the process environment)
        transport: Optional httpx transport, mainly for tests
    """
    super().__init__(config)

    self.client = httpx.AsyncClient(
      timeout=httpx.Timeout(self.config.timeout),
      headers=self.config.headers,
      verify=self.config.verify_ssl,
      transport=transport,
    )

  async def __aenter__(self):
    return self

  async def __aexit__(self, exc_type, exc_val, exc_tb):
    await self.close()

  async def close(self):
    """Close the client and cleanup resources."""
    await self.client.aclose()

  async def _request(
    self,
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    json_data: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
  ) -> httpx.Response:
    """
    Make a single HTTP request and raise on any non-2xx status.

    Args:
        method: HTTP method
        url: Absolute URL
        headers: Per-request headers (credentials go here)
        json_data: JSON body
        params: Query parameters

    Returns:
        Response object
    """
    request_kwargs: Dict[str, Any] = {"method": method, "url": url}
    if headers is not None:
      request_kwargs["headers"] = headers
    if json_data is not None:
      request_kwargs["json"] = json_data
    if params is not None:
      request_kwargs["params"] = params

    logger.debug(
      f"Making request: {method} {url} headers={self._redact_headers(headers or {})}"
    )

    start = time.perf_counter()
    try:
      response = await self.client.request(**request_kwargs)
    except httpx.TimeoutException as e:
      raise FleetTransientError(f"Request timeout: {e}") from e
    except httpx.RequestError as e:
      raise FleetTransientError(f"Request error: {e}") from e

    log_fleet_call(
      logger,
      method,
      url.split("?", 1)[0],
      response.status_code,
      (time.perf_counter() - start) * 1000,
    )

    if not response.is_success:
      try:
        error_data = response.json()
      except ValueError:
        error_data = {"detail": response.text}
      if not isinstance(error_data, dict):
        error_data = {"detail": error_data}
      raise self._handle_response_error(response.status_code, error_data)

    return response

  @staticmethod
  def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
      data = response.json()
    except ValueError as e:
      raise FleetResponseError(
        "Fleet API returned a non-JSON body", response.status_code
      ) from e
    if not isinstance(data, dict):
      raise FleetResponseError(
        "Fleet API returned an unexpected body", response.status_code
      )
    return data

  async def get_admin_token(self) -> str:
    """
    Exchange the static service API key for an admin token.

    The token service answers with the bare token, either as plain text or
    as a JSON string.
    """
    response = await self._request(
      "GET",
      self.config.auth_url,
      headers={"Authorization": self.config.api_key},
    )

    token: Any = response.text.strip()
    if token.startswith('"'):
      try:
        token = json.loads(token)
      except ValueError:
        pass

    if not isinstance(token, str) or not token:
      raise FleetResponseError("Token service returned an empty token")
    return token

  async def sign_in(self, admin_token: str, email: str, password: str) -> str:
    """Exchange admin token plus customer email/password for a user token."""
    response = await self._request(
      "POST",
      self._build_api_url("customer-user-signin"),
      headers={
        "Authorization": f"Bearer {admin_token}",
        "Content-Type": "application/json",
      },
      json_data={"email": email, "password": password},
    )

    token = self._json_body(response).get("jwtToken")
    if not token:
      raise FleetResponseError("Sign-in response did not include a token")
    return token

  async def list_subscription_ids(
    self, user_token: str, environment_type: Optional[str] = None
  ) -> List[str]:
    """List the subscription ids owned by the signed-in customer."""
    response = await self._request(
      "POST",
      self.config.action_url,
      params={"endpoint": "/subscription"},
      headers={
        "Authorization": f"Bearer {user_token}",
        "Content-Type": "application/json",
      },
      json_data={
        "endpoint": "/subscription",
        "method": "GET",
        "queryParams": {
          "environmentType": environment_type
          or self.config.subscription_environment_type,
        },
      },
    )

    ids = self._json_body(response).get("ids") or []
    if not isinstance(ids, list):
      raise FleetResponseError("Subscription listing returned malformed ids")
    return [str(subscription_id) for subscription_id in ids]

  async def list_resource_instances(
    self, admin_token: str, subscription_id: str
  ) -> List[Dict[str, Any]]:
    """Fetch the raw resource instance records of one subscription."""
    response = await self._request(
      "GET",
      self._build_api_url(self._instances_path()),
      params={"SubscriptionId": subscription_id},
      headers={"Authorization": f"Bearer {admin_token}"},
    )

    instances = self._json_body(response).get("resourceInstances") or []
    if not isinstance(instances, list):
      raise FleetResponseError("Instance listing returned malformed records")
    return instances
