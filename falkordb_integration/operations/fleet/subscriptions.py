"""Subscription listing for a signed-in account."""

from typing import List

from falkordb_integration.exceptions import UpstreamError
from falkordb_integration.fleet import FleetAPIError, FleetClient


class SubscriptionEnumerator:
  """Lists the production subscriptions owned by an account."""

  def __init__(self, client: FleetClient):
    self.client = client

  async def list_subscriptions(self, user_token: str) -> List[str]:
    """
    Return subscription ids for the account behind user_token.

    An empty list is a valid answer: no subscriptions means no instances.
    """
    try:
      return await self.client.list_subscription_ids(
        user_token, self.client.config.subscription_environment_type
      )
    except FleetAPIError as e:
      raise UpstreamError(
        "Failed to list subscriptions",
        details={"status_code": e.status_code},
        cause=e,
      ) from e
