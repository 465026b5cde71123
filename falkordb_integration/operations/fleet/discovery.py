"""One fleet session: token broker plus instance aggregator over a shared client."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from falkordb_integration.fleet import FleetClient, FleetClientConfig
from falkordb_integration.models.api import FalkorDBInstance
from .aggregator import InstanceAggregator
from .normalizer import InstanceNormalizer
from .subscriptions import SubscriptionEnumerator
from .token_broker import TokenBroker


class FleetDiscovery:
  """Credential validation and account-wide instance discovery."""

  def __init__(self, client: FleetClient):
    self.broker = TokenBroker(client)
    self.aggregator = InstanceAggregator(
      SubscriptionEnumerator(client), InstanceNormalizer(client)
    )

  @classmethod
  @asynccontextmanager
  async def open(
    cls, config: Optional[FleetClientConfig] = None
  ) -> AsyncIterator["FleetDiscovery"]:
    """Yield a discovery session whose HTTP client is closed on exit."""
    async with FleetClient(config) as client:
      yield cls(client)

  async def validate_credentials(self, email: str, password: str) -> None:
    """Raise AuthError unless the account credentials are accepted."""
    await self.broker.authenticate(email, password)

  async def discover_instances(
    self, email: str, password: str
  ) -> List[FalkorDBInstance]:
    """Sign in and list every running instance of the account."""
    admin_token, user_token = await self.broker.authenticate(email, password)
    return await self.aggregator.list_all_instances(admin_token, user_token)
