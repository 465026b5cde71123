"""Two-tier token exchange against the fleet token service."""

from falkordb_integration.exceptions import AuthError
from falkordb_integration.fleet import FleetAPIError, FleetClient
from falkordb_integration.logger import fleet_logger as logger


class TokenBroker:
  """
  Exchanges the service API key for an admin token, then the admin token
  plus account email/password for a user token.

  Stateless; tokens are not cached and nothing is retried. Upstream
  transport failures and credential rejections both surface as AuthError.
  """

  def __init__(self, client: FleetClient):
    self.client = client

  async def get_admin_token(self) -> str:
    try:
      return await self.client.get_admin_token()
    except FleetAPIError as e:
      logger.warning(
        f"Admin token request failed: {e}",
        extra={"component": "token_broker", "action": "admin_token"},
      )
      raise AuthError(cause=e) from e

  async def get_user_token(self, admin_token: str, email: str, password: str) -> str:
    try:
      return await self.client.sign_in(admin_token, email, password)
    except FleetAPIError as e:
      logger.info(
        f"Customer sign-in failed: {e}",
        extra={"component": "token_broker", "action": "user_token"},
      )
      raise AuthError(cause=e) from e

  async def authenticate(self, email: str, password: str) -> tuple[str, str]:
    """Resolve both tokens for an account. Returns (admin_token, user_token)."""
    admin_token = await self.get_admin_token()
    user_token = await self.get_user_token(admin_token, email, password)
    return admin_token, user_token
