"""
Site settings: the FalkorDB Cloud account a site is bound to.
"""

from typing import AsyncContextManager, Callable, Optional, Tuple

from pydantic import ValidationError

from ..exceptions import (
  ConfigPersistenceError,
  InvalidConfigError,
  MissingContextError,
  SiteConfigurationNotFoundError,
)
from ..logger import logger
from ..models.api import InstanceSummary, SiteSettings, SiteSettingsResponse
from ..storage import SiteConfigurationStore, StoredSiteConfiguration
from .env_vars import env_prefix, env_variable_names
from .fleet import FleetDiscovery

DiscoveryFactory = Callable[[], AsyncContextManager[FleetDiscovery]]


def require_context(team_id: Optional[str], site_id: Optional[str]) -> None:
  """Reject calls that arrive without a team or site identifier."""
  if not team_id:
    raise MissingContextError("teamId")
  if not site_id:
    raise MissingContextError("siteId")


def parse_site_settings(config: dict) -> SiteSettings:
  """
  Validate a stored configuration document.

  Raises:
      InvalidConfigError: If email or password are missing or malformed
  """
  try:
    return SiteSettings.model_validate(config or {})
  except ValidationError as e:
    raise InvalidConfigError(
      details={"errors": [".".join(map(str, err["loc"])) for err in e.errors()]}
    ) from e


async def load_site_settings(
  store: SiteConfigurationStore, team_id: str, site_id: str
) -> Tuple[SiteSettings, StoredSiteConfiguration]:
  """Load and validate the configuration of a site."""
  stored = await store.get_site_configuration(team_id, site_id)
  if stored is None:
    raise SiteConfigurationNotFoundError(team_id, site_id)
  return parse_site_settings(stored.config), stored


def summarize(settings: SiteSettings) -> SiteSettingsResponse:
  """Settings as shown to callers, without passwords."""
  return SiteSettingsResponse(
    email=str(settings.email),
    instances=[
      InstanceSummary(
        **instance.model_dump(exclude={"password"}),
        env_prefix=env_prefix(instance.idx),
        env_variables=env_variable_names(instance.idx),
      )
      for instance in settings.instances
    ],
  )


class SiteSettingsService:
  """Query, store and remove the account credentials of a site."""

  def __init__(
    self,
    config_store: SiteConfigurationStore,
    discovery_factory: DiscoveryFactory = FleetDiscovery.open,
  ):
    self.config_store = config_store
    self.discovery_factory = discovery_factory

  async def query(self, team_id: str, site_id: str) -> Optional[SiteSettingsResponse]:
    """
    Current settings of a site.

    A site without configuration yields an empty response; a configuration
    that fails validation is logged and yields None.
    """
    require_context(team_id, site_id)

    stored = await self.config_store.get_site_configuration(team_id, site_id)
    if stored is None:
      return SiteSettingsResponse(email=None)

    try:
      settings = parse_site_settings(stored.config)
    except InvalidConfigError as e:
      logger.warning(
        "Failed to parse site settings",
        extra={
          "team_id": team_id,
          "site_id": site_id,
          "metadata": e.details,
        },
      )
      return None

    return summarize(settings)

  async def set_account(
    self, team_id: str, site_id: str, email: str, password: str
  ) -> None:
    """
    Validate account credentials against the fleet, then store them.

    Existing attached instances and the slot counter are preserved.
    """
    require_context(team_id, site_id)

    async with self.discovery_factory() as discovery:
      await discovery.validate_credentials(email, password)

    try:
      existing = await self.config_store.get_site_configuration(team_id, site_id)
      if existing is None:
        await self.config_store.create_site_configuration(
          team_id, site_id, {"email": email, "password": password, "instances": []}
        )
      else:
        await self.config_store.update_site_configuration(
          team_id,
          site_id,
          {**(existing.config or {}), "email": email, "password": password},
          expected_version=existing.version,
        )
    except ConfigPersistenceError:
      raise
    except Exception as e:
      raise ConfigPersistenceError(cause=e) from e

    logger.info(
      "Stored FalkorDB account for site",
      extra={"team_id": team_id, "site_id": site_id, "action": "set_account"},
    )

  async def delete(self, team_id: str, site_id: str) -> None:
    """
    Remove the site configuration.

    Environment variables of attached instances are left in place.
    """
    require_context(team_id, site_id)

    existing = await self.config_store.get_site_configuration(team_id, site_id)
    if existing is not None:
      leftover = [
        env_prefix(instance["idx"])
        for instance in (existing.config or {}).get("instances") or []
        if isinstance(instance, dict)
        and isinstance(instance.get("idx"), int)
        and instance["idx"] >= 0
      ]
      if leftover:
        logger.warning(
          f"Deleting site configuration leaves environment variables for "
          f"prefixes {', '.join(leftover)}",
          extra={"team_id": team_id, "site_id": site_id, "action": "delete"},
        )

    await self.config_store.delete_site_configuration(team_id, site_id)
