"""
Attachment of discovered instances to a site.

Attaching writes the site configuration first and the instance's four
environment variables second; detaching removes the instance from the
configuration first and deletes its variables second. The two stores share
no transaction, so the variable step is retried with backoff and, if it
still fails, the configuration write is reverted before EnvSyncFailedError
is raised.
"""

import asyncio
import random
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..config import env
from ..config.logging import log_error
from ..exceptions import (
  ConfigPersistenceError,
  DuplicateInstanceError,
  EnvSyncFailedError,
  InstanceNotFoundError,
)
from ..logger import logger
from ..models.api import (
  AttachedInstance,
  FalkorDBInstance,
  InstanceSummary,
  SiteSettings,
)
from ..storage import (
  EnvironmentVariableStore,
  SiteConfigurationStore,
  StoredSiteConfiguration,
)
from .client_code import generate_client_code
from .env_vars import env_variable_names, env_variables_for
from .fleet import FleetDiscovery
from .site_settings_service import (
  DiscoveryFactory,
  load_site_settings,
  require_context,
  summarize,
)


def next_slot(settings: SiteSettings) -> int:
  """
  Slot for the next attached instance.

  Slots are never handed out twice: the stored counter only grows, and
  configurations written before the counter existed fall back to one past
  the highest slot in use.
  """
  candidates = [settings.next_idx or 0]
  candidates.extend(instance.idx + 1 for instance in settings.instances)
  return max(candidates)


class AttachmentService:
  """Attaches and detaches instances and keeps site variables in line."""

  def __init__(
    self,
    config_store: SiteConfigurationStore,
    env_store: EnvironmentVariableStore,
    discovery_factory: DiscoveryFactory = FleetDiscovery.open,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
    retry_backoff: Optional[float] = None,
  ):
    self.config_store = config_store
    self.env_store = env_store
    self.discovery_factory = discovery_factory
    self.max_retries = env.ENV_SYNC_MAX_RETRIES if max_retries is None else max_retries
    self.retry_delay = env.ENV_SYNC_RETRY_DELAY if retry_delay is None else retry_delay
    self.retry_backoff = (
      env.ENV_SYNC_RETRY_BACKOFF if retry_backoff is None else retry_backoff
    )

  # ==========================================================================
  # QUERIES
  # ==========================================================================

  async def list_discoverable_instances(
    self, team_id: str, site_id: str
  ) -> List[FalkorDBInstance]:
    """Running instances available under the site's stored account."""
    require_context(team_id, site_id)
    settings, _ = await load_site_settings(self.config_store, team_id, site_id)

    async with self.discovery_factory() as discovery:
      return await discovery.discover_instances(settings.email, settings.password)

  async def list_attached_instances(
    self, team_id: str, site_id: str
  ) -> List[InstanceSummary]:
    require_context(team_id, site_id)
    settings, _ = await load_site_settings(self.config_store, team_id, site_id)
    return summarize(settings).instances

  async def get_client_code(
    self, team_id: str, site_id: str, instance_id: str
  ) -> str:
    require_context(team_id, site_id)
    settings, _ = await load_site_settings(self.config_store, team_id, site_id)
    instance = self._find(settings, instance_id)
    if instance is None:
      raise InstanceNotFoundError(instance_id)
    return generate_client_code(instance.idx)

  # ==========================================================================
  # ATTACH / DETACH
  # ==========================================================================

  async def add_instance(
    self,
    team_id: str,
    site_id: str,
    instance_id: str,
    username: str,
    password: str,
  ) -> AttachedInstance:
    """
    Attach a discovered instance to the site.

    Credentials are re-validated against the fleet on every call.

    Raises:
        SiteConfigurationNotFoundError: No configuration for the site
        InvalidConfigError: Stored configuration fails validation
        DuplicateInstanceError: Instance already attached
        AuthError: Stored account credentials rejected
        UpstreamError: Discovery failed
        InstanceNotFoundError: Instance not among the running instances
        ConfigPersistenceError: Configuration write failed
        EnvSyncFailedError: Variables could not be written
    """
    require_context(team_id, site_id)
    settings, stored = await load_site_settings(self.config_store, team_id, site_id)

    if self._find(settings, instance_id) is not None:
      raise DuplicateInstanceError(instance_id)

    async with self.discovery_factory() as discovery:
      discovered = await discovery.discover_instances(
        settings.email, settings.password
      )

    instance = next((i for i in discovered if i.id == instance_id), None)
    if instance is None:
      raise InstanceNotFoundError(instance_id)

    idx = next_slot(settings)
    attached = AttachedInstance(
      **instance.model_dump(exclude={"username"}),
      username=username,
      password=password,
      idx=idx,
    )
    updated = settings.model_copy(
      update={"instances": [*settings.instances, attached], "next_idx": idx + 1}
    )

    await self._write_config(team_id, site_id, updated.to_document(), stored.version)

    try:
      await self._with_retries(
        lambda: self.env_store.create_or_update_variables(
          team_id, site_id, env_variables_for(attached), is_secret=True
        ),
        action="set_variables",
      )
    except Exception as e:
      compensated = await self._revert_config(team_id, site_id, stored)
      await self._discard_variables(team_id, site_id, idx)
      log_error(
        logger,
        e,
        "attachment",
        "add_instance",
        error_category="env_sync",
        team_id=team_id,
        site_id=site_id,
        metadata={"instance_id": instance_id, "compensated": compensated},
      )
      raise EnvSyncFailedError(
        "Failed to set environment variables",
        details={"instance_id": instance_id, "idx": idx, "compensated": compensated},
        cause=e,
      ) from e

    logger.info(
      f"Attached instance {instance_id} as slot {idx}",
      extra={
        "team_id": team_id,
        "site_id": site_id,
        "instance_id": instance_id,
        "action": "add_instance",
      },
    )
    return attached

  async def remove_instance(
    self, team_id: str, site_id: str, instance_id: str
  ) -> AttachedInstance:
    """
    Detach an instance and delete the variables of its stored slot.

    Other instances and their variables are not touched.
    """
    require_context(team_id, site_id)
    settings, stored = await load_site_settings(self.config_store, team_id, site_id)

    instance = self._find(settings, instance_id)
    if instance is None:
      raise InstanceNotFoundError(instance_id)

    updated = settings.model_copy(
      update={
        "instances": [i for i in settings.instances if i.id != instance_id],
        "next_idx": next_slot(settings),
      }
    )

    await self._write_config(team_id, site_id, updated.to_document(), stored.version)

    try:
      await self._with_retries(
        lambda: self.env_store.delete_environment_variables(
          team_id, site_id, env_variable_names(instance.idx)
        ),
        action="delete_variables",
      )
    except Exception as e:
      compensated = await self._revert_config(team_id, site_id, stored)
      log_error(
        logger,
        e,
        "attachment",
        "remove_instance",
        error_category="env_sync",
        team_id=team_id,
        site_id=site_id,
        metadata={"instance_id": instance_id, "compensated": compensated},
      )
      raise EnvSyncFailedError(
        "Failed to delete environment variables",
        details={
          "instance_id": instance_id,
          "idx": instance.idx,
          "compensated": compensated,
        },
        cause=e,
      ) from e

    logger.info(
      f"Detached instance {instance_id} from slot {instance.idx}",
      extra={
        "team_id": team_id,
        "site_id": site_id,
        "instance_id": instance_id,
        "action": "remove_instance",
      },
    )
    return instance

  # ==========================================================================
  # HELPERS
  # ==========================================================================

  @staticmethod
  def _find(settings: SiteSettings, instance_id: str) -> Optional[AttachedInstance]:
    return next((i for i in settings.instances if i.id == instance_id), None)

  async def _write_config(
    self,
    team_id: str,
    site_id: str,
    document: Dict[str, Any],
    expected_version: Optional[int],
  ) -> None:
    try:
      await self.config_store.update_site_configuration(
        team_id, site_id, document, expected_version=expected_version
      )
    except ConfigPersistenceError:
      raise
    except Exception as e:
      raise ConfigPersistenceError(cause=e) from e

  async def _revert_config(
    self, team_id: str, site_id: str, previous: StoredSiteConfiguration
  ) -> bool:
    """Restore the configuration read before the failed operation."""
    # Our own write bumped the version by one
    expected = None if previous.version is None else previous.version + 1
    try:
      await self.config_store.update_site_configuration(
        team_id, site_id, previous.config, expected_version=expected
      )
      return True
    except Exception as e:
      log_error(
        logger,
        e,
        "attachment",
        "revert_config",
        error_category="compensation",
        team_id=team_id,
        site_id=site_id,
      )
      return False

  async def _discard_variables(self, team_id: str, site_id: str, idx: int) -> None:
    """Remove whatever part of a failed variable write may have landed."""
    try:
      await self.env_store.delete_environment_variables(
        team_id, site_id, env_variable_names(idx)
      )
    except Exception as e:
      logger.warning(
        f"Could not clean up variables of slot {idx}: {e}",
        extra={"team_id": team_id, "site_id": site_id},
      )

  def _calculate_retry_delay(self, attempt: int) -> float:
    """Exponential backoff with jitter."""
    delay = self.retry_delay * (self.retry_backoff**attempt)
    return delay + random.uniform(0, delay * 0.1)

  async def _with_retries(
    self, func: Callable[[], Awaitable[None]], action: str
  ) -> None:
    last_error: Optional[Exception] = None

    for attempt in range(self.max_retries + 1):
      try:
        await func()
        return
      except Exception as e:
        last_error = e
        if attempt < self.max_retries:
          delay = self._calculate_retry_delay(attempt)
          logger.warning(
            f"{action} failed (attempt {attempt + 1}/{self.max_retries + 1}), "
            f"retrying in {delay:.2f}s: {e}"
          )
          await asyncio.sleep(delay)

    if last_error is None:
      raise RuntimeError("Retry logic failed without capturing an exception")
    raise last_error
