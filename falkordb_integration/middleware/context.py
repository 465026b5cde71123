"""
Request context and service dependencies.

Team and site identifiers arrive as headers set by the hosting platform.
Services are built per request from the shared stores; tests override the
provider functions through app.dependency_overrides.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from ..operations import AttachmentService, SiteSettingsService
from ..operations.site_settings_service import require_context
from ..storage import SqlEnvironmentVariableStore, SqlSiteConfigurationStore


@dataclass(frozen=True)
class SiteContext:
  """Identifiers of the site a call acts on."""

  team_id: str
  site_id: str


def get_site_context(
  team_id: Optional[str] = Header(None, alias="X-Team-Id"),
  site_id: Optional[str] = Header(None, alias="X-Site-Id"),
) -> SiteContext:
  """Resolve the calling site; missing identifiers raise MissingContextError."""
  require_context(team_id, site_id)
  return SiteContext(team_id=team_id, site_id=site_id)


def get_config_store() -> SqlSiteConfigurationStore:
  return SqlSiteConfigurationStore()


def get_env_store() -> SqlEnvironmentVariableStore:
  return SqlEnvironmentVariableStore()


def get_site_settings_service(
  config_store: SqlSiteConfigurationStore = Depends(get_config_store),
) -> SiteSettingsService:
  return SiteSettingsService(config_store)


def get_attachment_service(
  config_store: SqlSiteConfigurationStore = Depends(get_config_store),
  env_store: SqlEnvironmentVariableStore = Depends(get_env_store),
) -> AttachmentService:
  return AttachmentService(config_store, env_store)
