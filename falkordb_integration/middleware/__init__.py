from .context import (
  SiteContext,
  get_attachment_service,
  get_config_store,
  get_env_store,
  get_site_context,
  get_site_settings_service,
)

__all__ = [
  "SiteContext",
  "get_attachment_service",
  "get_config_store",
  "get_env_store",
  "get_site_context",
  "get_site_settings_service",
]
