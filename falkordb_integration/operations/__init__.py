from .attachment_service import AttachmentService, next_slot
from .client_code import generate_client_code
from .env_vars import env_prefix, env_variable_names, env_variables_for
from .site_settings_service import SiteSettingsService

__all__ = [
  "AttachmentService",
  "SiteSettingsService",
  "env_prefix",
  "env_variable_names",
  "env_variables_for",
  "generate_client_code",
  "next_slot",
]
