"""Configuration and environment variable stores."""

from .environment_variable_store import SqlEnvironmentVariableStore
from .interfaces import (
  EnvironmentVariableStore,
  SiteConfigurationStore,
  StoredSiteConfiguration,
)
from .site_configuration_store import SqlSiteConfigurationStore

__all__ = [
  "EnvironmentVariableStore",
  "SiteConfigurationStore",
  "SqlEnvironmentVariableStore",
  "SqlSiteConfigurationStore",
  "StoredSiteConfiguration",
]
