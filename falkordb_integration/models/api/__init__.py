"""API and schema models."""

from .common import ErrorResponse, HealthStatus, SuccessResponse
from .instances import (
  AddInstanceRequest,
  AttachedInstance,
  ClientCodeResponse,
  FalkorDBInstance,
  InstanceSummary,
)
from .site_settings import SetAccountRequest, SiteSettings, SiteSettingsResponse

__all__ = [
  "AddInstanceRequest",
  "AttachedInstance",
  "ClientCodeResponse",
  "ErrorResponse",
  "FalkorDBInstance",
  "HealthStatus",
  "InstanceSummary",
  "SetAccountRequest",
  "SiteSettings",
  "SiteSettingsResponse",
  "SuccessResponse",
]
