"""
Custom Exception Types for the FalkorDB integration service.

Every failure an operation can surface to its caller is one of the types
below. Each carries a human-readable message, a machine-readable error code,
the HTTP status the API layer renders it with, and the underlying cause.
None of them are retried internally.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class IntegrationError(Exception):
  """
  Base exception for all integration errors.

  Attributes:
      message: Human-readable error message
      error_code: Application-specific error code for categorization
      details: Additional error context and metadata
      cause: The exception that triggered this one, if any
      timestamp: When the error occurred
  """

  status_code = 500

  def __init__(
    self,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    cause: Optional[BaseException] = None,
  ):
    super().__init__(message)
    self.message = message
    self.error_code = error_code or self.__class__.__name__
    self.details = details or {}
    self.cause = cause
    self.timestamp = datetime.now(timezone.utc).isoformat()

  def to_dict(self) -> Dict[str, Any]:
    """Convert exception to dictionary for API responses."""
    return {
      "error": self.error_code,
      "message": self.message,
      "details": self.details,
      "timestamp": self.timestamp,
    }


# ============================================================================
# Request Context
# ============================================================================


class MissingContextError(IntegrationError):
  """Raised when the caller did not supply a team or site identifier."""

  status_code = 400

  def __init__(self, field: str):
    super().__init__(
      f"{field} is required",
      error_code="MISSING_CONTEXT",
      details={"field": field},
    )


# ============================================================================
# Fleet API
# ============================================================================


class AuthError(IntegrationError):
  """
  Raised when account credentials are rejected or the token service fails.

  Network failures and credential rejections are deliberately reported the
  same way.
  """

  status_code = 400

  def __init__(
    self,
    message: str = "Invalid FalkorDB credentials",
    cause: Optional[BaseException] = None,
  ):
    super().__init__(message, error_code="AUTH_ERROR", cause=cause)


class UpstreamError(IntegrationError):
  """Raised when the fleet API is unreachable or answers with an error."""

  status_code = 502

  def __init__(
    self,
    message: str,
    error_code: str = "UPSTREAM_ERROR",
    details: Optional[Dict[str, Any]] = None,
    cause: Optional[BaseException] = None,
  ):
    super().__init__(message, error_code=error_code, details=details, cause=cause)


class NormalizationError(UpstreamError):
  """Raised when a fleet instance record cannot be reduced to one endpoint."""

  def __init__(self, instance_id: Optional[str], reason: str):
    super().__init__(
      f"No resolvable endpoint for instance {instance_id or '<unknown>'}: {reason}",
      error_code="NORMALIZATION_ERROR",
      details={"instance_id": instance_id, "reason": reason},
    )


# ============================================================================
# Site Configuration
# ============================================================================


class InvalidConfigError(IntegrationError):
  """Raised when the stored site configuration fails schema validation."""

  status_code = 400

  def __init__(
    self,
    message: str = "Invalid site configuration",
    details: Optional[Dict[str, Any]] = None,
  ):
    super().__init__(message, error_code="INVALID_CONFIG", details=details)


class DuplicateInstanceError(IntegrationError):
  """Raised when an instance is already attached to the site."""

  status_code = 409

  def __init__(self, instance_id: str):
    super().__init__(
      "Instance already added",
      error_code="DUPLICATE_INSTANCE",
      details={"instance_id": instance_id},
    )


class NotFoundError(IntegrationError):
  """Base exception for missing configuration, instances or sites."""

  status_code = 404

  def __init__(
    self,
    message: str,
    error_code: str = "NOT_FOUND",
    details: Optional[Dict[str, Any]] = None,
  ):
    super().__init__(message, error_code=error_code, details=details)


class SiteConfigurationNotFoundError(NotFoundError):
  """Raised when a site has no stored configuration."""

  def __init__(self, team_id: str, site_id: str):
    super().__init__(
      "Site configuration not found",
      error_code="SITE_CONFIGURATION_NOT_FOUND",
      details={"team_id": team_id, "site_id": site_id},
    )


class InstanceNotFoundError(NotFoundError):
  """Raised when an instance is neither attached nor discoverable."""

  def __init__(self, instance_id: str):
    super().__init__(
      "Instance not found",
      error_code="INSTANCE_NOT_FOUND",
      details={"instance_id": instance_id},
    )


class ConfigPersistenceError(IntegrationError):
  """Raised when the configuration store rejects a write."""

  status_code = 500

  def __init__(
    self,
    message: str = "Failed to save site configuration",
    details: Optional[Dict[str, Any]] = None,
    cause: Optional[BaseException] = None,
  ):
    super().__init__(
      message, error_code="CONFIG_PERSISTENCE_ERROR", details=details, cause=cause
    )


# ============================================================================
# Environment Variables
# ============================================================================


class EnvSyncFailedError(IntegrationError):
  """Raised when environment variables could not be written or deleted."""

  status_code = 500

  def __init__(
    self,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    cause: Optional[BaseException] = None,
  ):
    super().__init__(
      message, error_code="ENV_SYNC_FAILED", details=details, cause=cause
    )
