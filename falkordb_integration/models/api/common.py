"""
Common API models shared across routers.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
  """Standard error response format used across all API endpoints."""

  detail: str = Field(
    ...,
    description="Human-readable error message explaining what went wrong",
    examples=["Site configuration not found"],
  )
  code: str | None = Field(
    None,
    description="Machine-readable error code for programmatic handling",
    examples=["SITE_CONFIGURATION_NOT_FOUND"],
  )
  details: dict[str, Any] | None = Field(None, description="Error context")
  timestamp: datetime | None = Field(
    None, description="Timestamp when the error occurred"
  )


class SuccessResponse(BaseModel):
  """Standard success response for operations without specific return data."""

  success: bool = Field(
    True, description="Indicates the operation completed successfully"
  )
  message: str = Field(..., description="Human-readable success message")
  data: dict[str, Any] | None = Field(
    None, description="Optional additional data related to the operation"
  )


class HealthStatus(BaseModel):
  """Health check status information."""

  status: str = Field(..., description="Current health status")
  timestamp: datetime = Field(..., description="Time of health check")
  details: dict[str, Any] | None = Field(
    None, description="Additional health check details"
  )
