"""
Unprotected status endpoint for load balancers and monitoring.
"""

from datetime import UTC, datetime
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

from ..models.api import HealthStatus

router = APIRouter(tags=["Status"])


def get_app_version() -> str:
  """Get the application version from installed package metadata."""
  try:
    return version("falkordb-integration-service")
  except PackageNotFoundError:
    return "unknown"


@router.get(
  "/status",
  response_model=HealthStatus,
  operation_id="getServiceStatus",
  summary="Health Check",
  description="Service health check endpoint for monitoring and load balancers",
)
async def service_status():
  return HealthStatus(
    status="healthy",
    timestamp=datetime.now(UTC),
    details={"service": "falkordb-integration", "version": get_app_version()},
  )
