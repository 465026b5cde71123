"""
Site settings endpoints (query, set account, delete).
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from ..middleware import SiteContext, get_site_context, get_site_settings_service
from ..models.api import (
  ErrorResponse,
  SetAccountRequest,
  SiteSettingsResponse,
  SuccessResponse,
)
from ..operations import SiteSettingsService

router = APIRouter(prefix="/site-settings", tags=["Site Settings"])


@router.get(
  "",
  response_model=Optional[SiteSettingsResponse],
  operation_id="getSiteSettings",
  summary="Get Site Settings",
  description="Stored FalkorDB account and attached instances of the site. "
  "Returns null when the stored configuration is invalid.",
  responses={400: {"model": ErrorResponse}},
)
async def get_site_settings(
  context: SiteContext = Depends(get_site_context),
  service: SiteSettingsService = Depends(get_site_settings_service),
) -> Optional[SiteSettingsResponse]:
  return await service.query(context.team_id, context.site_id)


@router.put(
  "/account",
  response_model=SuccessResponse,
  operation_id="setSiteAccount",
  summary="Set FalkorDB Account",
  description="Validate FalkorDB Cloud credentials and store them for the site.",
  responses={
    400: {"description": "Invalid FalkorDB credentials", "model": ErrorResponse},
    500: {"description": "Failed to save site configuration", "model": ErrorResponse},
  },
)
async def set_account(
  request: SetAccountRequest,
  context: SiteContext = Depends(get_site_context),
  service: SiteSettingsService = Depends(get_site_settings_service),
) -> SuccessResponse:
  await service.set_account(
    context.team_id, context.site_id, str(request.email), request.password
  )
  return SuccessResponse(message="FalkorDB account saved")


@router.delete(
  "",
  response_model=SuccessResponse,
  status_code=status.HTTP_200_OK,
  operation_id="deleteSiteSettings",
  summary="Delete Site Settings",
  description="Remove the stored account. Environment variables of attached "
  "instances are not deleted.",
)
async def delete_site_settings(
  context: SiteContext = Depends(get_site_context),
  service: SiteSettingsService = Depends(get_site_settings_service),
) -> SuccessResponse:
  await service.delete(context.team_id, context.site_id)
  return SuccessResponse(message="Site settings deleted")
