"""
Instance discovery and attachment endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from ..middleware import SiteContext, get_attachment_service, get_site_context
from ..models.api import (
  AddInstanceRequest,
  ClientCodeResponse,
  ErrorResponse,
  FalkorDBInstance,
  InstanceSummary,
)
from ..operations import AttachmentService, env_prefix, env_variable_names

router = APIRouter(tags=["Instances"])

ERROR_RESPONSES = {
  400: {"description": "Invalid request or configuration", "model": ErrorResponse},
  404: {"description": "Configuration or instance not found", "model": ErrorResponse},
  502: {"description": "Fleet API failure", "model": ErrorResponse},
}


@router.get(
  "/falkordb/instances",
  response_model=List[FalkorDBInstance],
  operation_id="listFalkorDBInstances",
  summary="List FalkorDB Instances",
  description="Running instances available under the site's stored account.",
  responses=ERROR_RESPONSES,
)
async def list_falkordb_instances(
  context: SiteContext = Depends(get_site_context),
  service: AttachmentService = Depends(get_attachment_service),
) -> List[FalkorDBInstance]:
  return await service.list_discoverable_instances(context.team_id, context.site_id)


@router.get(
  "/instances",
  response_model=List[InstanceSummary],
  operation_id="listAttachedInstances",
  summary="List Attached Instances",
  responses=ERROR_RESPONSES,
)
async def list_attached_instances(
  context: SiteContext = Depends(get_site_context),
  service: AttachmentService = Depends(get_attachment_service),
) -> List[InstanceSummary]:
  return await service.list_attached_instances(context.team_id, context.site_id)


@router.post(
  "/instances",
  response_model=InstanceSummary,
  status_code=status.HTTP_201_CREATED,
  operation_id="addInstance",
  summary="Attach Instance",
  description="Attach a discovered instance and write its environment variables.",
  responses={
    **ERROR_RESPONSES,
    409: {"description": "Instance already added", "model": ErrorResponse},
    500: {"description": "Failed to set environment variables", "model": ErrorResponse},
  },
)
async def add_instance(
  request: AddInstanceRequest,
  context: SiteContext = Depends(get_site_context),
  service: AttachmentService = Depends(get_attachment_service),
) -> InstanceSummary:
  attached = await service.add_instance(
    context.team_id,
    context.site_id,
    request.instance_id,
    request.username,
    request.password,
  )
  return InstanceSummary(
    **attached.model_dump(exclude={"password"}),
    env_prefix=env_prefix(attached.idx),
    env_variables=env_variable_names(attached.idx),
  )


@router.delete(
  "/instances/{instance_id}",
  response_model=InstanceSummary,
  operation_id="removeInstance",
  summary="Detach Instance",
  description="Detach an instance and delete its environment variables.",
  responses={
    **ERROR_RESPONSES,
    500: {
      "description": "Failed to delete environment variables",
      "model": ErrorResponse,
    },
  },
)
async def remove_instance(
  instance_id: str = Path(..., min_length=1),
  context: SiteContext = Depends(get_site_context),
  service: AttachmentService = Depends(get_attachment_service),
) -> InstanceSummary:
  removed = await service.remove_instance(context.team_id, context.site_id, instance_id)
  return InstanceSummary(
    **removed.model_dump(exclude={"password"}),
    env_prefix=env_prefix(removed.idx),
    env_variables=env_variable_names(removed.idx),
  )


@router.get(
  "/instances/{instance_id}/client-code",
  response_model=ClientCodeResponse,
  operation_id="getInstanceClientCode",
  summary="Get Connection Snippet",
  responses=ERROR_RESPONSES,
)
async def get_client_code(
  instance_id: str = Path(..., min_length=1),
  context: SiteContext = Depends(get_site_context),
  service: AttachmentService = Depends(get_attachment_service),
) -> ClientCodeResponse:
  code = await service.get_client_code(context.team_id, context.site_id, instance_id)
  return ClientCodeResponse(instance_id=instance_id, code=code)
