"""
API v1 routers.
"""

from fastapi import APIRouter

from .instances import router as instances_router
from .site_settings import router as site_settings_router
from .status import router as status_router

router = APIRouter(prefix="/v1")
router.include_router(status_router)
router.include_router(site_settings_router)
router.include_router(instances_router)

__all__ = ["instances_router", "router", "site_settings_router", "status_router"]
