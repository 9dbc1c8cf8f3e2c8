"""V1 API router: aggregates the health check and every resource router."""

from fastapi import APIRouter

from staffing_api.application.catalog import RESOURCES
from staffing_api.presentation.api.v1.endpoints.health import router as health_router
from staffing_api.presentation.api.v1.endpoints.resources import build_resource_router

router = APIRouter()
router.include_router(health_router)
for _definition in RESOURCES:
    router.include_router(build_resource_router(_definition))
