"""Top-level API router, mounted by create_app() under settings.api_prefix."""

from fastapi import APIRouter

from staffing_api.presentation.api.v1.router import router as v1_router

router = APIRouter()
router.include_router(v1_router)
