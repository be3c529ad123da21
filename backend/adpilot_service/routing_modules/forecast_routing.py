from __future__ import annotations

from fastapi import APIRouter

from adpilot_service.api_modules.forecast_api import router as forecast_api_router

router = APIRouter()
router.include_router(forecast_api_router)

__all__ = ["router"]
