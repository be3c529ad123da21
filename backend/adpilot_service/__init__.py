from adpilot_service.routing_modules.forecast_routing import router as forecast_router
from adpilot_service.orchestrator.pipeline import ForecastPipeline

__all__ = ["forecast_router", "ForecastPipeline"]
