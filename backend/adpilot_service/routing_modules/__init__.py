from .forecast_routing import router as forecast_router

__all__ = ["forecast_router"]
