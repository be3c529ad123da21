import logging
from typing import Awaitable, Callable, Mapping

from fastapi import APIRouter, FastAPI, Request, Response

from adpilot_service import forecast_router
from adpilot_service.api_modules.forecast_api import CORS_HEADERS

API_PREFIX = "/api/v1"
HEALTH_ROUTE = "/health"


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


api_router = APIRouter(prefix=API_PREFIX, tags=["core"])


@api_router.get(HEALTH_ROUTE, summary="Application health probe")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


def configure_cors(app: FastAPI, *, headers: Mapping[str, str]) -> None:
    """Stamp the fixed cross-origin headers on every response, errors included."""

    @app.middleware("http")
    async def add_cors_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(headers)
        return response


def register_routers(app: FastAPI) -> None:
    app.include_router(api_router)
    app.include_router(forecast_router, prefix=API_PREFIX)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="AdPilot Brain API", version="0.1.0")
    configure_cors(app, headers=CORS_HEADERS)
    register_routers(app)
    return app


app = create_app()
