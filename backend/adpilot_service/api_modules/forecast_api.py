from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from adpilot_service.logic_modules.errors import InvalidRequestBody
from adpilot_service.logic_modules.response_parser import reject_json_constant
from adpilot_service.orchestrator.pipeline import ForecastPipeline
from core.configs.llm_config import GatewaySettings, get_gateway_settings

router = APIRouter(tags=["adpilot"])
logger = logging.getLogger(__name__)

FORECAST_ROUTE = "/adpilot-brain"
CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_gateway_http_client() -> httpx.AsyncClient | None:
    """Transport override hook; ``None`` lets the OpenAI SDK build its own client."""

    return None


async def _read_json_body(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw, parse_constant=reject_json_constant)
    except (ValueError, RecursionError) as exc:
        raise InvalidRequestBody("Request body must be valid JSON.") from exc


@router.options(FORECAST_ROUTE, include_in_schema=False)
async def forecast_preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(FORECAST_ROUTE, summary="Generate a zero-data ad forecast")
async def generate_forecast(
    request: Request,
    settings: GatewaySettings = Depends(get_gateway_settings),
    http_client: httpx.AsyncClient | None = Depends(get_gateway_http_client),
) -> JSONResponse:
    pipeline = ForecastPipeline(settings, http_client=http_client)

    try:
        body = await _read_json_body(request)
    except InvalidRequestBody as exc:
        outcome = pipeline.reject(exc, body=None)
    else:
        logger.info("adpilot_api.forecast.start", extra={"request_body": body})
        outcome = await pipeline.run(body)

    logger.info(
        "adpilot_api.forecast.completed",
        extra={"status_code": outcome.status_code, "ok": outcome.ok},
    )
    return JSONResponse(content=outcome.envelope, status_code=outcome.status_code, headers=CORS_HEADERS)


__all__ = ["router", "CORS_HEADERS", "FORECAST_ROUTE", "get_gateway_http_client"]
