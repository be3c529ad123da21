from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import status

from adpilot_service.logic_modules.errors import ForecastError
from adpilot_service.logic_modules.gateway_client import GatewayChatClient
from adpilot_service.logic_modules.input_normalizer import CanonicalPayload, normalize_request
from adpilot_service.logic_modules.response_parser import parse_forecast, report_forecast_shape
from adpilot_service.logic_modules.response_sanitizer import extract_json_span
from adpilot_service.logic_modules.system_prompt import build_generation_exchange
from adpilot_service.schema_modules import ForecastErrorEnvelope, ForecastSuccessEnvelope
from core.configs.llm_config import GatewaySettings

logger = logging.getLogger(__name__)

FAILURE_STATUS = status.HTTP_500_INTERNAL_SERVER_ERROR
UNKNOWN_ERROR_MESSAGE = "Unknown error"


@dataclass(frozen=True)
class ForecastOutcome:
    status_code: int
    envelope: dict[str, Any]

    @property
    def ok(self) -> bool:
        return "error" not in self.envelope


def build_success_envelope(payload: CanonicalPayload, forecast: dict[str, Any]) -> dict[str, Any]:
    envelope = ForecastSuccessEnvelope(inputs=payload.to_dict(), ai_forecast=forecast)
    return envelope.model_dump(by_alias=True)


def build_error_envelope(message: str) -> dict[str, Any]:
    return ForecastErrorEnvelope(error=message).model_dump()


class ForecastPipeline:
    """
    One forecast request end to end: normalize, prompt, generate, sanitize, parse, wrap.

    Instances hold only immutable configuration; nothing is shared between ``run`` calls.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self._http_client = http_client

    async def run(self, body: Any) -> ForecastOutcome:
        try:
            payload = normalize_request(body)
            forecast = await self._generate(payload)
        except ForecastError as exc:
            return self.reject(exc, body)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Fatal error while generating forecast", extra={"request_body": body})
            return ForecastOutcome(FAILURE_STATUS, build_error_envelope(str(exc) or UNKNOWN_ERROR_MESSAGE))

        return ForecastOutcome(status.HTTP_200_OK, build_success_envelope(payload, forecast))

    async def _generate(self, payload: CanonicalPayload) -> dict[str, Any]:
        exchange = build_generation_exchange(payload)
        logger.info("adpilot_pipeline.generate.start", extra={"inputs": payload.to_dict()})

        async with GatewayChatClient(self.settings, http_client=self._http_client) as client:
            raw_text = await client.create_text(exchange)

        forecast = parse_forecast(extract_json_span(raw_text))

        issues = report_forecast_shape(forecast)
        if issues:
            logger.warning(
                "adpilot_pipeline.forecast.incomplete issue_count=%s issues=%s",
                len(issues),
                issues,
            )
        logger.info("adpilot_pipeline.generate.completed", extra={"forecast_keys": sorted(forecast)})
        return forecast

    def reject(self, exc: ForecastError, body: Any) -> ForecastOutcome:
        """Log a pipeline failure with its originating body and wrap it in the failure envelope."""

        logger.error(
            "adpilot_pipeline.failed error_type=%s error_message=%s",
            type(exc).__name__,
            exc.message,
            extra={"request_body": body},
        )
        return ForecastOutcome(self._failure_status(exc), build_error_envelope(exc.message))

    def _failure_status(self, exc: ForecastError) -> int:
        if self.settings.granular_error_status:
            return exc.granular_status_code
        return FAILURE_STATUS


__all__ = [
    "ForecastOutcome",
    "ForecastPipeline",
    "build_error_envelope",
    "build_success_envelope",
]
