from __future__ import annotations

import json
import logging
from typing import Any, List

from pydantic import ValidationError

from adpilot_service.logic_modules.errors import MalformedForecastError
from adpilot_service.logic_modules.response_sanitizer import iter_balanced_objects
from adpilot_service.schema_modules import ForecastResultSchema

logger = logging.getLogger(__name__)


def reject_json_constant(name: str) -> Any:
    """Refuse NaN and Infinity, which are not valid JSON and cannot be re-serialized."""

    raise ValueError(f"Unsupported JSON constant: {name}")


def _loads_object(candidate: str) -> dict | None:
    try:
        parsed = json.loads(candidate, parse_constant=reject_json_constant)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_forecast(span: str) -> dict[str, Any]:
    """
    Parse an extracted JSON span into the forecast object.

    The span is parsed as-is first. If that fails, the top-level brace-balanced blocks inside it
    are tried in order, which recovers replies where prose around the object contains stray
    braces. A truncated object is never partially recovered. Anything
    that does not produce a JSON object raises :class:`MalformedForecastError`.
    """

    forecast = _loads_object(span)
    if forecast is not None:
        return forecast

    for candidate in iter_balanced_objects(span):
        forecast = _loads_object(candidate)
        if forecast is not None:
            logger.warning(
                "response_parser.balanced_fallback.used span_len=%s candidate_len=%s",
                len(span),
                len(candidate),
            )
            return forecast

    logger.error("response_parser.parse.failed span_preview=%s", span[:256])
    raise MalformedForecastError()


def report_forecast_shape(forecast: dict[str, Any]) -> List[str]:
    """List the ways ``forecast`` deviates from the expected schema. Empty when it conforms."""

    try:
        ForecastResultSchema.model_validate(forecast)
    except ValidationError as exc:
        return [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        ]
    return []


__all__ = ["parse_forecast", "reject_json_constant", "report_forecast_shape"]
