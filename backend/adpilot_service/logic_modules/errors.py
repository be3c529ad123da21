from __future__ import annotations

from fastapi import status

MALFORMED_FORECAST_MESSAGE = "AI did not return a valid forecast structure."


class ForecastError(Exception):
    """Base class for every failure the forecast pipeline reports to the caller."""

    granular_status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestBody(ForecastError):
    granular_status_code = status.HTTP_400_BAD_REQUEST


class MissingInputError(ForecastError):
    """Raised when one or more required canonical fields are falsy."""

    granular_status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, missing_fields: tuple[str, ...]) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields


class ConfigurationError(ForecastError):
    """Deployment defect: a required setting (the gateway credential) is absent."""


class UpstreamError(ForecastError):
    """The generation gateway answered with a non-success status or could not be reached."""

    granular_status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedForecastError(ForecastError):
    def __init__(self, message: str = MALFORMED_FORECAST_MESSAGE) -> None:
        super().__init__(message)


__all__ = [
    "ForecastError",
    "InvalidRequestBody",
    "MissingInputError",
    "ConfigurationError",
    "UpstreamError",
    "MalformedForecastError",
    "MALFORMED_FORECAST_MESSAGE",
]
