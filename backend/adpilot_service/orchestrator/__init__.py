from .pipeline import (
    ForecastOutcome,
    ForecastPipeline,
    build_error_envelope,
    build_success_envelope,
)

__all__ = [
    "ForecastOutcome",
    "ForecastPipeline",
    "build_error_envelope",
    "build_success_envelope",
]
