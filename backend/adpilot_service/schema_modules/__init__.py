from .forecast_io import (
    AdBenchmarks,
    CampaignStructure,
    ForecastErrorEnvelope,
    ForecastRanges,
    ForecastResultSchema,
    ForecastSuccessEnvelope,
    RoadmapWeek,
)

__all__ = [
    "AdBenchmarks",
    "CampaignStructure",
    "ForecastErrorEnvelope",
    "ForecastRanges",
    "ForecastResultSchema",
    "ForecastSuccessEnvelope",
    "RoadmapWeek",
]
