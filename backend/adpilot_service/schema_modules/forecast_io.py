from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class AdBenchmarks(_CamelModel):
    cpm: float
    cpc: float
    ctr: float
    cpa: float
    roas: float


class ForecastRanges(_CamelModel):
    total_budget: float
    impressions_range: str
    clicks_range: str
    conversions_range: str


class CampaignStructure(_CamelModel):
    name: str
    goal: str
    budget_allocation: str = Field(description="Share of budget, e.g. '50%'.")
    reason: str


class RoadmapWeek(_CamelModel):
    week: str
    title: str
    description: str


class ForecastResultSchema(_CamelModel):
    """
    Expected shape of the generated forecast.

    Used only to report deviations; a forecast that does not match is still returned.
    """

    quick_verdict: str
    benchmarks: AdBenchmarks
    forecast: ForecastRanges
    structure: List[CampaignStructure]
    roadmap: List[RoadmapWeek]


class ForecastSuccessEnvelope(BaseModel):
    ok: Literal[True] = True
    inputs: Dict[str, Any]
    ai_forecast: Dict[str, Any] = Field(serialization_alias="aiForecast")


class ForecastErrorEnvelope(BaseModel):
    error: str
