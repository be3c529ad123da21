from __future__ import annotations

import json
import textwrap
from dataclasses import dataclass
from typing import List

from adpilot_service.logic_modules.input_normalizer import CanonicalPayload

USER_MESSAGE_LABEL = "User Inputs: "

FORECAST_SCHEMA_EXAMPLE: dict = {
    "quickVerdict": "A single, short, and compelling summary of the strategy.",
    "benchmarks": {"cpm": 10.5, "cpc": 1.2, "ctr": 1.5, "cpa": 30.0, "roas": 2.5},
    "forecast": {
        "totalBudget": 3000,
        "impressionsRange": "250,000 - 300,000",
        "clicksRange": "3,000 - 3,600",
        "conversionsRange": "100 - 120",
    },
    "structure": [
        {
            "name": "Campaign - Prospecting (TOF)",
            "goal": "Conversions",
            "budgetAllocation": "50%",
            "reason": "Focus on high-quality cold traffic acquisition.",
        },
        {
            "name": "Campaign - Retargeting (BOF)",
            "goal": "Conversions",
            "budgetAllocation": "30%",
            "reason": "High-efficiency budget for converting existing visitors.",
        },
    ],
    "roadmap": [
        {
            "week": "Week 1",
            "title": "Setup & Creative Testing",
            "description": "Launch 3 ad sets (2 prospecting, 1 retargeting). Test 5 video/image ad variants.",
        },
        {
            "week": "Week 2",
            "title": "Optimization & Scaling",
            "description": "Pause worst-performing creatives. Reallocate 20% of budget to the best ad set.",
        },
    ],
}


def _compose_system_prompt() -> str:
    header = textwrap.dedent(
        """
        You are an API endpoint, not a conversational assistant.
        ROLE: Ad Strategist and Forecaster.
        INPUT: Business details, budget, AOV, and marketing goal.
        OUTPUT: Valid JSON only. Do not wrap the JSON in markdown fences.

        RESPONSE STRUCTURE:
        """
    ).strip()
    rules = textwrap.dedent(
        """
        RULES:
        1. RAW JSON ONLY. No markdown, no prose before or after the object.
        2. Every field in the RESPONSE STRUCTURE must be present and use the same types.
        3. Base all numbers (benchmarks, forecast) on the provided INPUT data and industry standards.
        """
    ).strip()
    schema = json.dumps(FORECAST_SCHEMA_EXAMPLE, indent=2, ensure_ascii=False)
    return f"{header}\n{schema}\n\n{rules}"


ADPILOT_SYSTEM_PROMPT = _compose_system_prompt()


@dataclass(frozen=True)
class GenerationExchange:
    """The system/user message pair sent to the generation gateway."""

    system: str
    user: str

    def as_messages(self) -> List[dict]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def render_user_message(payload: CanonicalPayload) -> str:
    serialized = json.dumps(payload.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return f"{USER_MESSAGE_LABEL}{serialized}"


def build_generation_exchange(payload: CanonicalPayload) -> GenerationExchange:
    """Pair the fixed system prompt with the serialized canonical payload."""

    return GenerationExchange(system=ADPILOT_SYSTEM_PROMPT, user=render_user_message(payload))


__all__ = [
    "ADPILOT_SYSTEM_PROMPT",
    "FORECAST_SCHEMA_EXAMPLE",
    "GenerationExchange",
    "USER_MESSAGE_LABEL",
    "build_generation_exchange",
    "render_user_message",
]
