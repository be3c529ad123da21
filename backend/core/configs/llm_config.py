import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
load_dotenv()

GATEWAY_BASE_URL = os.getenv("ADPILOT_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
MODEL_NAME = os.getenv("ADPILOT_MODEL_NAME", "google/gemini-2.5-flash")
MAX_TOKENS = 2000
TEMPERATURE = 0.3

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GatewaySettings:
    """Process-wide settings for the AdPilot generation gateway."""

    api_key: str | None
    base_url: str = GATEWAY_BASE_URL
    model_name: str = MODEL_NAME
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE
    granular_error_status: bool = False

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return (
            f"GatewaySettings(api_key={masked!r}, base_url={self.base_url!r}, "
            f"model_name={self.model_name!r}, granular_error_status={self.granular_error_status!r})"
        )


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    """Resolve gateway settings once per process."""

    return GatewaySettings(
        api_key=os.getenv("LOVABLE_API_KEY") or None,
        granular_error_status=os.getenv("ADPILOT_GRANULAR_ERROR_STATUS", "").strip().lower() in _TRUTHY,
    )
