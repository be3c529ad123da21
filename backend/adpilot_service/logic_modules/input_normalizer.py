from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Sequence

from adpilot_service.logic_modules.errors import InvalidRequestBody, MissingInputError

logger = logging.getLogger(__name__)

NO_DATA_REQUEST_TYPE = "no-data"
DEFAULT_DESCRIPTION = "No detailed description provided."

# (canonical field, candidate request keys) in resolution order.
FIELD_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("goal", ("goal",)),
    ("budget", ("budget",)),
    ("aov", ("productPrice", "aov")),
    ("industry", ("businessType", "industry")),
    ("description", ("businessName", "description")),
)

REQUIRED_FIELDS: tuple[str, ...] = ("budget", "goal", "aov", "industry")


def is_missing(value: Any) -> bool:
    """Presence check for request values: None, empty strings, zero, False and NaN are absent."""

    if isinstance(value, float) and math.isnan(value):
        return True
    return not value


@dataclass(frozen=True)
class CanonicalPayload:
    """Normalized forecast inputs. Building one is the validation step."""

    goal: Any
    budget: Any
    aov: Any
    industry: Any
    description: str = DEFAULT_DESCRIPTION

    def __post_init__(self) -> None:
        missing = tuple(name for name in REQUIRED_FIELDS if is_missing(getattr(self, name)))
        if missing:
            received = ", ".join(f"{name}={getattr(self, name)}" for name in REQUIRED_FIELDS)
            raise MissingInputError(
                f"Missing required inputs ({', '.join(missing)}). Received: {received}",
                missing_fields=missing,
            )
        if is_missing(self.description):
            object.__setattr__(self, "description", DEFAULT_DESCRIPTION)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def unwrap_request_body(body: Any) -> Mapping[str, Any]:
    """Return the form fields whether they arrive flat or wrapped as ``{"type": "no-data", "data": ...}``."""

    if not isinstance(body, Mapping):
        raise InvalidRequestBody("Request body must be a JSON object.")

    if body.get("type") == NO_DATA_REQUEST_TYPE:
        data = body.get("data")
        if not isinstance(data, Mapping):
            raise InvalidRequestBody("Request 'data' must be a JSON object for type 'no-data'.")
        return data
    return body


def resolve_field(data: Mapping[str, Any], candidates: Sequence[str]) -> Any:
    """
    Return the first present value among ``candidates``.

    When none is present the last candidate's raw value is returned, so the caller still sees
    what was received (``None`` for an absent key, ``0`` or ``""`` otherwise).
    """

    value: Any = None
    for key in candidates:
        value = data.get(key)
        if not is_missing(value):
            return value
    return value


def normalize_request(body: Any) -> CanonicalPayload:
    """Map an untrusted request body onto a :class:`CanonicalPayload`."""

    data = unwrap_request_body(body)
    fields = {name: resolve_field(data, candidates) for name, candidates in FIELD_ALIASES}
    logger.info("input_normalizer.fields.resolved", extra={"resolved_fields": fields})
    return CanonicalPayload(**fields)


__all__ = [
    "CanonicalPayload",
    "DEFAULT_DESCRIPTION",
    "FIELD_ALIASES",
    "REQUIRED_FIELDS",
    "is_missing",
    "normalize_request",
    "resolve_field",
    "unwrap_request_body",
]
