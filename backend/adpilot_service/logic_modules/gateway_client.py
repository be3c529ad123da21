from __future__ import annotations

import logging
from typing import Any

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI
from openai.types.chat import ChatCompletion

from adpilot_service.logic_modules.errors import (
    ConfigurationError,
    MalformedForecastError,
    UpstreamError,
)
from adpilot_service.logic_modules.system_prompt import GenerationExchange
from core.configs.llm_config import GatewaySettings

logger = logging.getLogger(__name__)

DIAGNOSTIC_BODY_LIMIT = 2048


def _extract_message_content(completion: ChatCompletion) -> str | None:
    """Return ``choices[0].message.content`` when the gateway supplied it."""

    choices = getattr(completion, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, str) and content:
        return content
    return None


class GatewayChatClient:
    """
    Thin async wrapper around the OpenAI-compatible chat-completions gateway.

    Every call uses the fixed model, token ceiling and temperature from ``GatewaySettings``.
    Automatic retries are disabled: one attempt per forecast request.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not settings.api_key:
            raise ConfigurationError("LOVABLE_API_KEY not configured.")

        self._settings = settings
        client_options: dict[str, Any] = {
            "api_key": settings.api_key,
            "base_url": settings.base_url,
            "max_retries": 0,
        }
        if http_client is not None:
            client_options["http_client"] = http_client
        self._client = AsyncOpenAI(**client_options)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.close()

    async def create_completion(self, exchange: GenerationExchange) -> ChatCompletion:
        """Issue the single chat-completions call and translate gateway failures."""

        logger.info(
            "gateway.chat.create.start",
            extra={
                "model": self._settings.model_name,
                "max_tokens": self._settings.max_tokens,
                "temperature": self._settings.temperature,
            },
        )
        try:
            completion = await self._client.chat.completions.create(
                model=self._settings.model_name,
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
                messages=exchange.as_messages(),
            )
        except APIStatusError as exc:
            body = exc.response.text if exc.response is not None else ""
            logger.error(
                "Lovable AI error: %s %s",
                exc.status_code,
                body[:DIAGNOSTIC_BODY_LIMIT],
            )
            raise UpstreamError(f"Lovable AI failed: {exc.status_code}", status_code=exc.status_code) from exc
        except APIConnectionError as exc:
            logger.error("Lovable AI unreachable: %s", exc)
            raise UpstreamError(f"Lovable AI request failed: {type(exc).__name__}") from exc

        logger.info(
            "gateway.chat.create.completed",
            extra={
                "response_id": getattr(completion, "id", None),
                "usage": getattr(completion, "usage", None),
            },
        )
        return completion

    async def create_text(self, exchange: GenerationExchange) -> str:
        """Convenience helper returning the raw model text of the first choice."""

        completion = await self.create_completion(exchange)
        text_output = _extract_message_content(completion)
        if text_output is None:
            logger.warning(
                "gateway.create_text.empty_output response_id=%s",
                getattr(completion, "id", None),
            )
            raise MalformedForecastError()

        logger.info("gateway.create_text.response_inspection raw_len=%s", len(text_output))
        return text_output

    async def __aenter__(self) -> "GatewayChatClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["GatewayChatClient"]
