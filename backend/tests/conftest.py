from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.configs.llm_config import GatewaySettings  # noqa: E402


def chat_completion_body(content: str | None) -> dict:
    """Minimal OpenAI-compatible chat completion payload."""

    message: dict = {"role": "assistant", "content": content}
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "google/gemini-2.5-flash",
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 120, "completion_tokens": 80, "total_tokens": 200},
    }


@dataclass
class FakeGateway:
    """Records outbound gateway requests and answers them with a canned response."""

    status_code: int = 200
    content: str | None = '{"quickVerdict": "Scale now"}'
    body: dict | None = None
    requests: List[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"error": {"message": "upstream says no"}})
        payload = self.body if self.body is not None else chat_completion_body(self.content)
        return httpx.Response(self.status_code, json=payload)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def sent_json(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def settings() -> GatewaySettings:
    return GatewaySettings(api_key="test-key", base_url="https://gateway.test/v1")


@pytest.fixture
def settings_factory() -> Callable[..., GatewaySettings]:
    def _build(**overrides) -> GatewaySettings:
        options = {"api_key": "test-key", "base_url": "https://gateway.test/v1"}
        options.update(overrides)
        return GatewaySettings(**options)

    return _build
