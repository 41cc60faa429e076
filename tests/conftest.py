"""Pytest configuration and fixtures."""

import asyncio
import json
from typing import Any, Optional

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

from main import app
from config import Settings, get_settings
from gemini import GeminiClient, get_gemini_client
from relay.dispatcher import BackgroundDispatcher, get_background_dispatcher

TEST_API_KEY = "test-key"
TEST_ENDPOINT = "https://provider.test/v1beta/models/test-model:generateContent"


def provider_reply(text: str) -> dict[str, Any]:
    """Minimal generateContent success body."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class ProviderStub:
    """Stands in for the generateContent endpoint and records every call."""

    def __init__(self):
        self.status_code = 200
        self.body: Any = provider_reply("Hello from the model")
        self.delay = 0.0
        self.calls: list[dict[str, Any]] = []
        self.keys: list[Optional[str]] = []
        self.cancelled = False

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(json.loads(request.content))
        self.keys.append(request.url.params.get("key"))
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)


class DispatcherStub:
    """Records hand-offs without contacting the background stage."""

    def __init__(self):
        self.dispatched: list[tuple[str, dict[str, Any]]] = []

    async def dispatch(self, url, request):
        self.dispatched.append((url, request.model_dump()))


def make_settings(**overrides) -> Settings:
    values = {
        "google_ai_api_key": TEST_API_KEY,
        "relay_timeout_seconds": 2.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    """Settings with a test credential and a short relay deadline."""
    return make_settings()


@pytest.fixture
def provider():
    return ProviderStub()


@pytest.fixture
def gemini_client(provider):
    """GeminiClient wired to the provider stub."""
    return GeminiClient(TEST_ENDPOINT, transport=httpx.MockTransport(provider.handler))


@pytest.fixture
def dispatcher():
    return DispatcherStub()


@pytest.fixture
async def async_client(settings, gemini_client, dispatcher):
    """Async HTTP client for testing API endpoints."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gemini_client] = lambda: gemini_client
    app.dependency_overrides[get_background_dispatcher] = lambda: dispatcher
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
    await gemini_client.close()


@pytest.fixture
def loopback_dispatcher():
    """Dispatcher that delivers to this app's own background endpoint."""
    return BackgroundDispatcher(transport=ASGITransport(app=app))
