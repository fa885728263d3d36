"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - clinic_data_path: Small clinic information file
    - settings: Relay settings with an API key, isolated log directory
    - settings_without_key: Same settings with no API key
    - provider: Simulated upstream provider (httpx.MockTransport handler)
    - app / async_client: Application wired to the simulated provider

No fixture talks to the real provider.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from clinic_chat.api.app import create_app
from clinic_chat.config import Settings
from tests.helpers import MESSAGE_STOP, FakeProvider, provider_stream, text_delta

UPSTREAM_URL = "https://provider.test/v1/messages"


@pytest.fixture
def clinic_data_path(tmp_path: Path) -> Path:
    path = tmp_path / "clinic_data.txt"
    path.write_text("Open Monday to Friday, 9am-5pm. Located at 12 Harbour Road.", encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, clinic_data_path: Path) -> Settings:
    """Return settings pointing at the simulated provider.

    Returns:
        Settings with a test API key and logs under tmp_path.
    """
    return Settings(
        api_key="sk-test-key",
        model="claude-test",
        api_url=UPSTREAM_URL,
        max_tokens=256,
        upstream_timeout=None,
        clinic_data_path=clinic_data_path,
        log_dir=tmp_path / "logs",
        api_base_url="http://test",
    )


@pytest.fixture
def settings_without_key(settings: Settings) -> Settings:
    return settings.model_copy(update={"api_key": ""})


@pytest.fixture
def provider() -> FakeProvider:
    """Simulated provider answering "Hello" in two fragments."""
    return FakeProvider(provider_stream(text_delta("Hel"), text_delta("lo"), MESSAGE_STOP))


@pytest.fixture
def app(settings: Settings, provider: FakeProvider) -> FastAPI:
    return create_app(settings, upstream_transport=provider.transport())


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
