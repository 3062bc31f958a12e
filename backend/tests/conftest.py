"""Shared test configuration: stub providers and an HTTP client."""

import os

os.environ["ENVIRONMENT"] = "development"
os.environ["LLM_PROVIDER"] = "stub"
os.environ["TTS_PROVIDER"] = "stub"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from rehearsal.ai.providers.llm.stub import StubLLMProvider  # noqa: E402
from rehearsal.ai.providers.tts.stub import StubTTSProvider  # noqa: E402
from rehearsal.api.http.dependencies import get_llm, get_record_store, get_tts  # noqa: E402
from rehearsal.domains.practice.records import InMemorySessionRecordStore  # noqa: E402
from rehearsal.domains.scenarios.catalog import Agent  # noqa: E402
from rehearsal.main import app  # noqa: E402


@pytest.fixture
def agent() -> Agent:
    return Agent(
        id="agent-0",
        persona_id="mike",
        name="Mike",
        personality="curious and inquisitive",
        avatar="👨‍💼",
        voice_id="f3e8c5bbead746e29d47d38a146247ff",
        emotion_prefix="(curious)",
    )


@pytest.fixture
def plain_agent() -> Agent:
    return Agent(id="agent-1", persona_id="plain", name="Pat", personality="", avatar="")


@pytest.fixture
def record_store() -> InMemorySessionRecordStore:
    return InMemorySessionRecordStore()


@pytest.fixture
def tts_provider() -> StubTTSProvider:
    return StubTTSProvider()


@pytest.fixture
def client(record_store, tts_provider):
    app.dependency_overrides[get_llm] = StubLLMProvider
    app.dependency_overrides[get_tts] = lambda: tts_provider
    app.dependency_overrides[get_record_store] = lambda: record_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
