"""Pytest configuration and shared fixtures."""

from typing import AsyncGenerator

import pytest

from helpers import FakeSleep, RecordingTransport
from yandex_ai_chat.providers import SpeechKitClient, YandexARTClient, YandexGPTClient


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def gpt_recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
async def gpt_client(gpt_recorder) -> AsyncGenerator[YandexGPTClient, None]:
    """YandexGPT client whose responses are queued on gpt_recorder."""
    client = YandexGPTClient(
        api_key="test-key",
        folder_id="b1gfolder",
        transport=gpt_recorder.transport,
    )
    await client.initialize()
    yield client
    await client.close()


@pytest.fixture
def art_recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
async def art_client(art_recorder) -> AsyncGenerator[YandexARTClient, None]:
    """YandexART client whose responses are queued on art_recorder."""
    client = YandexARTClient(
        api_key="test-key",
        folder_id="b1gfolder",
        transport=art_recorder.transport,
    )
    await client.initialize()
    yield client
    await client.close()


@pytest.fixture
def speech_recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
async def speech_client(speech_recorder) -> AsyncGenerator[SpeechKitClient, None]:
    client = SpeechKitClient(api_key="test-key", transport=speech_recorder.transport)
    await client.initialize()
    yield client
    await client.close()


# Sample test data
@pytest.fixture
def sample_prompt():
    return "Write a Python function that parses ISO-8601 dates"
