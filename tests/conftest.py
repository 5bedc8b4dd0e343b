"""Shared fixtures for podcast-digest tests."""

import json

import httpx
import pytest

from src.llm import GenerationClient, GenerationConfig


def _message_response(text, status_code=200):
    return httpx.Response(
        status_code,
        json={
            "id": "msg_test",
            "type": "message",
            "content": [{"type": "text", "text": text}],
            "usage": {"input_tokens": 10, "output_tokens": 5},
        },
    )


def _request_json(request):
    return json.loads(request.content)


@pytest.fixture
def message_response():
    """Build a 200 Messages API response carrying `text`."""
    return _message_response


@pytest.fixture
def request_json():
    """Decode the JSON payload of a captured httpx request."""
    return _request_json


@pytest.fixture
def sleeps():
    """Backoff waits recorded by clients built with make_client."""
    return []


@pytest.fixture
def make_client(sleeps):
    """Build a GenerationClient whose HTTP traffic goes to `handler`."""

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    def _make(handler, **overrides):
        config = GenerationConfig(api_key="test-key", **overrides)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GenerationClient(config, http_client=http_client, sleep=fake_sleep)

    return _make


@pytest.fixture
def sections_json():
    """Serialize (title, content) pairs as the formatting model would."""

    def _build(*pairs):
        return json.dumps(
            {"sections": [{"title": t, "content": c} for t, c in pairs]},
            ensure_ascii=False,
        )

    return _build
