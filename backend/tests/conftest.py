import json

import httpx
import pytest

import backend.main as main
from coach.anthropic_api import AnthropicClient
from coach.mediator import CompletionMediator


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Prevent accidental network calls in unit tests by stubbing socket.create_connection."""

    import socket

    def fake_create_connection(*a, **k):
        raise RuntimeError("Network calls disabled in tests")

    monkeypatch.setattr(socket, "create_connection", fake_create_connection)


class FakeProvider:
    """Records Messages API requests and answers them from a canned reply."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {
            "content": [{"type": "text", "text": "Test fake reply"}]
        }
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)

    def client(self, api_key="test-key"):
        return AnthropicClient(api_key, transport=httpx.MockTransport(self.handler))

    def mediator(self, api_key="test-key"):
        return CompletionMediator(api_key, client=self.client(api_key))


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture(autouse=True)
def mock_mediator(monkeypatch, fake_provider):
    """Default: the app's mediator is configured and talks to a fake provider."""
    monkeypatch.setattr(main, "mediator", fake_provider.mediator())
    yield fake_provider
