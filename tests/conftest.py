import json
import os

os.environ.setdefault("OPENAI_API_KEY", "test-key")

import httpx
import pytest
from fastapi.testclient import TestClient

from chat_relay.main import app
from chat_relay.modules.relay.router import get_relay_service
from chat_relay.modules.relay.service import RelayService


class FakeUpstream:
    """Records requests and answers with a canned response or exception."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = {"choices": [{"message": {"role": "assistant", "content": "Hello!"}}]}
        self.raw: bytes | None = None
        self.exc: Exception | None = None

    def respond(self, status_code: int, body: object = None, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.raw = raw

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    def sent_json(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def service(upstream) -> RelayService:
    return RelayService("test-key", transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(service):
    app.dependency_overrides[get_relay_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
