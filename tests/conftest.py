"""Shared fixtures: settings without ambient credentials and a recording mock backend."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from promptgate.app import create_app
from promptgate.core.settings import Settings


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment's credentials."""
    values: Dict[str, Any] = {
        "huggingface_api_key": "hf-test-key",
        "openrouter_api_key": "",
        "news_api_key": "",
        "environment": "test",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class RecordingBackend:
    """
    httpx mock transport handler that records every request.

    ``routes`` maps a host substring to a callable returning an
    ``httpx.Response``; the first matching entry answers the request.
    """

    def __init__(self, routes: Optional[Dict[str, Callable[[httpx.Request], httpx.Response]]] = None):
        self.routes = routes or {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for host, responder in self.routes.items():
            if host in str(request.url):
                return responder(request)
        return httpx.Response(404, text="no route")

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def requests_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if host in str(r.url)]

    def json_body(self, index: int = 0) -> Any:
        return json.loads(self.requests[index].content)


def respond_json(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, json=payload)


def reddit_listing(*posts: Dict[str, Any]) -> Dict[str, Any]:
    return {"data": {"children": [{"kind": "t3", "data": post} for post in posts]}}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend({
        "api-inference.huggingface.co": respond_json([{"generated_text": "Generated text."}]),
    })


@pytest.fixture
def client_factory():
    """Build a TestClient over a fresh app wired to a recording backend."""
    def _build(backend: RecordingBackend, **settings_overrides) -> TestClient:
        app = create_app(make_settings(**settings_overrides), transport=httpx.MockTransport(backend))
        return TestClient(app, raise_server_exceptions=False)
    return _build


@pytest.fixture
def client(client_factory, backend) -> TestClient:
    return client_factory(backend)
