"""
Pytest configuration for scx_provider tests.
The SCX API is replaced by an httpx.MockTransport that records every request.
"""

import json
import sys
import logging
from pathlib import Path
from typing import List

import httpx
import pytest

# Add src to path for direct imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Configure logging
logging.basicConfig(level=logging.INFO)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (no external dependencies)")


class FakeScxApi:
    """Records requests and answers them with a configurable handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.handler(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture(autouse=True)
def clear_api_key_env(monkeypatch):
    """Tests must not pick up a real key from the developer's shell."""
    monkeypatch.delenv("SCX_API_KEY", raising=False)


@pytest.fixture
def fake_api():
    """Factory for FakeScxApi instances."""
    def _make(handler):
        return FakeScxApi(handler)
    return _make


@pytest.fixture
def json_handler():
    """Build a handler that always answers with the given JSON body."""
    def _make(body, status_code=200, headers=None):
        def handler(request):
            return httpx.Response(status_code, json=body, headers=headers)
        return handler
    return _make
