"""
Shared fixtures: a fake Hamibot API behind httpx.MockTransport.

Tests register canned responses per (method, path) and inspect the recorded
requests afterwards. Nothing touches the network.
"""

import json
from typing import Any, Optional, Union

import httpx
import pytest

from hamibot_mcp.core.client import HamibotClient
from hamibot_mcp.tools.mcp_server import create_server

TOKEN = "hmp_test_token"
BASE_URL = "https://api.hamibot.com/v2"

SCRIPT_ID = "507f1f77bcf86cd799439011"
DEVICE_ID = "aaaaaaaaaaaaaaaaaaaaaaaa"


class FakeHamibot:
    """Records requests and replies from a table of canned responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Union[httpx.Response, Exception]] = {}

    def respond(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
    ) -> None:
        if text is not None:
            response = httpx.Response(status, text=text)
        else:
            response = httpx.Response(status, json=json_body)
        self._routes[(method, path)] = response

    def fail(self, method: str, path: str, error: Exception) -> None:
        self._routes[(method, path)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no route")
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def last_body(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_api() -> FakeHamibot:
    return FakeHamibot()


@pytest.fixture
def client(fake_api: FakeHamibot) -> HamibotClient:
    return HamibotClient(TOKEN, base_url=BASE_URL, transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def server(client: HamibotClient):
    return create_server(client)
