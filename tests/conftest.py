"""Shared fixtures for filess.io provider tests."""

import json
from typing import Any, Callable, List, Union

import httpx
import pytest

from filess_provider.integrations.filess_client import FilessClient

BASE_URL = "http://filess.test"
API_TOKEN = "test-token"


class FakeClock:
    """Monotonic clock whose time only moves when sleep() is awaited."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


def envelope(data: Any, msg: str = "ok") -> httpx.Response:
    return json_response(200, {"msg": msg, "data": data})


Step = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class ScriptedTransport(httpx.MockTransport):
    """MockTransport that replays a fixed list of responses and records requests."""

    def __init__(self, steps: List[Step]):
        self.steps = list(steps)
        self.requests: List[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.steps:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        if callable(step):
            return step(request)
        return step

    def bodies(self) -> List[Any]:
        return [json.loads(r.content) if r.content else None for r in self.requests]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(clock):
    """Factory for a FilessClient wired to a scripted transport."""

    def _make(steps: List[Step], api_token: str = API_TOKEN, **kwargs) -> FilessClient:
        transport = ScriptedTransport(steps)
        kwargs.setdefault("sleep", clock.sleep)
        client = FilessClient(BASE_URL, api_token, transport=transport, **kwargs)
        client.transport = transport
        return client

    return _make


def database_payload(
    database_id: Any = 501,
    status: str = "deployed",
    hostname: str = "db-501.filess.io",
    port: Any = "3306",
    users: Any = None,
    **extra: Any,
) -> dict:
    """Backend representation of a database as returned by GET /api/v1/databases/{id}."""
    if users is None:
        users = [{"username": "root", "password": "s3cret", "role": "root"}]
    payload = {
        "id": database_id,
        "name": "orders",
        "description": "Orders database",
        "status": status,
        "engineId": 1,
        "regionId": "3",
        "createdAt": "2026-10-18T10:00:00Z",
        "databaseParams": [
            {"key": "database_hostname", "value": hostname},
            {"key": "database_service_port", "value": port},
        ],
        "databaseUsers": users,
    }
    payload.update(extra)
    return payload
