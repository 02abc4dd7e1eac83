"""Shared test fixtures for the firebase_rtdb package."""

# pyright: reportPrivateUsage=false

import itertools
import json
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from firebase_rtdb.client.http_client import create_http_client
from firebase_rtdb.config import FirebaseConfig

BASE_URI = "https://demo-db.firebaseio.com/"
T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def _json_response(status: int, value: Any) -> httpx.Response:
    # Firebase answers missing data with a literal null body
    return httpx.Response(status, content=json.dumps(value), headers={"Content-Type": "application/json"})


class FakeClock:
    """Mutable stand-in for the token manager's notion of now."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeCredentials:
    """google-auth style credentials minting numbered tokens with a fixed lifetime."""

    def __init__(self, clock: FakeClock, lifetime: float = 3600) -> None:
        self._clock = clock
        self._lifetime = lifetime
        self.refresh_count = 0
        self.token: str | None = None
        self.expiry: datetime | None = None

    def refresh(self, request: object) -> None:
        _ = request
        self.refresh_count += 1
        self.token = f"token-{self.refresh_count}"
        # google-auth stores expiry as naive UTC
        self.expiry = (self._clock() + timedelta(seconds=self._lifetime)).replace(tzinfo=None)

    def apply(self, headers: dict[str, str], token: str | None = None) -> None:
        headers["authorization"] = f"Bearer {token or self.token}"


class FakeDatabase:
    """In-memory Realtime Database answering REST requests via ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/").removesuffix(".json")
        payload = json.loads(request.content) if request.content else None
        match request.method:
            case "PUT":
                self.data[path] = payload
                return _json_response(200, payload)
            case "GET":
                return _json_response(200, self.data.get(path))
            case "POST":
                key = f"-Nkey{next(self._ids):04d}"
                self.data[f"{path}/{key}"] = payload
                return _json_response(200, {"name": key})
            case "PATCH":
                current = self.data.get(path) or {}
                current.update(payload)
                self.data[path] = current
                return _json_response(200, payload)
            case "DELETE":
                self.data.pop(path, None)
                return _json_response(200, None)
        return _json_response(405, {"error": "Method not allowed"})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def clock() -> Iterator[FakeClock]:
    """Patch the token manager clock with a controllable one starting at ``T0``."""
    fake = FakeClock()
    with patch("firebase_rtdb.client.token_manager._utcnow", fake):
        yield fake


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def http_client(fake_db: FakeDatabase) -> Iterator[httpx.Client]:
    """Return a real transport configuration routed to the in-memory database."""
    config = FirebaseConfig.build(base_uri=BASE_URI)
    client = create_http_client(config, transport=httpx.MockTransport(fake_db.handler))
    yield client
    client.close()


@pytest.fixture
def fake_credentials(clock: FakeClock) -> FakeCredentials:
    """Return credentials issuing one hour tokens against the patched clock."""
    return FakeCredentials(clock)
