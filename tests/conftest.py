# tests/conftest.py
from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from renderapi.core.config import AppSettings

TEST_BASE_URL = "https://api.test/v1"
TEST_TOKEN = "supersecrettoken123456"

Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class FakeRender:
    """In-memory stand-in for the API, routed by path (without the /v1 prefix)."""

    routes: dict[str, Handler] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def route(self, path: str, handler: Handler) -> None:
        self.routes[path] = handler

    def json(self, path: str, payload: Any, status_code: int = 200) -> None:
        self.route(path, lambda request: httpx.Response(status_code, json=payload))

    def paged(self, path: str, key: str, items: list[dict[str, Any]], page_size: int = 2) -> None:
        """Serve `items` as cursor envelopes, `page_size` per page, then an empty page."""

        envelopes = [{"cursor": f"c{i}", key: item} for i, item in enumerate(items)]

        def handler(request: httpx.Request) -> httpx.Response:
            cursor = request.url.params.get("cursor")
            start = 0
            if cursor is not None:
                start = int(cursor[1:]) + 1
            return httpx.Response(200, json=envelopes[start : start + page_size])

        self.route(path, handler)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1/").strip("/")
        handler = self.routes.get(path)
        if handler is None:
            return httpx.Response(404, text=json.dumps({"message": f"not found: {path}"}))
        return handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture()
def settings() -> AppSettings:
    base = AppSettings(api_base_url=TEST_BASE_URL, _env_file=None)
    return base.model_copy(update={"api_key": TEST_TOKEN})


@pytest.fixture()
def fake() -> FakeRender:
    return FakeRender()


@pytest.fixture()
def client(fake: FakeRender) -> httpx.AsyncClient:
    return fake.client()
