"""Shared fixtures: settings without a .env file and an in-process fake backend."""

import json
import os
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from campusgate.connectors.requester import BackendRequester
from campusgate.core.config import Settings

# Environment variables the settings layer reads
_ENV_VARS_TO_ISOLATE = [
    "PORT",
    "SHOW_URLS",
    "LOG_LEVEL",
    "ENVIRONMENT",
    "COURSES_URL",
    "COURSES_PORT",
    "COURSES_ENTRY",
    "STUDENTS_URL",
    "STUDENTS_PORT",
    "STUDENTS_ENTRY",
]


@pytest.fixture(autouse=True)
def env_isolation():
    """Isolate environment variables between tests."""
    backup = {k: os.environ.get(k) for k in _ENV_VARS_TO_ISOLATE}
    try:
        yield
    finally:
        for k, v in backup.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="testing",
        courses_url="courses.local",
        courses_port=4000,
        courses_entry="courses",
        students_url="students.local",
        students_port=4001,
        students_entry="students",
    )


Handler = Union[httpx.Response, Callable[[httpx.Request], httpx.Response], Exception]


class FakeBackend:
    """
    Routes requests by ``(method, path)`` to canned responses.

    Unrouted requests get a 404. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Handler] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.on(method, path, httpx.Response(status_code, json=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"detail": "not routed"})
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(request)
        return handler

    def body_of(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def requester(backend: FakeBackend):
    requester = BackendRequester(timeout_seconds=5, transport=httpx.MockTransport(backend))
    yield requester
    await requester.aclose()
