"""Pytest configuration and shared fixtures."""

from collections.abc import Callable

import httpx
import pytest

from sonar_gate.domain.ports.config import SonarConfig
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient

SONAR_URL = "http://sonar.test"

Route = dict | Callable[[httpx.Request], httpx.Response]


class FakeSonar:
    """In-memory SonarQube: routes GET requests by path and records them."""

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def route(self, path: str, response: Route) -> None:
        self.routes[path] = response

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.lstrip("/") == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path.lstrip("/"))
        if route is None:
            return httpx.Response(404, json={"errors": [{"msg": "Unknown url"}]})
        if callable(route):
            return route(request)
        return httpx.Response(200, json=route)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def sequence(*responses: dict) -> Callable[[httpx.Request], httpx.Response]:
    """Route answering with each body in turn, repeating the last one."""
    remaining = list(responses)

    def respond(request: httpx.Request) -> httpx.Response:
        body = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        return httpx.Response(200, json=body)

    return respond


def task_body(status: str, analysis_id: str | None = None) -> dict:
    task = {"id": "TASK-1", "type": "REPORT", "status": status}
    if analysis_id:
        task["analysisId"] = analysis_id
    return {"task": task}


@pytest.fixture
def fake_sonar() -> FakeSonar:
    return FakeSonar()


@pytest.fixture
def ws(fake_sonar: FakeSonar) -> SonarWsClient:
    return SonarWsClient(SonarConfig(url=SONAR_URL), transport=fake_sonar.transport)


_CONFIG_ENV = (
    "SONAR_HOST_URL",
    "SONAR_LOGIN",
    "SONAR_TOKEN",
    "SONAR_PASSWORD",
    "SONAR_QUERY_MAX_RETRY",
    "SONAR_QUERY_WAIT",
    "SONAR_REF_NAME",
    "SONAR_WORK_DIR",
    "SONAR_PROJECT_BASE_DIR",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture(autouse=True)
def _clean_config_env(monkeypatch):
    """Keep CI variables from leaking into config tests."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
