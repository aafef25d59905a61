"""Shared test doubles for the orchestration service transport."""

from collections import defaultdict
from typing import Any, Dict, List, Tuple

import pytest

from tower_runner.core.config import JobRunnerConfig, TowerConnection
from tower_runner.core.interfaces.http_client import HttpClientPort
from tower_runner.core.managers.tower_client import TowerClient
from tower_runner.core.models.http import HttpRequest, HttpResponse
from tower_runner.core.utils.api_urls import TowerApiUrls

HOST = "http://tower.test"
BASE = f"{HOST}/api/v1"


class FakeHttpClient(HttpClientPort):
    """Routes (method, url) to queued responses; the last queued one repeats."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Any]] = defaultdict(list)
        self.requests: List[HttpRequest] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    def add(self, method: str, url: str, status: int = 200, body: Any = None, reason: str | None = None):
        self.routes[(method, url)].append(HttpResponse(status=status, reason=reason, body=body))
        return self

    def add_error(self, method: str, url: str, exc: Exception):
        self.routes[(method, url)].append(exc)
        return self

    def calls(self, method: str, url: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url == url)

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url))
        if not queue:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        pass


class ListSink:
    def __init__(self) -> None:
        self.events = []

    def emit(self, event) -> None:
        self.events.append(event)

    @property
    def counters(self) -> List[int]:
        return [e.counter for e in self.events]


def events_page(counters, next_url=None, count=None):
    return {
        "count": count if count is not None else len(counters),
        "results": [{"counter": c, "stdout": f"line {c}", "event": "runner_on_ok"} for c in counters],
        "next": next_url,
    }


def events_url(job_id: str, page: int, page_size: int = 10) -> str:
    return f"{BASE}/jobs/{job_id}/job_events/?page_size={page_size}&page={page}"


@pytest.fixture
def connection():
    return TowerConnection(url=HOST + "/", username="admin", password="s3cret")


@pytest.fixture
def test_config():
    return JobRunnerConfig(poll_interval=0.001, page_size=10)


@pytest.fixture
def fake_http():
    return FakeHttpClient()


@pytest.fixture
def urls():
    return TowerApiUrls(HOST, "/api/v1")


@pytest.fixture
def tower_client(fake_http, connection, test_config):
    return TowerClient(fake_http, connection, test_config)


@pytest.fixture
def sink():
    return ListSink()
