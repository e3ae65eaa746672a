import asyncio
import json
import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure project root in path
current_dir = os.path.dirname(__file__)
project_root = os.path.abspath(os.path.join(current_dir, ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from counter_admin.config import settings  # type: ignore  # noqa: E402
from counter_admin.main import create_app  # type: ignore  # noqa: E402
from counter_admin.repository import InMemoryMetricRepository, Metric  # type: ignore  # noqa: E402


@pytest.fixture
def repo():
    return InMemoryMetricRepository(
        [
            Metric("counter.a", 5.0),
            Metric("other.x", 9.0),
            Metric("counter.b", 2.0),
        ]
    )


@pytest.fixture
def client(repo, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "logs_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(settings, "record_request_metrics", False)
    return TestClient(create_app(repo))


def test_list_counters_detailed(client):
    resp = client.get("/metrics/counters", params={"page": 0, "size": 10, "detailed": "true"})
    assert resp.status_code == 200
    assert resp.json() == {
        "content": [{"name": "a", "value": 5}, {"name": "b", "value": 2}],
        "page": {"size": 2, "number": 0, "totalElements": 2},
    }


def test_list_counters_shallow_unpaged(client):
    resp = client.get("/metrics/counters")
    assert resp.status_code == 200
    assert resp.json() == {
        "content": [{"name": "a"}, {"name": "b"}],
        "page": {"size": 2, "number": 0, "totalElements": 2},
    }


def test_list_second_page(client):
    resp = client.get("/metrics/counters", params={"page": 1, "size": 1, "detailed": "true"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["content"] == [{"name": "b", "value": 2}]
    assert body["page"] == {"size": 1, "number": 1, "totalElements": 2}


def test_list_page_past_end(client):
    resp = client.get("/metrics/counters", params={"page": 3, "size": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["content"] == []
    assert body["page"]["totalElements"] == 2
    assert body["page"]["number"] == 3


def test_list_page_only_uses_default_size(client, repo):
    for i in range(30):
        repo.set(Metric(f"counter.c{i}", float(i)))
    resp = client.get("/metrics/counters", params={"page": 0})
    body = resp.json()
    assert len(body["content"]) == settings.default_page_size
    assert body["page"]["totalElements"] == 32


def test_list_oversized_page_is_clamped(client, monkeypatch):
    monkeypatch.setattr(settings, "max_page_size", 1)
    resp = client.get("/metrics/counters", params={"size": 50})
    assert resp.status_code == 200
    assert resp.json()["page"]["size"] == 1


@pytest.mark.parametrize("params", [{"size": 0}, {"size": -4}, {"page": -1, "size": 5}])
def test_list_bad_paging(client, params):
    resp = client.get("/metrics/counters", params=params)
    assert resp.status_code == 400
    assert "detail" in resp.json()


def test_display_counter(client):
    resp = client.get("/metrics/counters/a")
    assert resp.status_code == 200
    assert resp.json() == {"name": "a", "value": 5}


def test_display_missing(client):
    resp = client.get("/metrics/counters/missing")
    assert resp.status_code == 404
    assert "missing" in resp.json()["detail"]


def test_delete_counter(client, repo, tmp_path):
    resp = client.delete("/metrics/counters/a", headers={"X-Request-ID": "req-1"})
    assert resp.status_code == 200
    assert resp.content == b""
    assert repo.find_one("counter.a") is None
    assert client.get("/metrics/counters/a").status_code == 404

    entry = json.loads((tmp_path / "logs" / "audit.log").read_text(encoding="utf-8").splitlines()[0])
    assert entry["action"] == "reset"
    assert entry["counter"] == "counter.a"
    assert entry["request_id"] == "req-1"


def test_delete_missing(client, repo):
    resp = client.delete("/metrics/counters/missing")
    assert resp.status_code == 404
    assert len(repo.find_all()) == 3


def test_request_id_header(client):
    resp = client.get("/metrics/counters")
    assert resp.headers.get("X-Request-ID")


def test_requests_are_counted(repo, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "logs_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(settings, "record_request_metrics", True)
    client = TestClient(create_app(repo))

    client.get("/metrics/counters/missing")
    client.get("/metrics/counters/other")
    client.get("/api/health")
    client.get("/api/health")
    assert repo.find_one("counter.status.404.metrics.counters.{name}").value == 2.0
    assert repo.find_one("counter.status.404.metrics.counters.missing") is None
    assert repo.find_one("counter.status.200.api.health").value == 2.0

    resp = client.get("/metrics/counters/status.200.api.health")
    assert resp.json() == {"name": "status.200.api.health", "value": 2}


def test_unmatched_paths_share_one_counter(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "logs_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(settings, "record_request_metrics", True)
    repo = InMemoryMetricRepository([Metric("counter.a", 5.0)])
    client = TestClient(create_app(repo))

    for i in range(50):
        assert client.get(f"/no/such/path/{i}").status_code == 404
        assert client.get(f"/metrics/counters/guess{i}").status_code == 404

    names = {m.name for m in repo.find_all()}
    assert names == {
        "counter.a",
        "counter.status.404.star-star",
        "counter.status.404.metrics.counters.{name}",
    }
    assert repo.find_one("counter.status.404.star-star").value == 50.0
    assert repo.find_one("counter.status.404.metrics.counters.{name}").value == 50.0


def test_metric_name_for_route_templates():
    from counter_admin.middleware.metrics import metric_name_for  # type: ignore

    assert metric_name_for(200, "/") == "counter.status.200.root"
    assert metric_name_for(200, "/api/health") == "counter.status.200.api.health"
    assert metric_name_for(404, None) == "counter.status.404.star-star"


class LoopAwareRepository(InMemoryMetricRepository):
    def __init__(self):
        super().__init__()
        self.increments_on_loop = []

    def increment(self, name, delta=1.0):
        try:
            asyncio.get_running_loop()
            self.increments_on_loop.append(True)
        except RuntimeError:
            self.increments_on_loop.append(False)
        super().increment(name, delta)


def test_request_metrics_written_off_the_event_loop(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "logs_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(settings, "record_request_metrics", True)
    repo = LoopAwareRepository()
    client = TestClient(create_app(repo))

    client.get("/api/health")
    client.get("/metrics/counters")
    assert repo.increments_on_loop == [False, False]
