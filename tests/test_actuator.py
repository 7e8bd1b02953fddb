from __future__ import annotations

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from usermgmt.actuator import register_actuator_routes

UPSTREAM = "http://auth.invalid/actuator/health"


def _client(handler) -> TestClient:
    app = FastAPI()
    register_actuator_routes(app, upstream_url=UPSTREAM, transport=httpx.MockTransport(handler))
    return TestClient(app)


def test_health_status_relays_upstream_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='{"status":"UP"}')

    response = _client(handler).get("/test-actuator/health-status")

    assert response.status_code == 200
    assert response.text == '{"status":"UP"}'
    assert response.headers["content-type"].startswith("text/plain")
    assert [(r.method, str(r.url)) for r in seen] == [("GET", UPSTREAM)]


def test_health_status_reports_upstream_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text='{"status":"DOWN"}')

    response = _client(handler).get("/test-actuator/health-status")

    assert response.status_code == 502
    assert response.json() == {"detail": "Upstream health check failed"}


def test_health_status_reports_unreachable_upstream() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    response = _client(handler).get("/test-actuator/health-status")

    assert response.status_code == 502
