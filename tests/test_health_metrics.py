from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from marketplace.config.settings import Config
from marketplace.presentation.dependencies.auth import issue_session_token


def test_healthz(client):
    res = client.get("/healthz")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("+00:00")


def test_metrics_endpoint(client):
    client.get("/healthz")

    res = client.get("/metrics")

    assert res.status_code == 200
    assert "marketplace_ws_connections" in res.text
    assert 'route="/healthz"' in res.text


def test_correlation_id_is_echoed(client):
    res = client.get("/healthz", headers={"X-Correlation-ID": "abc-123"})

    assert res.headers["X-Correlation-ID"] == "abc-123"


def test_unknown_route_uses_error_shape(client):
    res = client.get("/api/nope")

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Not Found"}


def test_unexpected_errors_are_generic(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/boom")

    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Internal server error"}


def test_realtime_rejections_are_counted(client, monkeypatch, buyer):
    monkeypatch.setattr(Config, "REALTIME_ERROR_EVENTS", True)
    before = REGISTRY.get_sample_value(
        "marketplace_chat_rejections_total", {"reason": "not_found"}
    ) or 0.0

    with client.websocket_connect(
        "/ws", headers={"Authorization": f"Bearer {issue_session_token(buyer)}"}
    ) as ws:
        ws.send_json({"event": "send-message", "data": {"productId": "abc", "content": "hi"}})
        assert ws.receive_json()["event"] == "error"

    after = REGISTRY.get_sample_value(
        "marketplace_chat_rejections_total", {"reason": "not_found"}
    )
    assert after == before + 1
