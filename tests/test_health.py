from app.database import db_connection
from app.utils.prometheus_metrics import normalize_endpoint


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "ok"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"status": "healthy"}


def test_health_banco_indisponivel(client, monkeypatch):
    class SessaoQuebrada:
        def execute(self, *args, **kwargs):
            raise RuntimeError("conexão recusada")

        def close(self):
            pass

    monkeypatch.setattr(db_connection, "SessionLocal", lambda: SessaoQuebrada())
    resp = client.get("/health")
    assert resp.status_code == 503, resp.text
    assert resp.json() == {"status": "unhealthy"}


def test_metricas_expostas(client, headers, cliente, produto, criar_pedido):
    criar_pedido(cliente)

    resp = client.get("/api/monitoring/metrics")
    assert resp.status_code == 200, resp.text
    assert resp.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in resp.text
    assert "pedidos_criados_total" in resp.text


def test_normalize_endpoint():
    assert normalize_endpoint("/api/mesas/admin/mesas/12/status") == "/api/mesas/admin/mesas/{id}/status"
    assert (
        normalize_endpoint("/api/notifications/3f2b8c1e-9a7d-4e21-b0c4-5d6e7f8a9b0c/lida")
        == "/api/notifications/{uuid}/lida"
    )
