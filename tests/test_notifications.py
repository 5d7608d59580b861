from datetime import timedelta

from app.api.notifications.models.notification import NotificationModel, PrioridadeNotificacao, TipoNotificacao
from app.api.notifications.repositories.notification_repository import NotificationRepository
from app.api.notifications.services.notification_service import NotificationService
from app.utils.database_utils import now_trimmed

BASE = "/api/notifications"


def _criar(client, headers, gestor_id, **extra):
    body = {"titulo": "Aviso", "mensagem": "Cozinha fecha às 22h", "tipo": "SISTEMA", **extra}
    resp = client.post(BASE, json=body, headers=headers(gestor_id))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_criar_exige_gestor_e_valida_campos(client, headers, gerente, funcionario):
    body = {"titulo": "Aviso", "mensagem": "Teste", "tipo": "SISTEMA"}
    assert client.post(BASE, json=body, headers=headers(funcionario)).status_code == 403

    resp = client.post(BASE, json={**body, "tipo": "INVALIDO"}, headers=headers(gerente))
    assert resp.status_code == 422, resp.text
    resp = client.post(BASE, json={**body, "prioridade": "altissima"}, headers=headers(gerente))
    assert resp.status_code == 422, resp.text
    resp = client.post(BASE, json={**body, "titulo": ""}, headers=headers(gerente))
    assert resp.status_code == 422, resp.text

    data = _criar(client, headers, gerente, tipo="system", prioridade="high")
    assert data["tipo"] == "SISTEMA"
    assert data["prioridade"] == "high"
    assert data["usuario_id"] is None


def test_listagem_inclui_proprias_e_globais(client, headers, gerente, cliente, outro_cliente):
    _criar(client, headers, gerente)
    _criar(client, headers, gerente, usuario_id=cliente, titulo="Só sua")
    _criar(client, headers, gerente, usuario_id=outro_cliente, titulo="De outro")

    resp = client.get(BASE, headers=headers(cliente))
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["total"] == 2
    assert data["nao_lidas"] == 2
    assert data["has_more"] is False
    assert {n["titulo"] for n in data["notificacoes"]} == {"Aviso", "Só sua"}

    resp = client.get(BASE, params={"limit": 1}, headers=headers(cliente))
    assert resp.json()["has_more"] is True


def test_buscar_de_outro_usuario_404(client, headers, gerente, cliente, outro_cliente):
    alheia = _criar(client, headers, gerente, usuario_id=outro_cliente)
    resp = client.get(f"{BASE}/{alheia['id']}", headers=headers(cliente))
    assert resp.status_code == 404, resp.text

    resp = client.get(f"{BASE}/{alheia['id']}", headers=headers(outro_cliente))
    assert resp.status_code == 200, resp.text


def test_marcar_lida_e_todas_lidas(client, headers, gerente, cliente):
    primeira = _criar(client, headers, gerente, usuario_id=cliente)
    _criar(client, headers, gerente, usuario_id=cliente)
    _criar(client, headers, gerente)

    resp = client.put(f"{BASE}/{primeira['id']}/lida", headers=headers(cliente))
    assert resp.status_code == 200, resp.text
    assert resp.json()["lida"] is True

    resp = client.get(BASE, params={"lida": False}, headers=headers(cliente))
    assert resp.json()["total"] == 2

    resp = client.put(f"{BASE}/marcar-todas-lidas", headers=headers(cliente))
    assert resp.status_code == 200, resp.text
    assert resp.json()["atualizadas"] == 2
    assert client.get(BASE, headers=headers(cliente)).json()["nao_lidas"] == 0


def test_remover_e_soft_delete(client, headers, gerente, cliente):
    propria = _criar(client, headers, gerente, usuario_id=cliente)
    global_ = _criar(client, headers, gerente)

    resp = client.delete(f"{BASE}/{global_['id']}", headers=headers(cliente))
    assert resp.status_code == 403, resp.text

    resp = client.delete(f"{BASE}/{propria['id']}", headers=headers(cliente))
    assert resp.status_code == 204, resp.text
    assert client.get(f"{BASE}/{propria['id']}", headers=headers(cliente)).status_code == 404

    resp = client.delete(f"{BASE}/{global_['id']}", headers=headers(gerente))
    assert resp.status_code == 204, resp.text


def test_limpeza_desativa_expiradas(client, headers, admin):
    vencida = (now_trimmed() - timedelta(hours=1)).isoformat()
    _criar(client, headers, admin, expira_em=vencida)
    _criar(client, headers, admin)

    resp = client.post(f"{BASE}/limpeza", headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["removidas"] == 1
    assert client.get(BASE, headers=headers(admin)).json()["total"] == 1


def test_estatisticas_exige_gestor(client, headers, admin, cliente):
    _criar(client, headers, admin)
    assert client.get(f"{BASE}/estatisticas", headers=headers(cliente)).status_code == 403

    resp = client.get(f"{BASE}/estatisticas", headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["total"] == 1


def test_falha_ao_notificar_nao_propaga(db, monkeypatch):
    svc = NotificationService(db)

    def _falha(**kwargs):
        raise RuntimeError("banco indisponível")

    monkeypatch.setattr(svc.repo, "create", _falha)
    assert svc.notificar_sistema("Reinício programado") is None


def test_helpers_de_dominio(db):
    svc = NotificationService(db)
    notificacao = svc.notificar_sistema("Backup concluído", PrioridadeNotificacao.LOW)
    db.commit()

    assert notificacao.tipo == TipoNotificacao.SISTEMA
    assert notificacao.is_global
    assert notificacao.expira_em > now_trimmed()


def test_erro_do_banco_ao_notificar_nao_derruba_pedido(client, headers, gerente, cliente, produto, mesa, monkeypatch):
    def _create_sem_titulo(self, **data):
        notificacao = NotificationModel(**{**data, "titulo": None})
        self.db.add(notificacao)
        self.db.flush()
        return notificacao

    monkeypatch.setattr(NotificationRepository, "create", _create_sem_titulo)
    resp = client.post(
        "/api/pedidos/client/pedidos",
        json={"itens": [{"produto_id": produto}], "mesa_id": mesa},
        headers=headers(cliente),
    )
    assert resp.status_code == 201, resp.text
    monkeypatch.undo()

    mesa_data = client.get(f"/api/mesas/admin/mesas/{mesa}", headers=headers(gerente)).json()
    assert mesa_data["status"] == "OCUPADA"
    assert mesa_data["responsavel_id"] == cliente

    resp = client.get(f"/api/pedidos/admin/pedidos/{resp.json()['id']}", headers=headers(gerente))
    assert resp.status_code == 200, resp.text
    assert client.get(BASE, headers=headers(gerente)).json()["total"] == 0
