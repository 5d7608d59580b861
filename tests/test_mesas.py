from decimal import Decimal

from app.api.mesas.models.model_mesa import MesaModel, StatusMesa
from app.api.mesas.services.service_mesa_status import MesaStatusService
from app.api.pedidos.models.model_pedido import PedidoModel, StatusPedido, TipoEntrega

BASE = "/api/mesas/admin/mesas"


def _mesa(client, headers, user_id, mesa_id):
    resp = client.get(f"{BASE}/{mesa_id}", headers=headers(user_id))
    assert resp.status_code == 200, resp.text
    return resp.json()


# ---------------- CRUD ----------------
def test_criar_mesa_numero_duplicado(client, headers, gerente):
    resp = client.post(BASE, json={"numero": 5, "capacidade": 2}, headers=headers(gerente))
    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "LIVRE"
    assert resp.json()["label"] == "Mesa 5"

    resp = client.post(BASE, json={"numero": 5}, headers=headers(gerente))
    assert resp.status_code == 400, resp.text


def test_criar_mesa_responsavel_inexistente(client, headers, gerente):
    resp = client.post(BASE, json={"numero": 7, "responsavel_id": 999}, headers=headers(gerente))
    assert resp.status_code == 400, resp.text


def test_criar_mesa_aceita_alias_disponivel(client, headers, admin):
    resp = client.post(BASE, json={"numero": 8, "status": "DISPONIVEL"}, headers=headers(admin))
    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "LIVRE"


def test_criar_mesa_exige_gestor(client, headers, funcionario):
    resp = client.post(BASE, json={"numero": 9}, headers=headers(funcionario))
    assert resp.status_code == 403, resp.text


def test_listar_filtra_por_status_e_ordena(client, headers, admin, mesa):
    client.post(BASE, json={"numero": 3, "status": "MANUTENCAO"}, headers=headers(admin))
    client.post(BASE, json={"numero": 2}, headers=headers(admin))

    resp = client.get(BASE, headers=headers(admin))
    assert [m["numero"] for m in resp.json()] == [1, 2, 3]

    resp = client.get(BASE, params={"status": "MANUTENCAO"}, headers=headers(admin))
    assert [m["numero"] for m in resp.json()] == [3]

    resp = client.get(f"{BASE}/stats", headers=headers(admin))
    assert resp.json() == {"total": 3, "livre": 2, "ocupada": 0, "reservada": 0, "manutencao": 1}


def test_atualizar_mesa_grava_historico(client, headers, gerente, mesa):
    resp = client.put(f"{BASE}/{mesa}", json={"status": "RESERVADA"}, headers=headers(gerente))
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "RESERVADA"

    resp = client.get(f"{BASE}/{mesa}/historico", headers=headers(gerente))
    historico = resp.json()
    assert historico[-1]["status_anterior"] == "LIVRE"
    assert historico[-1]["status_novo"] == "RESERVADA"


def test_deletar_mesa_com_pedidos_bloqueado(client, headers, admin, cliente, mesa, criar_pedido):
    criar_pedido(cliente, mesa_id=mesa)
    resp = client.delete(f"{BASE}/{mesa}", headers=headers(admin))
    assert resp.status_code == 400, resp.text
    assert "MANUTENCAO" in resp.json()["detail"]


def test_deletar_mesa_sem_pedidos(client, headers, admin, mesa):
    assert client.delete(f"{BASE}/{mesa}", headers=headers(admin)).status_code == 204
    assert client.get(f"{BASE}/{mesa}", headers=headers(admin)).status_code == 404


# ---------------- Ciclo de vida ----------------
def test_criar_pedido_ocupa_mesa_com_responsavel(client, headers, funcionario, cliente, mesa, criar_pedido):
    pedido = criar_pedido(cliente, mesa_id=mesa)
    assert pedido["tipo_entrega"] == "MESA"

    data = _mesa(client, headers, funcionario, mesa)
    assert data["status"] == "OCUPADA"
    assert data["responsavel_id"] == cliente
    assert data["responsavel"]["nome"] == "Maria"


def test_responsavel_e_dono_do_pedido_ativo_mais_recente(
    client, headers, funcionario, cliente, outro_cliente, mesa, criar_pedido
):
    criar_pedido(cliente, mesa_id=mesa)
    criar_pedido(outro_cliente, mesa_id=mesa)
    assert _mesa(client, headers, funcionario, mesa)["responsavel_id"] == outro_cliente


def test_cancelar_ultimo_pedido_libera_mesa(client, headers, funcionario, cliente, mesa, criar_pedido):
    pedido = criar_pedido(cliente, mesa_id=mesa)
    resp = client.post(f"/api/pedidos/admin/pedidos/{pedido['id']}/cancelar", headers=headers(cliente))
    assert resp.status_code == 200, resp.text

    data = _mesa(client, headers, funcionario, mesa)
    assert data["status"] == "LIVRE"
    assert data["responsavel_id"] is None


def test_mesa_continua_ocupada_enquanto_houver_pedido_ativo(
    client, headers, funcionario, cliente, outro_cliente, mesa, criar_pedido
):
    primeiro = criar_pedido(cliente, mesa_id=mesa)
    criar_pedido(outro_cliente, mesa_id=mesa)

    client.post(f"/api/pedidos/admin/pedidos/{primeiro['id']}/cancelar", headers=headers(funcionario))
    data = _mesa(client, headers, funcionario, mesa)
    assert data["status"] == "OCUPADA"
    assert data["responsavel_id"] == outro_cliente


def test_receber_pedido_libera_mesa(client, headers, funcionario, cliente, mesa, criar_pedido):
    pedido = criar_pedido(cliente, mesa_id=mesa)
    resp = client.post(f"/api/pedidos/admin/pedidos/{pedido['id']}/receber", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    assert _mesa(client, headers, funcionario, mesa)["status"] == "LIVRE"


def test_pagamento_libera_mesa(client, headers, funcionario, cliente, mesa, criar_pedido):
    pedido = criar_pedido(cliente, mesa_id=mesa)
    resp = client.post(
        f"/api/pedidos/admin/pedidos/{pedido['id']}/pagamento",
        json={"valor_pago": "20.00", "metodo_pagamento": "PIX"},
        headers=headers(funcionario),
    )
    assert resp.status_code == 200, resp.text
    assert _mesa(client, headers, funcionario, mesa)["status"] == "LIVRE"


def test_verificar_status_detecta_inconsistencia(client, headers, funcionario, cliente, mesa, db):
    db.add(PedidoModel(
        usuario_id=cliente,
        mesa_id=mesa,
        status=StatusPedido.PREPARANDO,
        tipo_entrega=TipoEntrega.MESA,
        total=Decimal("10.00"),
    ))
    db.commit()

    resp = client.get(f"{BASE}/{mesa}/status", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["pedidos_ativos"] == 1
    assert data["deveria_estar_ocupada"] is True
    assert data["status_consistente"] is False
    assert data["mesa"]["status"] == "LIVRE"

    resp = client.post(f"{BASE}/{mesa}/recalcular-status", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status_alterado"] is True
    assert data["mesa"]["status"] == "OCUPADA"
    assert data["mesa"]["responsavel_id"] == cliente

    resp = client.post(f"{BASE}/{mesa}/recalcular-status", headers=headers(funcionario))
    assert resp.json()["status_alterado"] is False


def test_recalcular_preserva_manutencao_sem_pedidos(client, headers, admin, mesa):
    client.put(f"{BASE}/{mesa}", json={"status": "MANUTENCAO"}, headers=headers(admin))
    resp = client.post(f"{BASE}/{mesa}/recalcular-status", headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["mesa"]["status"] == "MANUTENCAO"
    assert resp.json()["status_alterado"] is False


def test_recalcular_exige_staff(client, headers, cliente, mesa):
    resp = client.post(f"{BASE}/{mesa}/recalcular-status", headers=headers(cliente))
    assert resp.status_code == 403, resp.text


def test_liberar_bloqueado_com_pedido_em_preparo(client, headers, funcionario, cliente, mesa, criar_pedido):
    criar_pedido(cliente, mesa_id=mesa)
    resp = client.post(f"{BASE}/{mesa}/liberar", headers=headers(funcionario))
    assert resp.status_code == 400, resp.text
    assert "pedidos em preparo" in resp.json()["detail"]


def test_liberar_bloqueado_com_entregue_nao_pago(client, headers, funcionario, cliente, db):
    mesa = MesaModel(numero=10, status=StatusMesa.OCUPADA, responsavel_id=cliente)
    db.add(mesa)
    db.flush()
    db.add(PedidoModel(
        usuario_id=cliente,
        mesa_id=mesa.id,
        status=StatusPedido.ENTREGUE,
        tipo_entrega=TipoEntrega.MESA,
        total=Decimal("10.00"),
        pago=False,
    ))
    db.commit()
    mesa_id = mesa.id

    resp = client.post(f"{BASE}/{mesa_id}/liberar", headers=headers(funcionario))
    assert resp.status_code == 400, resp.text
    assert "ENTREGUE" in resp.json()["detail"]

    resp = client.get(f"{BASE}/{mesa_id}/estado", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    assert resp.json()["pedidos_ativos"] == []
    assert len(resp.json()["pedidos_pendentes_pagamento"]) == 1


def test_selecionar_e_liberar_mesa(client, headers, funcionario, mesa):
    resp = client.post(f"{BASE}/{mesa}/selecionar", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "OCUPADA"
    assert resp.json()["responsavel_id"] == funcionario

    resp = client.post(f"{BASE}/{mesa}/selecionar", headers=headers(funcionario))
    assert resp.status_code == 400, resp.text

    resp = client.post(f"{BASE}/{mesa}/liberar", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "LIVRE"
    assert resp.json()["responsavel_id"] is None


def test_forcar_liberacao_cancela_pedidos_ativos(
    client, headers, gerente, funcionario, cliente, outro_cliente, mesa, criar_pedido
):
    p1 = criar_pedido(cliente, mesa_id=mesa)
    p2 = criar_pedido(outro_cliente, mesa_id=mesa)

    resp = client.post(f"{BASE}/{mesa}/forcar-liberacao", headers=headers(funcionario))
    assert resp.status_code == 403, resp.text

    resp = client.post(f"{BASE}/{mesa}/forcar-liberacao", headers=headers(gerente))
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert sorted(data["pedidos_cancelados"]) == sorted([p1["id"], p2["id"]])
    assert data["mesa"]["status"] == "LIVRE"

    resp = client.get(f"/api/pedidos/admin/pedidos/{p1['id']}", headers=headers(gerente))
    assert resp.json()["status"] == "CANCELADO"


def test_notificacoes_de_ocupacao_e_liberacao(client, headers, funcionario, cliente, mesa, criar_pedido):
    pedido = criar_pedido(cliente, mesa_id=mesa)
    client.post(f"/api/pedidos/admin/pedidos/{pedido['id']}/cancelar", headers=headers(funcionario))

    resp = client.get("/api/notifications", params={"tipo": "MESA"}, headers=headers(funcionario))
    titulos = [n["titulo"] for n in resp.json()["notificacoes"]]
    assert "Mesa Ocupada" in titulos
    assert "Mesa Liberada" in titulos


def test_coordenador_nao_faz_commit(db, cliente, mesa):
    db.add(PedidoModel(
        usuario_id=cliente,
        mesa_id=mesa,
        status=StatusPedido.CONFIRMADO,
        tipo_entrega=TipoEntrega.MESA,
        total=Decimal("10.00"),
    ))
    resultado = MesaStatusService(db).recalcular_status(mesa, motivo="teste")
    assert resultado["mesa"].status == StatusMesa.OCUPADA
    assert resultado["pedidos_ativos"] == 1

    db.rollback()
    assert db.get(MesaModel, mesa).status == StatusMesa.LIVRE


def test_recalcular_troca_de_responsavel_nao_altera_status(
    client, headers, db, funcionario, cliente, outro_cliente, mesa, criar_pedido
):
    criar_pedido(cliente, mesa_id=mesa)
    db.add(PedidoModel(
        usuario_id=outro_cliente,
        mesa_id=mesa,
        status=StatusPedido.CONFIRMADO,
        tipo_entrega=TipoEntrega.MESA,
        total=Decimal("15.00"),
    ))
    db.commit()

    resp = client.post(f"{BASE}/{mesa}/recalcular-status", headers=headers(funcionario))
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status_alterado"] is False
    assert data["mesa"]["status"] == "OCUPADA"
    assert data["mesa"]["responsavel_id"] == outro_cliente


def test_atualizar_mesa_limpa_responsavel_com_null(client, headers, admin, funcionario, mesa):
    resp = client.put(
        f"{BASE}/{mesa}",
        json={"status": "RESERVADA", "responsavel_id": funcionario},
        headers=headers(admin),
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["responsavel_id"] == funcionario

    resp = client.put(f"{BASE}/{mesa}", json={"responsavel_id": None}, headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "RESERVADA"
    assert resp.json()["responsavel_id"] is None

    resp = client.put(f"{BASE}/{mesa}", json={"capacidade": None}, headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["capacidade"] == 4
