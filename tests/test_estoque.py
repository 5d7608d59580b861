BASE = "/api/estoque/admin"


def _movimento(client, headers, user_id, produto_id, tipo, quantidade, motivo="Conferência"):
    return client.post(
        f"{BASE}/movimentos",
        json={"produto_id": produto_id, "tipo": tipo, "quantidade": quantidade, "motivo": motivo},
        headers=headers(user_id),
    )


def test_estoque_exige_gestor(client, headers, funcionario, produto):
    resp = _movimento(client, headers, funcionario, produto, "ENTRADA", 10)
    assert resp.status_code == 403, resp.text
    assert client.get(f"{BASE}/produtos", headers=headers(funcionario)).status_code == 403


def test_entrada_saida_e_ajuste(client, headers, gerente, produto):
    resp = _movimento(client, headers, gerente, produto, "ENTRADA", 10, motivo="Compra")
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert (data["estoque_anterior"], data["estoque_novo"], data["quantidade"]) == (0, 10, 10)
    assert data["produto_nome"] == "X-Burger"

    resp = _movimento(client, headers, gerente, produto, "SAIDA", 15)
    data = resp.json()
    assert (data["estoque_anterior"], data["estoque_novo"], data["quantidade"]) == (10, 0, 15)

    resp = _movimento(client, headers, gerente, produto, "AJUSTE", 7)
    data = resp.json()
    assert (data["estoque_anterior"], data["estoque_novo"], data["quantidade"]) == (0, 7, 7)

    resp = _movimento(client, headers, gerente, produto, "AJUSTE", 4)
    assert resp.json()["quantidade"] == -3

    produto_data = client.get(f"/api/catalogo/admin/produtos/{produto}", headers=headers(gerente)).json()
    assert produto_data["estoque_atual"] == 4
    assert produto_data["controla_estoque"] is True


def test_quantidade_zero_so_em_ajuste(client, headers, gerente, produto):
    assert _movimento(client, headers, gerente, produto, "ENTRADA", 0).status_code == 400
    assert _movimento(client, headers, gerente, produto, "AJUSTE", 0).status_code == 201


def test_motivo_obrigatorio_e_produto_inexistente(client, headers, gerente, produto):
    assert _movimento(client, headers, gerente, produto, "ENTRADA", 5, motivo="  ").status_code == 422
    assert _movimento(client, headers, gerente, 999, "ENTRADA", 5).status_code == 404


def test_saida_que_zera_estoque_notifica(client, headers, gerente, produto):
    _movimento(client, headers, gerente, produto, "ENTRADA", 2)
    _movimento(client, headers, gerente, produto, "SAIDA", 2)

    resp = client.get("/api/notifications", params={"tipo": "ESTOQUE"}, headers=headers(gerente))
    notificacoes = resp.json()["notificacoes"]
    assert len(notificacoes) == 1
    assert notificacoes[0]["prioridade"] == "urgent"


def test_listar_movimentos_mais_recentes_primeiro(client, headers, gerente, produto):
    _movimento(client, headers, gerente, produto, "ENTRADA", 5)
    _movimento(client, headers, gerente, produto, "SAIDA", 1)

    resp = client.get(f"{BASE}/movimentos", params={"produto_id": produto}, headers=headers(gerente))
    assert resp.status_code == 200, resp.text
    assert [m["tipo"] for m in resp.json()] == ["SAIDA", "ENTRADA"]

    resp = client.get(f"{BASE}/movimentos", params={"tipo": "ENTRADA"}, headers=headers(gerente))
    assert len(resp.json()) == 1


def test_listar_produtos_por_alerta(client, headers, gerente, produto, categoria):
    resp = client.post(
        "/api/catalogo/admin/produtos",
        json={"nome": "Refrigerante", "preco": "6.00", "categoria_id": categoria, "estoque_minimo": 5},
        headers=headers(gerente),
    )
    refri = resp.json()["id"]
    _movimento(client, headers, gerente, refri, "ENTRADA", 3)
    _movimento(client, headers, gerente, produto, "ENTRADA", 50)

    resp = client.get(f"{BASE}/produtos", params={"alerta": "estoque_baixo"}, headers=headers(gerente))
    assert [p["id"] for p in resp.json()] == [refri]

    resp = client.get(f"{BASE}/produtos", params={"alerta": "normal"}, headers=headers(gerente))
    assert [p["id"] for p in resp.json()] == [produto]

    resp = client.get(f"{BASE}/produtos", params={"alerta": "qualquer"}, headers=headers(gerente))
    assert resp.status_code == 400, resp.text


def test_alertas(client, headers, admin, produto, produto_indisponivel):
    _movimento(client, headers, admin, produto, "AJUSTE", 150)
    _movimento(client, headers, admin, produto_indisponivel, "AJUSTE", 0)

    resp = client.get(f"{BASE}/alertas", headers=headers(admin))
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert [p["id"] for p in data["excesso_estoque"]] == [produto]
    assert [p["id"] for p in data["sem_estoque"]] == [produto_indisponivel]
    assert data["total_alertas"] == 2
