BASE = "/api/configuracoes/admin"


def _salvar(client, headers, user_id, chave, valor, categoria="geral"):
    resp = client.post(
        BASE,
        json={"chave": chave, "valor": valor, "categoria": categoria},
        headers=headers(user_id),
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_configuracoes_exigem_gestor(client, headers, funcionario):
    assert client.get(BASE, headers=headers(funcionario)).status_code == 403
    resp = client.post(BASE, json={"chave": "x", "valor": 1}, headers=headers(funcionario))
    assert resp.status_code == 403, resp.text


def test_salvar_e_listar_agrupadas(client, headers, admin):
    data = _salvar(client, headers, admin, "deliveryFee", 7.5, categoria="entrega")
    assert data["valor"] == 7.5

    _salvar(client, headers, admin, "restaurantName", "Lanchonete da Praça")
    atualizado = _salvar(client, headers, admin, "deliveryFee", 8.0, categoria="entrega")
    assert atualizado["id"] == data["id"]

    resp = client.get(BASE, headers=headers(admin))
    assert resp.status_code == 200, resp.text
    agrupadas = resp.json()
    assert set(agrupadas) == {"entrega", "geral"}
    assert agrupadas["entrega"]["deliveryFee"]["valor"] == 8.0
    assert agrupadas["geral"]["restaurantName"]["valor"] == "Lanchonete da Praça"

    resp = client.get(BASE, params={"categoria": "entrega"}, headers=headers(admin))
    assert list(resp.json()) == ["entrega"]


def test_salvar_em_lote(client, headers, gerente):
    resp = client.put(BASE, json={"configuracoes": []}, headers=headers(gerente))
    assert resp.status_code == 422, resp.text

    resp = client.put(
        BASE,
        json={
            "configuracoes": [
                {"chave": "minOrderValue", "valor": 20},
                {"chave": "paymentMethods", "valor": ["PIX"]},
            ]
        },
        headers=headers(gerente),
    )
    assert resp.status_code == 200, resp.text
    assert [c["chave"] for c in resp.json()] == ["minOrderValue", "paymentMethods"]


def test_deletar_configuracao(client, headers, admin):
    _salvar(client, headers, admin, "deliveryEnabled", False)

    resp = client.delete(f"{BASE}/deliveryEnabled", headers=headers(admin))
    assert resp.status_code == 204, resp.text
    resp = client.delete(f"{BASE}/deliveryEnabled", headers=headers(admin))
    assert resp.status_code == 404, resp.text


def test_publicas_usam_padroes(client):
    resp = client.get("/api/configuracoes/public")
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["restaurantName"] == "Lanchonete Next"
    assert data["deliveryFee"] == 5.0
    assert data["paymentMethods"] == ["DINHEIRO", "CARTAO", "PIX"]


def test_publicas_sobrescrevem_somente_chaves_conhecidas(client, headers, admin):
    _salvar(client, headers, admin, "deliveryFee", 9.9)
    _salvar(client, headers, admin, "segredoInterno", "nao-expor")

    data = client.get("/api/configuracoes/public").json()
    assert data["deliveryFee"] == 9.9
    assert "segredoInterno" not in data
