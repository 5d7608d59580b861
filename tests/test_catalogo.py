def test_criar_categoria_valida_cor_e_nome(client, headers, gerente):
    resp = client.post(
        "/api/catalogo/admin/categorias",
        json={"nome": "Bebidas", "cor": "laranja"},
        headers=headers(gerente),
    )
    assert resp.status_code == 422, resp.text

    resp = client.post(
        "/api/catalogo/admin/categorias",
        json={"nome": "Bebidas", "cor": "#00AAFF"},
        headers=headers(gerente),
    )
    assert resp.status_code == 201, resp.text

    resp = client.post("/api/catalogo/admin/categorias", json={"nome": "bebidas"}, headers=headers(gerente))
    assert resp.status_code == 400, resp.text


def test_escrita_no_catalogo_exige_gestor(client, headers, cliente, categoria):
    resp = client.post("/api/catalogo/admin/categorias", json={"nome": "Doces"}, headers=headers(cliente))
    assert resp.status_code == 403, resp.text

    resp = client.get("/api/catalogo/admin/categorias", headers=headers(cliente))
    assert resp.status_code == 200, resp.text


def test_deletar_categoria_com_produtos_bloqueado(client, headers, admin, categoria, produto):
    resp = client.delete(f"/api/catalogo/admin/categorias/{categoria}", headers=headers(admin))
    assert resp.status_code == 400, resp.text


def test_criar_produto_em_categoria_inexistente(client, headers, admin):
    resp = client.post(
        "/api/catalogo/admin/produtos",
        json={"nome": "Suco", "preco": "8.00", "categoria_id": 999},
        headers=headers(admin),
    )
    assert resp.status_code == 400, resp.text


def test_criar_produto_preco_deve_ser_positivo(client, headers, admin, categoria):
    resp = client.post(
        "/api/catalogo/admin/produtos",
        json={"nome": "Suco", "preco": "0", "categoria_id": categoria},
        headers=headers(admin),
    )
    assert resp.status_code == 422, resp.text


def test_crud_produto(client, headers, admin, categoria):
    resp = client.post(
        "/api/catalogo/admin/produtos",
        json={
            "nome": "Suco de Laranja",
            "preco": "8.50",
            "categoria_id": categoria,
            "alergenos": ["citricos"],
            "tempo_preparo": 5,
        },
        headers=headers(admin),
    )
    assert resp.status_code == 201, resp.text
    produto = resp.json()
    assert produto["preco"] == 8.5
    assert produto["categoria"]["nome"] == "Lanches"

    resp = client.get("/api/catalogo/admin/produtos", params={"search": "laranja"}, headers=headers(admin))
    assert [p["id"] for p in resp.json()] == [produto["id"]]

    resp = client.put(
        f"/api/catalogo/admin/produtos/{produto['id']}",
        json={"disponivel": False},
        headers=headers(admin),
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["disponivel"] is False

    resp = client.delete(f"/api/catalogo/admin/produtos/{produto['id']}", headers=headers(admin))
    assert resp.status_code == 204, resp.text
    assert client.get(f"/api/catalogo/admin/produtos/{produto['id']}", headers=headers(admin)).status_code == 404


def test_deletar_produto_usado_em_pedido_bloqueado(client, headers, admin, cliente, produto, criar_pedido):
    criar_pedido(cliente)
    resp = client.delete(f"/api/catalogo/admin/produtos/{produto}", headers=headers(admin))
    assert resp.status_code == 400, resp.text


def test_vinculo_produto_adicional(client, headers, admin, produto, adicional):
    url = f"/api/catalogo/admin/produtos/{produto}/adicionais"
    resp = client.post(url, json={"adicional_id": adicional, "obrigatorio": True}, headers=headers(admin))
    assert resp.status_code == 201, resp.text
    assert resp.json()["obrigatorio"] is True
    assert resp.json()["preco"] == 4.5

    resp = client.post(url, json={"adicional_id": adicional}, headers=headers(admin))
    assert resp.status_code == 409, resp.text

    resp = client.get(url, headers=headers(admin))
    assert [a["nome"] for a in resp.json()] == ["Bacon"]

    resp = client.delete(f"{url}/{adicional}", headers=headers(admin))
    assert resp.status_code == 204, resp.text
    resp = client.delete(f"{url}/{adicional}", headers=headers(admin))
    assert resp.status_code == 404, resp.text


def test_vinculo_com_adicional_inexistente(client, headers, admin, produto):
    resp = client.post(
        f"/api/catalogo/admin/produtos/{produto}/adicionais",
        json={"adicional_id": 999},
        headers=headers(admin),
    )
    assert resp.status_code == 404, resp.text


def test_listar_adicionais_disponiveis(client, headers, admin, adicional):
    client.post(
        "/api/catalogo/admin/adicionais",
        json={"nome": "Cheddar", "preco": "3.00", "disponivel": False},
        headers=headers(admin),
    )
    resp = client.get("/api/catalogo/admin/adicionais", params={"disponivel": True}, headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert [a["nome"] for a in resp.json()] == ["Bacon"]


def test_cardapio_publico(client, produto, produto_indisponivel):
    resp = client.get("/api/catalogo/public/cardapio")
    assert resp.status_code == 200, resp.text
    cardapio = resp.json()
    assert len(cardapio) == 1
    assert cardapio[0]["nome"] == "Lanches"
    assert [p["nome"] for p in cardapio[0]["produtos"]] == ["X-Burger"]
