def test_sem_header_retorna_401(client):
    resp = client.get("/api/cadastros/client/usuarios/me")
    assert resp.status_code == 401, resp.text


def test_header_invalido_ou_usuario_inexistente(client):
    assert client.get("/api/cadastros/client/usuarios/me", headers={"X-User-Id": "abc"}).status_code == 401
    assert client.get("/api/cadastros/client/usuarios/me", headers={"X-User-Id": "999"}).status_code == 401


def test_me_retorna_usuario_atual(client, headers, cliente):
    resp = client.get("/api/cadastros/client/usuarios/me", headers=headers(cliente))
    assert resp.status_code == 200, resp.text
    assert resp.json()["email"] == "maria@cliente.com"
    assert resp.json()["role"] == "CLIENTE"


def test_criar_usuario_exige_gestor(client, headers, funcionario):
    resp = client.post(
        "/api/cadastros/admin/usuarios",
        json={"nome": "Novo", "email": "novo@x.com"},
        headers=headers(funcionario),
    )
    assert resp.status_code == 403, resp.text


def test_criar_usuario_e_email_duplicado(client, headers, gerente):
    body = {"nome": "Carlos", "email": "Carlos@X.com", "role": "staff"}
    resp = client.post("/api/cadastros/admin/usuarios", json=body, headers=headers(gerente))
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["email"] == "carlos@x.com"
    assert data["role"] == "FUNCIONARIO"

    resp = client.post("/api/cadastros/admin/usuarios", json=body, headers=headers(gerente))
    assert resp.status_code == 400, resp.text


def test_criar_usuario_emite_notificacao(client, headers, admin):
    client.post(
        "/api/cadastros/admin/usuarios",
        json={"nome": "Ana", "email": "ana@x.com"},
        headers=headers(admin),
    )
    resp = client.get("/api/notifications", params={"tipo": "USUARIO"}, headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["total"] == 1
    assert "Ana" in resp.json()["notificacoes"][0]["mensagem"]


def test_listar_com_filtros(client, headers, admin, cliente, funcionario):
    resp = client.get("/api/cadastros/admin/usuarios", params={"role": "CLIENTE"}, headers=headers(admin))
    assert resp.status_code == 200, resp.text
    assert [u["id"] for u in resp.json()] == [cliente]

    resp = client.get("/api/cadastros/admin/usuarios", params={"search": "garç"}, headers=headers(admin))
    assert [u["id"] for u in resp.json()] == [funcionario]


def test_atualizar_rechecagem_de_email(client, headers, admin, cliente, outro_cliente):
    resp = client.put(
        f"/api/cadastros/admin/usuarios/{outro_cliente}",
        json={"email": "maria@cliente.com"},
        headers=headers(admin),
    )
    assert resp.status_code == 400, resp.text

    resp = client.put(
        f"/api/cadastros/admin/usuarios/{outro_cliente}",
        json={"nome": "João Silva"},
        headers=headers(admin),
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["nome"] == "João Silva"
    assert resp.json()["email"] == "joao@cliente.com"


def test_obter_usuario_inexistente(client, headers, admin):
    resp = client.get("/api/cadastros/admin/usuarios/999", headers=headers(admin))
    assert resp.status_code == 404, resp.text


def test_desativar_usuario_bloqueia_acesso(client, headers, admin, cliente):
    resp = client.delete(f"/api/cadastros/admin/usuarios/{cliente}", headers=headers(admin))
    assert resp.status_code == 204, resp.text

    resp = client.get(f"/api/cadastros/admin/usuarios/{cliente}", headers=headers(admin))
    assert resp.json()["ativo"] is False
    assert client.get("/api/cadastros/client/usuarios/me", headers=headers(cliente)).status_code == 401
