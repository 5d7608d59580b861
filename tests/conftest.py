import os
import tempfile

# Precisa estar definido antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUNNING_IN_DOCKER"] = "1"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="lanchonete-logs-"))
os.environ.pop("GOOGLE_MAPS_API_KEY", None)

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database.db_connection import Base, engine, SessionLocal
from app.api.cadastros.models.model_usuario import UsuarioModel, UserRole
from app.api.catalogo.models.model_categoria import CategoriaModel
from app.api.catalogo.models.model_produto import ProdutoModel
from app.api.catalogo.models.model_adicional import AdicionalModel
from app.api.mesas.models.model_mesa import MesaModel, StatusMesa


def _persistir(obj) -> int:
    db = SessionLocal()
    try:
        db.add(obj)
        db.commit()
        return obj.id
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal(expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def headers():
    def _headers(user_id: int) -> dict:
        return {"X-User-Id": str(user_id)}
    return _headers


# ---------------- Usuários ----------------
@pytest.fixture
def admin():
    return _persistir(UsuarioModel(nome="Admin", email="admin@lanchonete.com", role=UserRole.ADMINISTRADOR))


@pytest.fixture
def gerente():
    return _persistir(UsuarioModel(nome="Gerente", email="gerente@lanchonete.com", role=UserRole.GERENTE))


@pytest.fixture
def funcionario():
    return _persistir(UsuarioModel(nome="Garçom", email="garcom@lanchonete.com", role=UserRole.FUNCIONARIO))


@pytest.fixture
def cliente():
    return _persistir(UsuarioModel(nome="Maria", email="maria@cliente.com", role=UserRole.CLIENTE))


@pytest.fixture
def outro_cliente():
    return _persistir(UsuarioModel(nome="João", email="joao@cliente.com", role=UserRole.CLIENTE))


# ---------------- Catálogo ----------------
@pytest.fixture
def categoria():
    return _persistir(CategoriaModel(nome="Lanches", cor="#FF8800"))


@pytest.fixture
def produto(categoria):
    return _persistir(
        ProdutoModel(nome="X-Burger", preco=Decimal("20.00"), categoria_id=categoria, alergenos=["gluten"])
    )


@pytest.fixture
def produto_indisponivel(categoria):
    return _persistir(
        ProdutoModel(nome="X-Tudo", preco=Decimal("30.00"), categoria_id=categoria, disponivel=False)
    )


@pytest.fixture
def adicional():
    return _persistir(AdicionalModel(nome="Bacon", preco=Decimal("4.50")))


# ---------------- Mesas ----------------
@pytest.fixture
def mesa():
    return _persistir(MesaModel(numero=1, capacidade=4, status=StatusMesa.LIVRE))


@pytest.fixture
def criar_pedido(client, headers, produto):
    """Cria um pedido pelo endpoint do cliente e devolve o JSON."""
    def _criar(user_id: int, mesa_id=None, quantidade=1, **extra):
        body = {"itens": [{"produto_id": produto, "quantidade": quantidade}], **extra}
        if mesa_id is not None:
            body["mesa_id"] = mesa_id
        resp = client.post("/api/pedidos/client/pedidos", json=body, headers=headers(user_id))
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _criar
