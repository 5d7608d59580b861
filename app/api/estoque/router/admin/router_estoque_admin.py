from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.estoque.models.model_movimento_estoque import TipoMovimento
from app.api.estoque.schemas.schema_estoque import (
    RegistrarMovimentoRequest,
    MovimentoEstoqueResponse,
    ProdutoEstoqueResponse,
    AlertasEstoqueResponse,
)
from app.api.estoque.services.service_estoque import EstoqueService
from app.core.authorization import require_gestor
from app.database.db_connection import get_db

router = APIRouter(
    prefix="/api/estoque/admin",
    tags=["Admin - Estoque"],
    dependencies=[Depends(require_gestor)],
)


@router.get("/produtos", response_model=List[ProdutoEstoqueResponse])
def listar_produtos_estoque(
    categoria_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    alerta: Optional[str] = Query(None, description="sem_estoque | estoque_baixo | normal"),
    db: Session = Depends(get_db),
):
    return EstoqueService(db).listar_produtos(categoria_id=categoria_id, search=search, alerta=alerta)


@router.get("/movimentos", response_model=List[MovimentoEstoqueResponse])
def listar_movimentos(
    produto_id: Optional[int] = Query(None),
    tipo: Optional[TipoMovimento] = Query(None),
    data_inicio: Optional[date] = Query(None),
    data_fim: Optional[date] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return EstoqueService(db).listar_movimentos(
        produto_id=produto_id,
        tipo=tipo,
        data_inicio=data_inicio,
        data_fim=data_fim,
        limit=limit,
    )


@router.post("/movimentos", response_model=MovimentoEstoqueResponse, status_code=status.HTTP_201_CREATED)
def registrar_movimento(
    body: RegistrarMovimentoRequest,
    current_user: UsuarioModel = Depends(require_gestor),
    db: Session = Depends(get_db),
):
    return EstoqueService(db).registrar_movimento(body, current_user)


@router.get("/alertas", response_model=AlertasEstoqueResponse)
def alertas_estoque(db: Session = Depends(get_db)):
    return EstoqueService(db).alertas()
