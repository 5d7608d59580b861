from typing import List, Optional
from fastapi import APIRouter, Depends, status, Path, Query
from sqlalchemy.orm import Session

from app.api.catalogo.schemas.schema_produtos import (
    ProdutoResponse,
    CriarProdutoRequest,
    AtualizarProdutoRequest,
)
from app.api.catalogo.schemas.schema_adicional import AdicionalProdutoResponse, VincularAdicionalRequest
from app.api.catalogo.services.service_produto import ProdutoService
from app.api.catalogo.services.service_adicional import AdicionalService
from app.core.admin_dependencies import get_current_user
from app.core.authorization import require_gestor
from app.database.db_connection import get_db
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/catalogo/admin/produtos",
    tags=["Admin - Catalogo - Produtos"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[ProdutoResponse])
def listar_produtos(
    search: Optional[str] = Query(None, description="Busca por nome ou descrição"),
    categoria_id: Optional[int] = Query(None),
    disponivel: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).listar(search=search, categoria_id=categoria_id, disponivel=disponivel)


@router.get("/{produto_id}", response_model=ProdutoResponse)
def buscar_produto(produto_id: int = Path(...), db: Session = Depends(get_db)):
    return ProdutoService(db).buscar_por_id(produto_id)


@router.post(
    "",
    response_model=ProdutoResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_gestor)],
)
def criar_produto(req: CriarProdutoRequest, db: Session = Depends(get_db)):
    logger.info(f"[Produtos] Criar - nome={req.nome} categoria={req.categoria_id}")
    return ProdutoService(db).criar(req)


@router.put("/{produto_id}", response_model=ProdutoResponse, dependencies=[Depends(require_gestor)])
def atualizar_produto(
    req: AtualizarProdutoRequest,
    produto_id: int = Path(...),
    db: Session = Depends(get_db),
):
    logger.info(f"[Produtos] Atualizar - id={produto_id}")
    return ProdutoService(db).atualizar(produto_id, req)


@router.delete(
    "/{produto_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_gestor)],
)
def deletar_produto(produto_id: int = Path(...), db: Session = Depends(get_db)):
    logger.info(f"[Produtos] Deletar - id={produto_id}")
    ProdutoService(db).deletar(produto_id)


# ------ Adicionais do produto ------
@router.get("/{produto_id}/adicionais", response_model=List[AdicionalProdutoResponse])
def listar_adicionais_produto(produto_id: int = Path(...), db: Session = Depends(get_db)):
    return AdicionalService(db).listar_adicionais_produto(produto_id)


@router.post(
    "/{produto_id}/adicionais",
    response_model=AdicionalProdutoResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_gestor)],
)
def vincular_adicional(
    req: VincularAdicionalRequest,
    produto_id: int = Path(...),
    db: Session = Depends(get_db),
):
    logger.info(f"[Produtos] Vincular adicional - produto={produto_id} adicional={req.adicional_id}")
    return AdicionalService(db).vincular_adicional_produto(produto_id, req)


@router.delete(
    "/{produto_id}/adicionais/{adicional_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_gestor)],
)
def desvincular_adicional(
    produto_id: int = Path(...),
    adicional_id: int = Path(...),
    db: Session = Depends(get_db),
):
    logger.info(f"[Produtos] Desvincular adicional - produto={produto_id} adicional={adicional_id}")
    AdicionalService(db).desvincular_adicional_produto(produto_id, adicional_id)
