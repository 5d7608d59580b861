from typing import List, Optional
from fastapi import APIRouter, Depends, status, Path, Query
from sqlalchemy.orm import Session

from app.api.catalogo.schemas.schema_categoria import (
    CategoriaResponse,
    CriarCategoriaRequest,
    AtualizarCategoriaRequest,
)
from app.api.catalogo.services.service_categoria import CategoriaService
from app.core.admin_dependencies import get_current_user
from app.core.authorization import require_gestor
from app.database.db_connection import get_db
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/catalogo/admin/categorias",
    tags=["Admin - Catalogo - Categorias"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[CategoriaResponse])
def listar_categorias(
    ativo: Optional[bool] = Query(None, description="Filtra por categorias ativas/inativas"),
    db: Session = Depends(get_db),
):
    return CategoriaService(db).listar(ativo)


@router.get("/{categoria_id}", response_model=CategoriaResponse)
def buscar_categoria(categoria_id: int = Path(...), db: Session = Depends(get_db)):
    return CategoriaService(db).buscar_por_id(categoria_id)


@router.post(
    "",
    response_model=CategoriaResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_gestor)],
)
def criar_categoria(req: CriarCategoriaRequest, db: Session = Depends(get_db)):
    logger.info(f"[Categorias] Criar - nome={req.nome}")
    return CategoriaService(db).criar(req)


@router.put("/{categoria_id}", response_model=CategoriaResponse, dependencies=[Depends(require_gestor)])
def atualizar_categoria(
    req: AtualizarCategoriaRequest,
    categoria_id: int = Path(...),
    db: Session = Depends(get_db),
):
    logger.info(f"[Categorias] Atualizar - id={categoria_id}")
    return CategoriaService(db).atualizar(categoria_id, req)


@router.delete(
    "/{categoria_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_gestor)],
)
def deletar_categoria(categoria_id: int = Path(...), db: Session = Depends(get_db)):
    logger.info(f"[Categorias] Deletar - id={categoria_id}")
    CategoriaService(db).deletar(categoria_id)
