from typing import List, Optional
from fastapi import APIRouter, Depends, status, Path, Query
from sqlalchemy.orm import Session

from app.api.catalogo.schemas.schema_adicional import (
    AdicionalResponse,
    CriarAdicionalRequest,
    AtualizarAdicionalRequest,
)
from app.api.catalogo.services.service_adicional import AdicionalService
from app.core.admin_dependencies import get_current_user
from app.core.authorization import require_gestor
from app.database.db_connection import get_db
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/catalogo/admin/adicionais",
    tags=["Admin - Catalogo - Adicionais"],
    dependencies=[Depends(get_current_user)]
)


@router.post(
    "",
    response_model=AdicionalResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_gestor)],
)
def criar_adicional(req: CriarAdicionalRequest, db: Session = Depends(get_db)):
    logger.info(f"[Adicionais] Criar - nome={req.nome}")
    return AdicionalService(db).criar_adicional(req)


@router.get("", response_model=List[AdicionalResponse])
def listar_adicionais(
    disponivel: Optional[bool] = Query(None, description="Apenas adicionais disponíveis"),
    db: Session = Depends(get_db),
):
    return AdicionalService(db).listar_adicionais(disponivel)


@router.get("/{adicional_id}", response_model=AdicionalResponse)
def buscar_adicional(
    adicional_id: int = Path(..., description="ID do adicional"),
    db: Session = Depends(get_db),
):
    return AdicionalService(db).buscar_por_id(adicional_id)


@router.put("/{adicional_id}", response_model=AdicionalResponse, dependencies=[Depends(require_gestor)])
def atualizar_adicional(
    req: AtualizarAdicionalRequest,
    adicional_id: int = Path(..., description="ID do adicional"),
    db: Session = Depends(get_db),
):
    logger.info(f"[Adicionais] Atualizar - id={adicional_id}")
    return AdicionalService(db).atualizar_adicional(adicional_id, req)


@router.delete(
    "/{adicional_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_gestor)],
)
def deletar_adicional(
    adicional_id: int = Path(..., description="ID do adicional"),
    db: Session = Depends(get_db),
):
    logger.info(f"[Adicionais] Deletar - id={adicional_id}")
    AdicionalService(db).deletar_adicional(adicional_id)
