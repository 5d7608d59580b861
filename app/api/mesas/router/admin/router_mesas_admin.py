from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.mesas.models.model_mesa import StatusMesa
from app.api.mesas.schemas.schema_mesa import (
    MesaIn,
    MesaUpdate,
    MesaOut,
    MesaHistoricoOut,
    MesaStatsOut,
    RecalculoStatusOut,
    VerificacaoStatusOut,
    LiberacaoForcadaOut,
    MesaEstadoCompletoOut,
)
from app.api.mesas.services.dependencies import get_mesa_service
from app.api.mesas.services.service_mesas import MesaService
from app.core.admin_dependencies import get_current_user
from app.core.authorization import require_gestor, require_staff
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/mesas/admin/mesas",
    tags=["Admin - Mesas"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[MesaOut])
def listar_mesas(
    status_mesa: Optional[StatusMesa] = Query(None, alias="status"),
    responsavel_id: Optional[int] = Query(None),
    svc: MesaService = Depends(get_mesa_service),
):
    return svc.listar(status=status_mesa, responsavel_id=responsavel_id)


@router.get("/stats", response_model=MesaStatsOut)
def stats_mesas(svc: MesaService = Depends(get_mesa_service)):
    return svc.stats()


@router.get("/{mesa_id}", response_model=MesaOut)
def buscar_mesa(mesa_id: int = Path(...), svc: MesaService = Depends(get_mesa_service)):
    return svc.buscar(mesa_id)


@router.post("", response_model=MesaOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_gestor)])
def criar_mesa(body: MesaIn, svc: MesaService = Depends(get_mesa_service)):
    logger.info(f"[Mesas] Criar - numero={body.numero}")
    return svc.criar(body)


@router.put("/{mesa_id}", response_model=MesaOut)
def atualizar_mesa(
    body: MesaUpdate,
    mesa_id: int = Path(...),
    current_user: UsuarioModel = Depends(require_gestor),
    svc: MesaService = Depends(get_mesa_service),
):
    return svc.atualizar(mesa_id, body, usuario_id=current_user.id)


@router.delete("/{mesa_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_gestor)])
def deletar_mesa(mesa_id: int = Path(...), svc: MesaService = Depends(get_mesa_service)):
    logger.info(f"[Mesas] Deletar - id={mesa_id}")
    svc.deletar(mesa_id)


@router.get("/{mesa_id}/historico", response_model=List[MesaHistoricoOut])
def historico_mesa(mesa_id: int = Path(...), svc: MesaService = Depends(get_mesa_service)):
    return svc.historico(mesa_id)


# -------- Ciclo de vida --------
@router.get("/{mesa_id}/status", response_model=VerificacaoStatusOut)
def verificar_status(mesa_id: int = Path(...), svc: MesaService = Depends(get_mesa_service)):
    return svc.verificar_status(mesa_id)


@router.post("/{mesa_id}/recalcular-status", response_model=RecalculoStatusOut)
def recalcular_status(
    mesa_id: int = Path(...),
    current_user: UsuarioModel = Depends(require_staff),
    svc: MesaService = Depends(get_mesa_service),
):
    return svc.recalcular_status(mesa_id, usuario_id=current_user.id)


@router.post("/{mesa_id}/liberar", response_model=MesaOut)
def liberar_mesa(
    mesa_id: int = Path(...),
    current_user: UsuarioModel = Depends(require_staff),
    svc: MesaService = Depends(get_mesa_service),
):
    return svc.liberar(mesa_id, current_user)


@router.post("/{mesa_id}/forcar-liberacao", response_model=LiberacaoForcadaOut)
def forcar_liberacao(
    mesa_id: int = Path(...),
    current_user: UsuarioModel = Depends(require_gestor),
    svc: MesaService = Depends(get_mesa_service),
):
    return svc.forcar_liberacao(mesa_id, current_user)


@router.post("/{mesa_id}/selecionar", response_model=MesaOut)
def selecionar_mesa(
    mesa_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: MesaService = Depends(get_mesa_service),
):
    return svc.selecionar(mesa_id, current_user)


@router.get("/{mesa_id}/estado", response_model=MesaEstadoCompletoOut)
def estado_completo(mesa_id: int = Path(...), svc: MesaService = Depends(get_mesa_service)):
    return svc.estado_completo(mesa_id)
