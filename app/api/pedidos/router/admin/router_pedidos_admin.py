from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.pedidos.schemas.schema_pedido import (
    FinalizarPedidoMesaRequest,
    AtualizarPedidoRequest,
    AdicionarItensRequest,
    PagamentoRequest,
    AvaliacaoRequest,
    PedidoResponse,
    PedidoListResponse,
    ResumoPedidosResponse,
    PedidoHistoricoResponse,
)
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.core.admin_dependencies import get_current_user
from app.core.authorization import require_staff

router = APIRouter(
    prefix="/api/pedidos/admin/pedidos",
    tags=["Admin - Pedidos"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=PedidoListResponse)
def listar_pedidos(
    usuario_id: Optional[int] = Query(None),
    mesa_id: Optional[int] = Query(None),
    status_pedido: Optional[str] = Query(None, alias="status", description="Lista separada por vírgula"),
    pago: Optional[bool] = Query(None),
    data: Optional[date] = Query(None),
    data_inicio: Optional[date] = Query(None),
    data_fim: Optional[date] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at", pattern="^(created_at|total|status)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.listar(
        current_user,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        status_param=status_pedido,
        usuario_id=usuario_id,
        mesa_id=mesa_id,
        pago=pago,
        data=data,
        data_inicio=data_inicio,
        data_fim=data_fim,
    )


@router.get("/resumo", response_model=ResumoPedidosResponse)
def resumo_pedidos(
    mesa_id: Optional[int] = Query(None),
    data: Optional[date] = Query(None),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.resumo(current_user, mesa_id=mesa_id, data=data)


@router.post("/finalizar", response_model=PedidoResponse, status_code=status.HTTP_201_CREATED)
def finalizar_pedido_mesa(
    body: FinalizarPedidoMesaRequest,
    current_user: UsuarioModel = Depends(require_staff),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.finalizar_pedido_mesa(body, current_user)


@router.get("/{pedido_id}", response_model=PedidoResponse)
def buscar_pedido(
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.buscar(pedido_id, current_user)


@router.get("/{pedido_id}/historico", response_model=List[PedidoHistoricoResponse])
def historico_pedido(
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.historico(pedido_id, current_user)


@router.put("/{pedido_id}", response_model=PedidoResponse)
def atualizar_pedido(
    body: AtualizarPedidoRequest,
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.atualizar(pedido_id, body, current_user)


@router.post("/{pedido_id}/cancelar", response_model=PedidoResponse)
def cancelar_pedido(
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.cancelar(pedido_id, current_user)


@router.post("/{pedido_id}/itens", response_model=PedidoResponse)
def adicionar_itens(
    body: AdicionarItensRequest,
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.adicionar_itens(pedido_id, body, current_user)


@router.post("/{pedido_id}/receber", response_model=PedidoResponse)
def receber_pedido(
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(require_staff),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.receber(pedido_id, current_user)


@router.post("/{pedido_id}/pagamento", response_model=PedidoResponse)
def processar_pagamento(
    body: PagamentoRequest,
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(require_staff),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.processar_pagamento(pedido_id, body, current_user)


@router.post("/{pedido_id}/avaliacao", response_model=PedidoResponse)
def avaliar_pedido(
    body: AvaliacaoRequest,
    pedido_id: int = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.avaliar(pedido_id, body, current_user)
