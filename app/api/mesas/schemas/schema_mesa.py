from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field

from app.api.mesas.models.model_mesa import StatusMesa
from app.api.pedidos.models.model_pedido import StatusPedido
from app.api.cadastros.schemas.schema_usuario import UserResumo


class MesaIn(BaseModel):
    """Schema para criação de mesa"""
    numero: int = Field(..., ge=1, description="Número da mesa")
    capacidade: int = Field(default=4, ge=1, le=50)
    status: StatusMesa = StatusMesa.LIVRE
    responsavel_id: Optional[int] = Field(None, gt=0)


class MesaUpdate(BaseModel):
    """Schema para atualização de mesa"""
    numero: Optional[int] = Field(None, ge=1)
    capacidade: Optional[int] = Field(None, ge=1, le=50)
    status: Optional[StatusMesa] = None
    responsavel_id: Optional[int] = Field(None, gt=0)


class MesaOut(BaseModel):
    id: int
    numero: int
    capacidade: int
    status: StatusMesa
    status_descricao: str
    label: str
    is_ocupada: bool
    is_livre: bool
    responsavel_id: Optional[int] = None
    responsavel: Optional[UserResumo] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MesaHistoricoOut(BaseModel):
    id: int
    mesa_id: int
    status_anterior: Optional[str] = None
    status_novo: str
    responsavel_id: Optional[int] = None
    usuario_id: Optional[int] = None
    motivo: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MesaStatsOut(BaseModel):
    total: int
    livre: int
    ocupada: int
    reservada: int
    manutencao: int


class PedidoMesaResumo(BaseModel):
    """Visão enxuta de um pedido vinculado à mesa"""
    id: int
    usuario_id: int
    status: StatusPedido
    total: float
    pago: bool
    recebido: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecalculoStatusOut(BaseModel):
    mesa: MesaOut
    pedidos_ativos: int
    status_alterado: bool


class VerificacaoStatusOut(BaseModel):
    mesa: MesaOut
    pedidos_ativos: int
    deveria_estar_ocupada: bool
    status_consistente: bool


class LiberacaoForcadaOut(BaseModel):
    mesa: MesaOut
    pedidos_cancelados: List[int]


class MesaEstadoCompletoOut(BaseModel):
    mesa: MesaOut
    pedidos_ativos: List[PedidoMesaResumo]
    pedidos_pendentes_pagamento: List[PedidoMesaResumo]
