from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, condecimal, field_validator, model_validator

from app.api.cadastros.schemas.schema_usuario import UserResumo
from app.api.pedidos.models.model_pedido import (
    StatusPedido,
    TipoEntrega,
    MetodoPagamento,
)


# ---------------- Requests ----------------
class ItemPedidoRequest(BaseModel):
    produto_id: int = Field(..., gt=0)
    quantidade: int = Field(1, description="Valores inválidos ou menores que 1 viram 1")
    adicionais: List[int] = Field(default_factory=list, description="IDs dos adicionais escolhidos")
    observacao: Optional[str] = Field(None, max_length=255)

    @field_validator("quantidade", mode="before")
    @classmethod
    def _sanitiza_quantidade(cls, v):
        try:
            quantidade = int(float(v))
        except (TypeError, ValueError):
            return 1
        return max(1, quantidade)


class CriarPedidoRequest(BaseModel):
    itens: List[ItemPedidoRequest] = Field(default_factory=list)
    mesa_id: Optional[int] = Field(None, gt=0)
    tipo_entrega: TipoEntrega = TipoEntrega.RETIRADA
    endereco_entrega: Optional[str] = Field(None, max_length=500)
    metodo_pagamento: Optional[MetodoPagamento] = None
    observacoes: Optional[str] = Field(None, max_length=1000)


class FinalizarPedidoMesaRequest(BaseModel):
    """Pedido de mesa registrado pela equipe"""
    mesa_id: int = Field(..., gt=0)
    itens: List[ItemPedidoRequest] = Field(default_factory=list)
    metodo_pagamento: Optional[MetodoPagamento] = None
    observacoes: Optional[str] = Field(None, max_length=1000)


class AtualizarPedidoRequest(BaseModel):
    status: Optional[StatusPedido] = None
    metodo_pagamento: Optional[MetodoPagamento] = None

    @model_validator(mode="after")
    def _algum_campo(self):
        if self.status is None and self.metodo_pagamento is None:
            raise ValueError("Informe status e/ou metodo_pagamento")
        return self


class AdicionarItensRequest(BaseModel):
    itens: List[ItemPedidoRequest] = Field(default_factory=list)


class PagamentoRequest(BaseModel):
    valor_pago: condecimal(gt=0, max_digits=10, decimal_places=2)
    metodo_pagamento: MetodoPagamento


class AvaliacaoRequest(BaseModel):
    nota: int = Field(..., ge=1, le=5)
    comentario: Optional[str] = Field(None, max_length=500)


# ---------------- Responses ----------------
class PedidoItemResponse(BaseModel):
    id: int
    produto_id: int
    produto_nome: Optional[str] = None
    quantidade: int
    preco_unitario: float
    subtotal: float
    adicionais_ids: List[int] = []
    observacao: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PedidoResponse(BaseModel):
    id: int
    usuario_id: int
    usuario: Optional[UserResumo] = None
    mesa_id: Optional[int] = None
    status: StatusPedido
    total: float
    tipo_entrega: TipoEntrega
    endereco_entrega: Optional[str] = None
    metodo_pagamento: Optional[MetodoPagamento] = None
    observacoes: Optional[str] = None
    pago: bool
    recebido: bool
    ativo: bool
    finalizado_por_id: Optional[int] = None
    avaliacao_nota: Optional[int] = None
    avaliacao_comentario: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    itens: List[PedidoItemResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PaginacaoResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PedidoListResponse(BaseModel):
    pedidos: List[PedidoResponse]
    paginacao: PaginacaoResponse


class ResumoPedidosResponse(BaseModel):
    total: int
    primeira_data: Optional[datetime] = None
    ultima_data: Optional[datetime] = None


class PedidoHistoricoResponse(BaseModel):
    id: int
    pedido_id: int
    status_anterior: Optional[str] = None
    status_novo: str
    usuario_id: Optional[int] = None
    descricao: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
