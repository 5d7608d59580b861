# app/api/pedidos/models/model_pedido.py
import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Numeric, Boolean, Text, Index
)
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.database.types import EnumValueType
from app.utils.database_utils import now_trimmed


class StatusPedido(str, enum.Enum):
    """Status de um pedido, movidos manualmente pela equipe."""
    PENDENTE = "PENDENTE"
    CONFIRMADO = "CONFIRMADO"
    PREPARANDO = "PREPARANDO"
    PRONTO = "PRONTO"
    ENTREGUE = "ENTREGUE"
    CANCELADO = "CANCELADO"
    FINALIZADO = "FINALIZADO"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).upper().strip()
        if normalized in cls.__members__:
            return cls[normalized]
        alias_map = {
            "P": cls.PENDENTE,
            "R": cls.PREPARANDO,
            "E": cls.ENTREGUE,
            "C": cls.CANCELADO,
            "EM_PREPARO": cls.PREPARANDO,
            "CONCLUIDO": cls.FINALIZADO,
        }
        return alias_map.get(normalized)


# Status que encerram o ciclo do pedido (não ocupam mais a mesa)
STATUS_TERMINAIS = frozenset({StatusPedido.CANCELADO, StatusPedido.ENTREGUE, StatusPedido.FINALIZADO})

# Pedidos "em andamento" na cozinha/salão
STATUS_EM_ABERTO = frozenset({
    StatusPedido.PENDENTE,
    StatusPedido.CONFIRMADO,
    StatusPedido.PREPARANDO,
    StatusPedido.PRONTO,
})


class TipoEntrega(str, enum.Enum):
    RETIRADA = "RETIRADA"
    DELIVERY = "DELIVERY"
    MESA = "MESA"


class MetodoPagamento(str, enum.Enum):
    DINHEIRO = "DINHEIRO"
    CARTAO = "CARTAO"
    CARTAO_CREDITO = "CARTAO_CREDITO"
    CARTAO_DEBITO = "CARTAO_DEBITO"
    PIX = "PIX"
    DIVIDIDO = "DIVIDIDO"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).upper().strip().replace(" ", "_")
        if normalized in cls.__members__:
            return cls[normalized]
        alias_map = {
            "CREDITO": cls.CARTAO_CREDITO,
            "DEBITO": cls.CARTAO_DEBITO,
            "CASH": cls.DINHEIRO,
        }
        return alias_map.get(normalized)


class PedidoModel(Base):
    __tablename__ = "pedidos"
    __table_args__ = (
        Index("idx_pedidos_mesa_status", "mesa_id", "status"),
        Index("idx_pedidos_usuario", "usuario_id"),
        Index("idx_pedidos_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="RESTRICT"), nullable=False)
    usuario = relationship("UsuarioModel", foreign_keys=[usuario_id], lazy="joined")

    mesa_id = Column(Integer, ForeignKey("mesas.id", ondelete="SET NULL"), nullable=True)
    mesa = relationship("MesaModel", lazy="select")

    status = Column(EnumValueType(StatusPedido), nullable=False, default=StatusPedido.PENDENTE)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    tipo_entrega = Column(EnumValueType(TipoEntrega), nullable=False, default=TipoEntrega.RETIRADA)
    endereco_entrega = Column(String(500), nullable=True)
    metodo_pagamento = Column(EnumValueType(MetodoPagamento), nullable=True)
    observacoes = Column(Text, nullable=True)

    pago = Column(Boolean, nullable=False, default=False)
    recebido = Column(Boolean, nullable=False, default=False)
    ativo = Column(Boolean, nullable=False, default=True)

    finalizado_por_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True)
    finalizado_por = relationship("UsuarioModel", foreign_keys=[finalizado_por_id], lazy="select")

    avaliacao_nota = Column(Integer, nullable=True)
    avaliacao_comentario = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    itens = relationship(
        "PedidoItemModel",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoItemModel.id",
        lazy="selectin",
    )
    historico = relationship(
        "PedidoHistoricoModel",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoHistoricoModel.id",
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in STATUS_TERMINAIS

    def __repr__(self):
        return f"<Pedido id={self.id} status={self.status} mesa={self.mesa_id} total={self.total}>"
