from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Iterable

from fastapi import HTTPException, status
from sqlalchemy import func, or_, and_, asc, desc
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import (
    PedidoModel,
    StatusPedido,
    STATUS_TERMINAIS,
    STATUS_EM_ABERTO,
)
from app.api.pedidos.models.model_pedido_item import PedidoItemModel
from app.api.pedidos.models.model_pedido_historico import PedidoHistoricoModel

# Pedidos nestes status impedem liberar a mesa manualmente
STATUS_BLOQUEIAM_LIBERACAO = (
    StatusPedido.CONFIRMADO,
    StatusPedido.PREPARANDO,
    StatusPedido.PRONTO,
)

SORT_COLUMNS = {
    "created_at": PedidoModel.created_at,
    "total": PedidoModel.total,
    "status": PedidoModel.status,
}


@dataclass
class PedidoFiltro:
    """Filtros de listagem já resolvidos (escopo de perfil aplicado pelo service)."""
    usuario_id: Optional[int] = None
    usuario_ids: Optional[List[int]] = None
    mesa_id: Optional[int] = None
    status: List[StatusPedido] = field(default_factory=list)
    pago: Optional[bool] = None
    inicio: Optional[datetime] = None
    fim: Optional[datetime] = None


def _filtro_ativo():
    """Pedido ativo: não terminal e não recebido."""
    return and_(
        PedidoModel.status.notin_(list(STATUS_TERMINAIS)),
        PedidoModel.recebido.is_(False),
    )


class PedidoRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------- Consultas -------------
    def get(self, pedido_id: int) -> Optional[PedidoModel]:
        return self.db.query(PedidoModel).filter(PedidoModel.id == pedido_id).first()

    def get_or_404(self, pedido_id: int) -> PedidoModel:
        pedido = self.get(pedido_id)
        if not pedido:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Pedido não encontrado")
        return pedido

    def list_ativos_by_mesa(self, mesa_id: int) -> List[PedidoModel]:
        """Pedidos que mantêm a mesa ocupada, do mais recente para o mais antigo."""
        return (
            self.db.query(PedidoModel)
            .filter(PedidoModel.mesa_id == mesa_id, _filtro_ativo())
            .order_by(desc(PedidoModel.created_at), desc(PedidoModel.id))
            .all()
        )

    def list_em_aberto_by_mesa(self, mesa_id: int) -> List[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .filter(
                PedidoModel.mesa_id == mesa_id,
                PedidoModel.status.in_(list(STATUS_EM_ABERTO)),
                PedidoModel.recebido.is_(False),
            )
            .order_by(desc(PedidoModel.created_at), desc(PedidoModel.id))
            .all()
        )

    def list_bloqueiam_liberacao(self, mesa_id: int) -> List[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .filter(
                PedidoModel.mesa_id == mesa_id,
                or_(
                    PedidoModel.status.in_(list(STATUS_BLOQUEIAM_LIBERACAO)),
                    and_(PedidoModel.status == StatusPedido.ENTREGUE, PedidoModel.pago.is_(False)),
                ),
            )
            .all()
        )

    def list_terminais_nao_pagos_by_mesa(self, mesa_id: int) -> List[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .filter(
                PedidoModel.mesa_id == mesa_id,
                PedidoModel.status.in_([StatusPedido.ENTREGUE, StatusPedido.FINALIZADO]),
                PedidoModel.pago.is_(False),
            )
            .order_by(desc(PedidoModel.created_at))
            .all()
        )

    def count_by_mesa(self, mesa_id: int) -> int:
        return (
            self.db.query(func.count(PedidoModel.id))
            .filter(PedidoModel.mesa_id == mesa_id)
            .scalar()
            or 0
        )

    def _aplicar_filtro(self, query, filtro: PedidoFiltro):
        if filtro.usuario_id is not None:
            query = query.filter(PedidoModel.usuario_id == filtro.usuario_id)
        if filtro.usuario_ids is not None:
            query = query.filter(
                or_(
                    PedidoModel.usuario_id.in_(filtro.usuario_ids),
                    PedidoModel.finalizado_por_id.in_(filtro.usuario_ids),
                )
            )
        if filtro.mesa_id is not None:
            query = query.filter(PedidoModel.mesa_id == filtro.mesa_id)
        if filtro.status:
            query = query.filter(PedidoModel.status.in_(filtro.status))
        if filtro.pago is not None:
            query = query.filter(PedidoModel.pago.is_(filtro.pago))
        if filtro.inicio is not None:
            query = query.filter(PedidoModel.created_at >= filtro.inicio)
        if filtro.fim is not None:
            query = query.filter(PedidoModel.created_at <= filtro.fim)
        return query

    def list_filtrado(
        self,
        filtro: PedidoFiltro,
        *,
        offset: int = 0,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> tuple[List[PedidoModel], int]:
        query = self._aplicar_filtro(self.db.query(PedidoModel), filtro)
        total = query.count()

        coluna = SORT_COLUMNS.get(sort_by, PedidoModel.created_at)
        ordem = asc if sort_order == "asc" else desc
        pedidos = (
            query.order_by(ordem(coluna), ordem(PedidoModel.id))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return pedidos, total

    def resumo(self, filtro: PedidoFiltro) -> tuple[int, Optional[datetime], Optional[datetime]]:
        query = self._aplicar_filtro(
            self.db.query(
                func.count(PedidoModel.id),
                func.min(PedidoModel.created_at),
                func.max(PedidoModel.created_at),
            ),
            filtro,
        )
        count, primeira, ultima = query.one()
        return count or 0, primeira, ultima

    # ------------- Escrita -------------
    def create(self, **data) -> PedidoModel:
        pedido = PedidoModel(**data)
        self.db.add(pedido)
        self.db.flush()
        return pedido

    def add_item(
        self,
        pedido: PedidoModel,
        *,
        produto_id: int,
        quantidade: int,
        preco_unitario: Decimal,
        adicionais_ids: Iterable[int] = (),
        observacao: Optional[str] = None,
    ) -> PedidoItemModel:
        item = PedidoItemModel(
            produto_id=produto_id,
            quantidade=quantidade,
            preco_unitario=preco_unitario,
            adicionais_ids=list(adicionais_ids),
            observacao=observacao,
        )
        pedido.itens.append(item)
        self.db.flush()
        return item

    def recalcular_total(self, pedido: PedidoModel) -> Decimal:
        total = sum(
            (Decimal(str(i.preco_unitario)) * i.quantidade for i in pedido.itens),
            Decimal("0"),
        )
        pedido.total = total.quantize(Decimal("0.01"))
        self.db.flush()
        return pedido.total

    def add_historico(
        self,
        pedido: PedidoModel,
        *,
        status_anterior: Optional[StatusPedido],
        status_novo: StatusPedido,
        usuario_id: Optional[int] = None,
        descricao: Optional[str] = None,
    ) -> PedidoHistoricoModel:
        historico = PedidoHistoricoModel(
            pedido_id=pedido.id,
            status_anterior=status_anterior.value if status_anterior else None,
            status_novo=status_novo.value,
            usuario_id=usuario_id,
            descricao=descricao,
        )
        self.db.add(historico)
        return historico

    def list_historico(self, pedido_id: int) -> List[PedidoHistoricoModel]:
        return (
            self.db.query(PedidoHistoricoModel)
            .filter(PedidoHistoricoModel.pedido_id == pedido_id)
            .order_by(PedidoHistoricoModel.id)
            .all()
        )
