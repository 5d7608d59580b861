from datetime import datetime
from typing import Optional, List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.api.estoque.models.model_movimento_estoque import MovimentoEstoqueModel, TipoMovimento


class EstoqueRepository:
    def __init__(self, db: Session):
        self.db = db

    def criar_movimento(self, **data) -> MovimentoEstoqueModel:
        movimento = MovimentoEstoqueModel(**data)
        self.db.add(movimento)
        self.db.flush()
        return movimento

    def listar_movimentos(
        self,
        *,
        produto_id: Optional[int] = None,
        tipo: Optional[TipoMovimento] = None,
        inicio: Optional[datetime] = None,
        fim: Optional[datetime] = None,
        limit: int = 50,
    ) -> List[MovimentoEstoqueModel]:
        query = self.db.query(MovimentoEstoqueModel)
        if produto_id is not None:
            query = query.filter(MovimentoEstoqueModel.produto_id == produto_id)
        if tipo is not None:
            query = query.filter(MovimentoEstoqueModel.tipo == tipo)
        if inicio is not None:
            query = query.filter(MovimentoEstoqueModel.created_at >= inicio)
        if fim is not None:
            query = query.filter(MovimentoEstoqueModel.created_at <= fim)
        return (
            query.order_by(desc(MovimentoEstoqueModel.created_at), desc(MovimentoEstoqueModel.id))
            .limit(limit)
            .all()
        )
