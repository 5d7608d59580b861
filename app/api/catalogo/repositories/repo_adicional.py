from typing import List, Optional, Iterable
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_adicional import AdicionalModel, ProdutoAdicionalModel


class AdicionalRepository:
    """Repository para operações CRUD de adicionais."""

    def __init__(self, db: Session):
        self.db = db

    def criar_adicional(self, **data) -> AdicionalModel:
        obj = AdicionalModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    def buscar_por_id(self, adicional_id: int) -> Optional[AdicionalModel]:
        return self.db.query(AdicionalModel).filter_by(id=adicional_id).first()

    def buscar_por_ids(self, ids: Iterable[int]) -> List[AdicionalModel]:
        ids = list(set(ids))
        if not ids:
            return []
        return self.db.query(AdicionalModel).filter(AdicionalModel.id.in_(ids)).all()

    def listar(self, disponivel: Optional[bool] = None) -> List[AdicionalModel]:
        query = self.db.query(AdicionalModel)
        if disponivel is not None:
            query = query.filter_by(disponivel=disponivel)
        return query.order_by(AdicionalModel.nome).all()

    def atualizar_adicional(self, adicional: AdicionalModel, **data) -> AdicionalModel:
        for key, value in data.items():
            setattr(adicional, key, value)
        self.db.flush()
        return adicional

    def deletar_adicional(self, adicional: AdicionalModel):
        self.db.delete(adicional)
        self.db.flush()

    # -------- Vínculos com produtos --------
    def listar_vinculos_produto(self, produto_id: int) -> List[ProdutoAdicionalModel]:
        return (
            self.db.query(ProdutoAdicionalModel)
            .filter_by(produto_id=produto_id)
            .order_by(ProdutoAdicionalModel.id)
            .all()
        )

    def buscar_vinculo(self, produto_id: int, adicional_id: int) -> Optional[ProdutoAdicionalModel]:
        return (
            self.db.query(ProdutoAdicionalModel)
            .filter_by(produto_id=produto_id, adicional_id=adicional_id)
            .first()
        )

    def vincular(self, produto_id: int, adicional_id: int, obrigatorio: bool = False) -> ProdutoAdicionalModel:
        vinculo = ProdutoAdicionalModel(produto_id=produto_id, adicional_id=adicional_id, obrigatorio=obrigatorio)
        self.db.add(vinculo)
        self.db.flush()
        return vinculo

    def desvincular(self, vinculo: ProdutoAdicionalModel):
        self.db.delete(vinculo)
        self.db.flush()
