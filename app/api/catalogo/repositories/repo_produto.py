from typing import List, Optional, Iterable
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_produto import ProdutoModel


class ProdutoRepository:
    def __init__(self, db: Session):
        self.db = db

    def criar(self, **data) -> ProdutoModel:
        obj = ProdutoModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    def buscar_por_id(self, produto_id: int) -> Optional[ProdutoModel]:
        return self.db.query(ProdutoModel).filter_by(id=produto_id).first()

    def buscar_por_id_para_update(self, produto_id: int) -> Optional[ProdutoModel]:
        """Trava a linha do produto (FOR UPDATE onde o banco suportar)."""
        return (
            self.db.query(ProdutoModel)
            .filter_by(id=produto_id)
            .with_for_update()
            .first()
        )

    def buscar_por_ids(self, ids: Iterable[int]) -> List[ProdutoModel]:
        ids = list(set(ids))
        if not ids:
            return []
        return self.db.query(ProdutoModel).filter(ProdutoModel.id.in_(ids)).all()

    def buscar_por_nome(self, nome: str) -> Optional[ProdutoModel]:
        return (
            self.db.query(ProdutoModel)
            .filter(func.lower(ProdutoModel.nome) == nome.strip().lower())
            .first()
        )

    def listar(
        self,
        *,
        search: Optional[str] = None,
        categoria_id: Optional[int] = None,
        disponivel: Optional[bool] = None,
    ) -> List[ProdutoModel]:
        query = self.db.query(ProdutoModel)
        if search:
            termo = f"%{search.strip()}%"
            query = query.filter(or_(ProdutoModel.nome.ilike(termo), ProdutoModel.descricao.ilike(termo)))
        if categoria_id is not None:
            query = query.filter(ProdutoModel.categoria_id == categoria_id)
        if disponivel is not None:
            query = query.filter(ProdutoModel.disponivel == disponivel)
        return query.order_by(ProdutoModel.nome).all()

    def possui_itens_pedido(self, produto_id: int) -> bool:
        from app.api.pedidos.models.model_pedido_item import PedidoItemModel

        return (
            self.db.query(PedidoItemModel.id)
            .filter(PedidoItemModel.produto_id == produto_id)
            .first()
            is not None
        )

    def atualizar(self, produto: ProdutoModel, **data) -> ProdutoModel:
        for key, value in data.items():
            setattr(produto, key, value)
        self.db.flush()
        return produto

    def deletar(self, produto: ProdutoModel):
        self.db.delete(produto)
        self.db.flush()
