from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_categoria import CategoriaModel
from app.api.catalogo.models.model_produto import ProdutoModel


class CategoriaRepository:
    def __init__(self, db: Session):
        self.db = db

    def criar(self, **data) -> CategoriaModel:
        obj = CategoriaModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    def buscar_por_id(self, categoria_id: int) -> Optional[CategoriaModel]:
        return self.db.query(CategoriaModel).filter_by(id=categoria_id).first()

    def buscar_por_nome(self, nome: str) -> Optional[CategoriaModel]:
        return (
            self.db.query(CategoriaModel)
            .filter(func.lower(CategoriaModel.nome) == nome.strip().lower())
            .first()
        )

    def listar(self, ativo: Optional[bool] = None) -> List[CategoriaModel]:
        query = self.db.query(CategoriaModel)
        if ativo is not None:
            query = query.filter(CategoriaModel.ativo == ativo)
        return query.order_by(CategoriaModel.nome).all()

    def contar_produtos(self, categoria_id: int) -> int:
        return (
            self.db.query(func.count(ProdutoModel.id))
            .filter(ProdutoModel.categoria_id == categoria_id)
            .scalar()
            or 0
        )

    def atualizar(self, categoria: CategoriaModel, **data) -> CategoriaModel:
        for key, value in data.items():
            setattr(categoria, key, value)
        self.db.flush()
        return categoria

    def deletar(self, categoria: CategoriaModel):
        self.db.delete(categoria)
        self.db.flush()
