from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class CategoriaModel(Base):
    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True)
    nome = Column(String(100), nullable=False, unique=True)
    descricao = Column(String(255), nullable=True)
    imagem_url = Column(String(500), nullable=True)
    cor = Column(String(7), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    produtos = relationship("ProdutoModel", back_populates="categoria", lazy="select")

    def __repr__(self):
        return f"<Categoria(id={self.id}, nome='{self.nome}')>"
