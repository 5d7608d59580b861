from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed

ESTOQUE_MAXIMO_PADRAO = 100


class ProdutoModel(Base):
    __tablename__ = "produtos"
    __table_args__ = (
        Index("idx_produto_categoria", "categoria_id"),
    )

    id = Column(Integer, primary_key=True)
    nome = Column(String(150), nullable=False, unique=True)
    descricao = Column(String(500), nullable=True)
    preco = Column(Numeric(10, 2), nullable=False)
    imagem_url = Column(String(500), nullable=True)
    categoria_id = Column(Integer, ForeignKey("categorias.id", ondelete="RESTRICT"), nullable=False)
    disponivel = Column(Boolean, nullable=False, default=True)
    tempo_preparo = Column(Integer, nullable=True)  # minutos
    alergenos = Column(JSON, nullable=False, default=list)

    # Estoque
    controla_estoque = Column(Boolean, nullable=False, default=False)
    estoque_atual = Column(Integer, nullable=False, default=0)
    estoque_minimo = Column(Integer, nullable=False, default=0)
    estoque_maximo = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    categoria = relationship("CategoriaModel", back_populates="produtos", lazy="joined")
    adicionais_vinculo = relationship(
        "ProdutoAdicionalModel",
        back_populates="produto",
        cascade="all, delete-orphan",
        lazy="select",
    )

    @property
    def alerta_estoque(self) -> str:
        """sem_estoque | estoque_baixo | excesso_estoque | normal"""
        atual = self.estoque_atual or 0
        if atual <= 0:
            return "sem_estoque"
        if atual <= (self.estoque_minimo or 0):
            return "estoque_baixo"
        if atual > (self.estoque_maximo or ESTOQUE_MAXIMO_PADRAO):
            return "excesso_estoque"
        return "normal"

    def __repr__(self):
        return f"<Produto(id={self.id}, nome='{self.nome}', preco={self.preco})>"
