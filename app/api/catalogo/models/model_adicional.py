from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class AdicionalModel(Base):
    """Item extra que pode ser somado a um produto (ex: bacon, queijo extra)"""
    __tablename__ = "adicionais"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(100), nullable=False)
    descricao = Column(String(255), nullable=True)
    preco = Column(Numeric(10, 2), nullable=False, default=0)
    max_quantidade = Column(Integer, nullable=False, default=1)
    disponivel = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    produtos_vinculo = relationship(
        "ProdutoAdicionalModel",
        back_populates="adicional",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Adicional(id={self.id}, nome='{self.nome}')>"


class ProdutoAdicionalModel(Base):
    """Vínculo produto x adicional"""
    __tablename__ = "produto_adicionais"
    __table_args__ = (
        UniqueConstraint("produto_id", "adicional_id", name="uq_produto_adicional"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    produto_id = Column(Integer, ForeignKey("produtos.id", ondelete="CASCADE"), nullable=False, index=True)
    adicional_id = Column(Integer, ForeignKey("adicionais.id", ondelete="CASCADE"), nullable=False, index=True)
    obrigatorio = Column(Boolean, nullable=False, default=False)

    produto = relationship("ProdutoModel", back_populates="adicionais_vinculo")
    adicional = relationship("AdicionalModel", back_populates="produtos_vinculo", lazy="joined")
