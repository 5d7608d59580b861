# app/api/estoque/models/model_movimento_estoque.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.database.types import EnumValueType
from app.utils.database_utils import now_trimmed


class TipoMovimento(str, enum.Enum):
    ENTRADA = "ENTRADA"
    SAIDA = "SAIDA"
    AJUSTE = "AJUSTE"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).upper().strip()
        if normalized in cls.__members__:
            return cls[normalized]
        alias_map = {
            "IN": cls.ENTRADA,
            "OUT": cls.SAIDA,
            "ADJUSTMENT": cls.AJUSTE,
        }
        return alias_map.get(normalized)


class MovimentoEstoqueModel(Base):
    """Lançamento no livro de estoque de um produto"""
    __tablename__ = "movimentos_estoque"
    __table_args__ = (
        Index("idx_movimentos_produto_data", "produto_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    produto_id = Column(Integer, ForeignKey("produtos.id", ondelete="CASCADE"), nullable=False)
    produto = relationship("ProdutoModel", lazy="joined")

    tipo = Column(EnumValueType(TipoMovimento), nullable=False)
    # Em AJUSTE guarda a diferença (novo - anterior), podendo ser negativa
    quantidade = Column(Integer, nullable=False)
    estoque_anterior = Column(Integer, nullable=False)
    estoque_novo = Column(Integer, nullable=False)

    motivo = Column(String(255), nullable=False)
    referencia = Column(String(100), nullable=True)
    observacoes = Column(Text, nullable=True)

    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=now_trimmed, nullable=False)

    @property
    def produto_nome(self):
        return self.produto.nome if self.produto else None
