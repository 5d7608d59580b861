# app/api/pedidos/models/model_pedido_historico.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class PedidoHistoricoModel(Base):
    """Histórico de mudanças de status de um pedido."""
    __tablename__ = "pedidos_historico"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    status_anterior = Column(String(20), nullable=True)
    status_novo = Column(String(20), nullable=False)
    usuario_id = Column(Integer, nullable=True)
    descricao = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=now_trimmed, nullable=False)

    pedido = relationship("PedidoModel", back_populates="historico")
