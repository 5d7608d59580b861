# app/api/pedidos/models/model_pedido_item.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship

from app.database.db_connection import Base


class PedidoItemModel(Base):
    __tablename__ = "pedidos_itens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    produto_id = Column(Integer, ForeignKey("produtos.id", ondelete="RESTRICT"), nullable=False, index=True)

    quantidade = Column(Integer, nullable=False, default=1)
    # Preço unitário já somado aos adicionais escolhidos
    preco_unitario = Column(Numeric(10, 2), nullable=False)
    adicionais_ids = Column(JSON, nullable=False, default=list)
    observacao = Column(String(255), nullable=True)

    pedido = relationship("PedidoModel", back_populates="itens")
    produto = relationship("ProdutoModel", lazy="joined")

    @property
    def produto_nome(self) -> str | None:
        return self.produto.nome if self.produto else None

    @property
    def subtotal(self):
        return (self.preco_unitario or 0) * (self.quantidade or 0)
