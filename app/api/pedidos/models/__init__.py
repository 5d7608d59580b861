from .model_pedido import (
    PedidoModel,
    StatusPedido,
    TipoEntrega,
    MetodoPagamento,
    STATUS_TERMINAIS,
    STATUS_EM_ABERTO,
)
from .model_pedido_item import PedidoItemModel
from .model_pedido_historico import PedidoHistoricoModel

__all__ = [
    "PedidoModel",
    "PedidoItemModel",
    "PedidoHistoricoModel",
    "StatusPedido",
    "TipoEntrega",
    "MetodoPagamento",
    "STATUS_TERMINAIS",
    "STATUS_EM_ABERTO",
]
