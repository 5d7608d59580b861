"""
Inicializador do domínio Pedidos.
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.models.model_pedido_item import PedidoItemModel
from app.api.pedidos.models.model_pedido_historico import PedidoHistoricoModel


class PedidosInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "pedidos"

    def get_models(self):
        return [PedidoModel, PedidoItemModel, PedidoHistoricoModel]


register_domain(PedidosInitializer())
