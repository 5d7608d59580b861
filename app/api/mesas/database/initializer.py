"""
Inicializador do domínio Mesas.
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.mesas.models.model_mesa import MesaModel, MesaHistoricoModel


class MesasInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "mesas"

    def get_models(self):
        return [MesaModel, MesaHistoricoModel]


register_domain(MesasInitializer())
