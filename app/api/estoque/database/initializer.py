"""
Inicializador do domínio Estoque.
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.estoque.models.model_movimento_estoque import MovimentoEstoqueModel


class EstoqueInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "estoque"

    def get_models(self):
        return [MovimentoEstoqueModel]


register_domain(EstoqueInitializer())
