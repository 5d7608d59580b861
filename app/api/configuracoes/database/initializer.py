"""
Inicializador do domínio Configurações.
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.configuracoes.models.model_configuracao import ConfiguracaoModel


class ConfiguracoesInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "configuracoes"

    def get_models(self):
        return [ConfiguracaoModel]


register_domain(ConfiguracoesInitializer())
