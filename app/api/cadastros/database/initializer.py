"""
Inicializador do domínio Cadastros (usuários).
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.cadastros.models.model_usuario import UsuarioModel


class CadastrosInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "cadastros"

    def get_models(self):
        return [UsuarioModel]


register_domain(CadastrosInitializer())
