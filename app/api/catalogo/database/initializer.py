"""
Inicializador do domínio Catalogo.
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.catalogo.models.model_categoria import CategoriaModel
from app.api.catalogo.models.model_produto import ProdutoModel
from app.api.catalogo.models.model_adicional import AdicionalModel, ProdutoAdicionalModel


class CatalogoInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "catalogo"

    def get_models(self):
        return [CategoriaModel, ProdutoModel, AdicionalModel, ProdutoAdicionalModel]


register_domain(CatalogoInitializer())
