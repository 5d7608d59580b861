from .model_categoria import CategoriaModel
from .model_produto import ProdutoModel
from .model_adicional import AdicionalModel, ProdutoAdicionalModel

__all__ = [
    "CategoriaModel",
    "ProdutoModel",
    "AdicionalModel",
    "ProdutoAdicionalModel",
]
