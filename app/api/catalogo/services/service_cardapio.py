from typing import List
from sqlalchemy.orm import Session

from app.api.catalogo.repositories.repo_categoria import CategoriaRepository
from app.api.catalogo.repositories.repo_produto import ProdutoRepository
from app.api.catalogo.schemas.schema_produtos import CategoriaCardapioResponse, ProdutoCardapioResponse


class CardapioService:
    """Monta o cardápio público: categorias ativas com produtos disponíveis."""

    def __init__(self, db: Session):
        self.db = db
        self.repo_categoria = CategoriaRepository(db)
        self.repo_produto = ProdutoRepository(db)

    def montar_cardapio(self, incluir_vazias: bool = False) -> List[CategoriaCardapioResponse]:
        produtos_por_categoria: dict[int, list] = {}
        for produto in self.repo_produto.listar(disponivel=True):
            produtos_por_categoria.setdefault(produto.categoria_id, []).append(
                ProdutoCardapioResponse.model_validate(produto)
            )

        cardapio = []
        for categoria in self.repo_categoria.listar(ativo=True):
            produtos = produtos_por_categoria.get(categoria.id, [])
            if not produtos and not incluir_vazias:
                continue
            cardapio.append(
                CategoriaCardapioResponse(
                    id=categoria.id,
                    nome=categoria.nome,
                    descricao=categoria.descricao,
                    imagem_url=categoria.imagem_url,
                    cor=categoria.cor,
                    produtos=produtos,
                )
            )
        return cardapio
