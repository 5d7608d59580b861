from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_produto import ProdutoModel
from app.api.catalogo.repositories.repo_categoria import CategoriaRepository
from app.api.catalogo.repositories.repo_produto import ProdutoRepository
from app.api.catalogo.schemas.schema_produtos import (
    ProdutoResponse,
    CriarProdutoRequest,
    AtualizarProdutoRequest,
)
from app.utils.logger import logger


class ProdutoService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProdutoRepository(db)
        self.repo_categoria = CategoriaRepository(db)

    def produto_or_404(self, produto_id: int) -> ProdutoModel:
        produto = self.repo.buscar_por_id(produto_id)
        if not produto:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Produto não encontrado")
        return produto

    def _assert_categoria_existe(self, categoria_id: int):
        if not self.repo_categoria.buscar_por_id(categoria_id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Categoria não encontrada")

    def _assert_nome_livre(self, nome: str, ignorar_id: Optional[int] = None):
        existente = self.repo.buscar_por_nome(nome)
        if existente and existente.id != ignorar_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Já existe um produto com este nome")

    def listar(
        self,
        *,
        search: Optional[str] = None,
        categoria_id: Optional[int] = None,
        disponivel: Optional[bool] = None,
    ) -> List[ProdutoResponse]:
        produtos = self.repo.listar(search=search, categoria_id=categoria_id, disponivel=disponivel)
        return [ProdutoResponse.model_validate(p) for p in produtos]

    def buscar_por_id(self, produto_id: int) -> ProdutoResponse:
        return ProdutoResponse.model_validate(self.produto_or_404(produto_id))

    def criar(self, req: CriarProdutoRequest) -> ProdutoResponse:
        self._assert_nome_livre(req.nome)
        self._assert_categoria_existe(req.categoria_id)
        produto = self.repo.criar(**req.model_dump())
        self.db.commit()
        self.db.refresh(produto)
        logger.info(f"[Produtos] Produto criado - id={produto.id}, nome={produto.nome}, preco={produto.preco}")
        return ProdutoResponse.model_validate(produto)

    def atualizar(self, produto_id: int, req: AtualizarProdutoRequest) -> ProdutoResponse:
        produto = self.produto_or_404(produto_id)
        data = req.model_dump(exclude_unset=True, exclude_none=True)
        if "nome" in data:
            self._assert_nome_livre(data["nome"], ignorar_id=produto_id)
        if "categoria_id" in data:
            self._assert_categoria_existe(data["categoria_id"])
        self.repo.atualizar(produto, **data)
        self.db.commit()
        self.db.refresh(produto)
        return ProdutoResponse.model_validate(produto)

    def deletar(self, produto_id: int) -> None:
        produto = self.produto_or_404(produto_id)
        if self.repo.possui_itens_pedido(produto_id):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                "Produto já utilizado em pedidos. Marque-o como indisponível em vez de remover",
            )
        self.repo.deletar(produto)
        self.db.commit()
        logger.info(f"[Produtos] Produto removido - id={produto_id}")
