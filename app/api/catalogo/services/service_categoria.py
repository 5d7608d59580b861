from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_categoria import CategoriaModel
from app.api.catalogo.repositories.repo_categoria import CategoriaRepository
from app.api.catalogo.schemas.schema_categoria import (
    CategoriaResponse,
    CriarCategoriaRequest,
    AtualizarCategoriaRequest,
)
from app.utils.logger import logger


class CategoriaService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoriaRepository(db)

    def _categoria_or_404(self, categoria_id: int) -> CategoriaModel:
        categoria = self.repo.buscar_por_id(categoria_id)
        if not categoria:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Categoria não encontrada")
        return categoria

    def _assert_nome_livre(self, nome: str, ignorar_id: Optional[int] = None):
        existente = self.repo.buscar_por_nome(nome)
        if existente and existente.id != ignorar_id:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Já existe uma categoria com este nome")

    def listar(self, ativo: Optional[bool] = None) -> List[CategoriaResponse]:
        return [CategoriaResponse.model_validate(c) for c in self.repo.listar(ativo)]

    def buscar_por_id(self, categoria_id: int) -> CategoriaResponse:
        return CategoriaResponse.model_validate(self._categoria_or_404(categoria_id))

    def criar(self, req: CriarCategoriaRequest) -> CategoriaResponse:
        self._assert_nome_livre(req.nome)
        categoria = self.repo.criar(**req.model_dump())
        self.db.commit()
        self.db.refresh(categoria)
        logger.info(f"[Categorias] Categoria criada - id={categoria.id}, nome={categoria.nome}")
        return CategoriaResponse.model_validate(categoria)

    def atualizar(self, categoria_id: int, req: AtualizarCategoriaRequest) -> CategoriaResponse:
        categoria = self._categoria_or_404(categoria_id)
        data = req.model_dump(exclude_unset=True, exclude_none=True)
        if "nome" in data:
            self._assert_nome_livre(data["nome"], ignorar_id=categoria_id)
        self.repo.atualizar(categoria, **data)
        self.db.commit()
        self.db.refresh(categoria)
        return CategoriaResponse.model_validate(categoria)

    def deletar(self, categoria_id: int) -> None:
        categoria = self._categoria_or_404(categoria_id)
        total_produtos = self.repo.contar_produtos(categoria_id)
        if total_produtos:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"Categoria possui {total_produtos} produto(s) vinculado(s) e não pode ser removida",
            )
        self.repo.deletar(categoria)
        self.db.commit()
        logger.info(f"[Categorias] Categoria removida - id={categoria_id}")
