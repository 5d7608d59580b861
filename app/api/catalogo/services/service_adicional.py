from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_adicional import AdicionalModel, ProdutoAdicionalModel
from app.api.catalogo.repositories.repo_adicional import AdicionalRepository
from app.api.catalogo.repositories.repo_produto import ProdutoRepository
from app.api.catalogo.schemas.schema_adicional import (
    AdicionalResponse,
    AdicionalProdutoResponse,
    CriarAdicionalRequest,
    AtualizarAdicionalRequest,
    VincularAdicionalRequest,
)


class AdicionalService:
    """Service para operações de adicionais."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdicionalRepository(db)
        self.repo_produto = ProdutoRepository(db)

    def _adicional_or_404(self, adicional_id: int) -> AdicionalModel:
        adicional = self.repo.buscar_por_id(adicional_id)
        if not adicional:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Adicional não encontrado."
            )
        return adicional

    def _produto_or_404(self, produto_id: int):
        produto = self.repo_produto.buscar_por_id(produto_id)
        if not produto:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Produto não encontrado."
            )
        return produto

    @staticmethod
    def _vinculo_to_response(vinculo: ProdutoAdicionalModel) -> AdicionalProdutoResponse:
        adicional = vinculo.adicional
        return AdicionalProdutoResponse(
            id=adicional.id,
            nome=adicional.nome,
            descricao=adicional.descricao,
            preco=float(adicional.preco or 0),
            max_quantidade=adicional.max_quantidade,
            disponivel=adicional.disponivel,
            vinculo_id=vinculo.id,
            obrigatorio=vinculo.obrigatorio,
        )

    def criar_adicional(self, req: CriarAdicionalRequest) -> AdicionalResponse:
        adicional = self.repo.criar_adicional(**req.model_dump())
        self.db.commit()
        self.db.refresh(adicional)
        return AdicionalResponse.model_validate(adicional)

    def listar_adicionais(self, disponivel: Optional[bool] = None) -> List[AdicionalResponse]:
        return [AdicionalResponse.model_validate(a) for a in self.repo.listar(disponivel)]

    def buscar_por_id(self, adicional_id: int) -> AdicionalResponse:
        return AdicionalResponse.model_validate(self._adicional_or_404(adicional_id))

    def atualizar_adicional(self, adicional_id: int, req: AtualizarAdicionalRequest) -> AdicionalResponse:
        adicional = self._adicional_or_404(adicional_id)
        self.repo.atualizar_adicional(adicional, **req.model_dump(exclude_unset=True, exclude_none=True))
        self.db.commit()
        self.db.refresh(adicional)
        return AdicionalResponse.model_validate(adicional)

    def deletar_adicional(self, adicional_id: int):
        adicional = self._adicional_or_404(adicional_id)
        self.repo.deletar_adicional(adicional)
        self.db.commit()

    # -------- Vínculos produto x adicional --------
    def listar_adicionais_produto(self, produto_id: int) -> List[AdicionalProdutoResponse]:
        self._produto_or_404(produto_id)
        return [self._vinculo_to_response(v) for v in self.repo.listar_vinculos_produto(produto_id)]

    def vincular_adicional_produto(self, produto_id: int, req: VincularAdicionalRequest) -> AdicionalProdutoResponse:
        self._produto_or_404(produto_id)
        self._adicional_or_404(req.adicional_id)
        if self.repo.buscar_vinculo(produto_id, req.adicional_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Este adicional já está associado ao produto"
            )
        vinculo = self.repo.vincular(produto_id, req.adicional_id, req.obrigatorio)
        self.db.commit()
        self.db.refresh(vinculo)
        return self._vinculo_to_response(vinculo)

    def desvincular_adicional_produto(self, produto_id: int, adicional_id: int):
        vinculo = self.repo.buscar_vinculo(produto_id, adicional_id)
        if not vinculo:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Adicional não está associado a este produto"
            )
        self.repo.desvincular(vinculo)
        self.db.commit()
