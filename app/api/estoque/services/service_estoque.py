from datetime import date, datetime, time
from typing import Optional, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.catalogo.repositories.repo_produto import ProdutoRepository
from app.api.estoque.models.model_movimento_estoque import TipoMovimento
from app.api.estoque.repositories.repo_estoque import EstoqueRepository
from app.api.estoque.schemas.schema_estoque import (
    RegistrarMovimentoRequest,
    MovimentoEstoqueResponse,
    ProdutoEstoqueResponse,
    AlertasEstoqueResponse,
)
from app.api.notifications.services.notification_service import NotificationService
from app.utils.logger import logger

ALERTAS_VALIDOS = ("sem_estoque", "estoque_baixo", "normal")


class EstoqueService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = EstoqueRepository(db)
        self.repo_produto = ProdutoRepository(db)
        self.notifications = NotificationService(db)

    @staticmethod
    def _calcular_saldo(tipo: TipoMovimento, anterior: int, quantidade: int) -> tuple[int, int]:
        """Retorna (novo_saldo, quantidade_registrada)."""
        if tipo == TipoMovimento.ENTRADA:
            return anterior + quantidade, quantidade
        if tipo == TipoMovimento.SAIDA:
            return max(0, anterior - quantidade), quantidade
        return quantidade, quantidade - anterior

    def registrar_movimento(self, req: RegistrarMovimentoRequest, usuario) -> MovimentoEstoqueResponse:
        if req.tipo != TipoMovimento.AJUSTE and req.quantidade <= 0:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Quantidade deve ser maior que zero")

        produto = self.repo_produto.buscar_por_id_para_update(req.produto_id)
        if not produto:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Produto não encontrado")

        anterior = produto.estoque_atual or 0
        novo, quantidade = self._calcular_saldo(req.tipo, anterior, req.quantidade)

        produto.estoque_atual = novo
        produto.controla_estoque = True
        movimento = self.repo.criar_movimento(
            produto_id=produto.id,
            tipo=req.tipo,
            quantidade=quantidade,
            estoque_anterior=anterior,
            estoque_novo=novo,
            motivo=req.motivo,
            referencia=req.referencia,
            observacoes=req.observacoes,
            usuario_id=usuario.id,
        )

        if req.tipo != TipoMovimento.ENTRADA and produto.alerta_estoque in ("sem_estoque", "estoque_baixo"):
            self.notifications.notificar_estoque_baixo(produto)

        self.db.commit()
        self.db.refresh(movimento)
        logger.info(
            f"[Estoque] Movimento registrado - produto_id={produto.id}, tipo={req.tipo.value}, "
            f"{anterior} -> {novo}, usuario_id={usuario.id}"
        )
        return MovimentoEstoqueResponse.model_validate(movimento)

    def listar_produtos(
        self,
        *,
        categoria_id: Optional[int] = None,
        search: Optional[str] = None,
        alerta: Optional[str] = None,
    ) -> List[ProdutoEstoqueResponse]:
        if alerta is not None and alerta not in ALERTAS_VALIDOS:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Filtro de alerta inválido: {alerta}")

        produtos = self.repo_produto.listar(search=search, categoria_id=categoria_id)
        if alerta == "normal":
            produtos = [p for p in produtos if p.alerta_estoque not in ("sem_estoque", "estoque_baixo")]
        elif alerta:
            produtos = [p for p in produtos if p.alerta_estoque == alerta]
        return [ProdutoEstoqueResponse.model_validate(p) for p in produtos]

    def listar_movimentos(
        self,
        *,
        produto_id: Optional[int] = None,
        tipo: Optional[TipoMovimento] = None,
        data_inicio: Optional[date] = None,
        data_fim: Optional[date] = None,
        limit: int = 50,
    ) -> List[MovimentoEstoqueResponse]:
        movimentos = self.repo.listar_movimentos(
            produto_id=produto_id,
            tipo=tipo,
            inicio=datetime.combine(data_inicio, time.min) if data_inicio else None,
            fim=datetime.combine(data_fim, time.max) if data_fim else None,
            limit=limit,
        )
        return [MovimentoEstoqueResponse.model_validate(m) for m in movimentos]

    def alertas(self) -> AlertasEstoqueResponse:
        grupos = {"sem_estoque": [], "estoque_baixo": [], "excesso_estoque": []}
        for produto in self.repo_produto.listar():
            if produto.controla_estoque and produto.alerta_estoque in grupos:
                grupos[produto.alerta_estoque].append(ProdutoEstoqueResponse.model_validate(produto))

        return AlertasEstoqueResponse(
            **grupos,
            total_sem_estoque=len(grupos["sem_estoque"]),
            total_estoque_baixo=len(grupos["estoque_baixo"]),
            total_excesso_estoque=len(grupos["excesso_estoque"]),
            total_alertas=sum(len(v) for v in grupos.values()),
        )
