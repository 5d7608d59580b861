from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, constr

from app.api.estoque.models.model_movimento_estoque import TipoMovimento


class RegistrarMovimentoRequest(BaseModel):
    produto_id: int = Field(..., gt=0)
    tipo: TipoMovimento
    quantidade: int = Field(..., ge=0, description="Em AJUSTE é o novo saldo do produto")
    motivo: constr(strip_whitespace=True, min_length=1, max_length=255)
    referencia: Optional[str] = Field(None, max_length=100)
    observacoes: Optional[str] = Field(None, max_length=1000)


class MovimentoEstoqueResponse(BaseModel):
    id: int
    produto_id: int
    produto_nome: Optional[str] = None
    tipo: TipoMovimento
    quantidade: int
    estoque_anterior: int
    estoque_novo: int
    motivo: str
    referencia: Optional[str] = None
    observacoes: Optional[str] = None
    usuario_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProdutoEstoqueResponse(BaseModel):
    id: int
    nome: str
    categoria_id: int
    preco: float
    disponivel: bool
    controla_estoque: bool
    estoque_atual: int
    estoque_minimo: int
    estoque_maximo: Optional[int] = None
    alerta_estoque: str

    model_config = ConfigDict(from_attributes=True)


class AlertasEstoqueResponse(BaseModel):
    sem_estoque: List[ProdutoEstoqueResponse]
    estoque_baixo: List[ProdutoEstoqueResponse]
    excesso_estoque: List[ProdutoEstoqueResponse]
    total_sem_estoque: int
    total_estoque_baixo: int
    total_excesso_estoque: int
    total_alertas: int
