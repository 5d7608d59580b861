from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, condecimal


# ------ Requests ------
class CriarAdicionalRequest(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    preco: condecimal(ge=0, max_digits=10, decimal_places=2) = Field(default=0)
    max_quantidade: int = Field(1, ge=1)
    disponivel: bool = True


class AtualizarAdicionalRequest(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    preco: Optional[condecimal(ge=0, max_digits=10, decimal_places=2)] = None
    max_quantidade: Optional[int] = Field(None, ge=1)
    disponivel: Optional[bool] = None


class VincularAdicionalRequest(BaseModel):
    adicional_id: int = Field(..., gt=0)
    obrigatorio: bool = False


# ------ Responses ------
class AdicionalResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    preco: float
    max_quantidade: int
    disponivel: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdicionalProdutoResponse(BaseModel):
    """Adicional vinculado a um produto"""
    id: int
    nome: str
    descricao: Optional[str] = None
    preco: float
    max_quantidade: int
    disponivel: bool
    vinculo_id: int
    obrigatorio: bool
