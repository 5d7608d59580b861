from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, condecimal, model_validator


class CriarProdutoRequest(BaseModel):
    nome: str = Field(..., min_length=1, max_length=150)
    descricao: Optional[str] = Field(None, max_length=500)
    preco: condecimal(gt=0, max_digits=10, decimal_places=2)
    imagem_url: Optional[str] = Field(None, max_length=500)
    categoria_id: int = Field(..., gt=0)
    disponivel: bool = True
    tempo_preparo: Optional[int] = Field(None, ge=0, description="Minutos")
    alergenos: List[str] = Field(default_factory=list)
    controla_estoque: bool = False
    estoque_atual: int = Field(0, ge=0)
    estoque_minimo: int = Field(0, ge=0)
    estoque_maximo: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def _valida_limites_estoque(self):
        if self.estoque_maximo is not None and self.estoque_maximo < self.estoque_minimo:
            raise ValueError("estoque_maximo deve ser maior ou igual a estoque_minimo")
        return self


class AtualizarProdutoRequest(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=150)
    descricao: Optional[str] = Field(None, max_length=500)
    preco: Optional[condecimal(gt=0, max_digits=10, decimal_places=2)] = None
    imagem_url: Optional[str] = Field(None, max_length=500)
    categoria_id: Optional[int] = Field(None, gt=0)
    disponivel: Optional[bool] = None
    tempo_preparo: Optional[int] = Field(None, ge=0)
    alergenos: Optional[List[str]] = None
    controla_estoque: Optional[bool] = None
    estoque_minimo: Optional[int] = Field(None, ge=0)
    estoque_maximo: Optional[int] = Field(None, ge=0)


class CategoriaResumoResponse(BaseModel):
    id: int
    nome: str
    cor: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProdutoResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    preco: float
    imagem_url: Optional[str] = None
    categoria_id: int
    categoria: Optional[CategoriaResumoResponse] = None
    disponivel: bool
    tempo_preparo: Optional[int] = None
    alergenos: List[str] = []
    controla_estoque: bool
    estoque_atual: int
    estoque_minimo: int
    estoque_maximo: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProdutoCardapioResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    preco: float
    imagem_url: Optional[str] = None
    tempo_preparo: Optional[int] = None
    alergenos: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class CategoriaCardapioResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    imagem_url: Optional[str] = None
    cor: Optional[str] = None
    produtos: List[ProdutoCardapioResponse] = []
