from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

COR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CriarCategoriaRequest(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    imagem_url: Optional[str] = Field(None, max_length=500)
    cor: Optional[str] = Field(None, pattern=COR_PATTERN, description="Cor hexadecimal, ex: #FF8800")
    ativo: bool = True


class AtualizarCategoriaRequest(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    imagem_url: Optional[str] = Field(None, max_length=500)
    cor: Optional[str] = Field(None, pattern=COR_PATTERN)
    ativo: Optional[bool] = None


class CategoriaResponse(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    imagem_url: Optional[str] = None
    cor: Optional[str] = None
    ativo: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
