from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr


class ConfiguracaoRequest(BaseModel):
    chave: constr(strip_whitespace=True, min_length=1, max_length=100)
    valor: Any = None
    categoria: constr(strip_whitespace=True, min_length=1, max_length=50) = "geral"
    descricao: Optional[str] = Field(None, max_length=255)


class ConfiguracaoLoteRequest(BaseModel):
    configuracoes: List[ConfiguracaoRequest] = Field(..., min_length=1)


class ConfiguracaoResponse(BaseModel):
    id: int
    chave: str
    valor: Any = Field(None, validation_alias="valor_decodificado")
    categoria: str
    descricao: Optional[str] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


# {categoria: {chave: configuracao}}
ConfiguracoesAgrupadas = Dict[str, Dict[str, ConfiguracaoResponse]]
