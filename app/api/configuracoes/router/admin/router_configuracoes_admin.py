from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.api.configuracoes.schemas.schema_configuracao import (
    ConfiguracaoRequest,
    ConfiguracaoLoteRequest,
    ConfiguracaoResponse,
)
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.core.authorization import require_gestor
from app.database.db_connection import get_db

router = APIRouter(
    prefix="/api/configuracoes/admin",
    tags=["Admin - Configurações"],
    dependencies=[Depends(require_gestor)],
)


@router.get("", response_model=Dict[str, Dict[str, ConfiguracaoResponse]])
def listar_configuracoes(
    categoria: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return ConfiguracaoService(db).listar_agrupadas(categoria)


@router.post("", response_model=ConfiguracaoResponse)
def salvar_configuracao(body: ConfiguracaoRequest, db: Session = Depends(get_db)):
    return ConfiguracaoService(db).salvar(body)


@router.put("", response_model=List[ConfiguracaoResponse])
def salvar_configuracoes_lote(body: ConfiguracaoLoteRequest, db: Session = Depends(get_db)):
    return ConfiguracaoService(db).salvar_lote(body.configuracoes)


@router.delete("/{chave}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_configuracao(chave: str = Path(...), db: Session = Depends(get_db)):
    ConfiguracaoService(db).deletar(chave)
