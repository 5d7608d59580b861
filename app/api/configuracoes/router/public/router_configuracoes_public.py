from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.database.db_connection import get_db

router = APIRouter(
    prefix="/api/configuracoes/public",
    tags=["Public - Configurações"],
)


@router.get("", response_model=Dict[str, Any])
def configuracoes_publicas(db: Session = Depends(get_db)):
    return ConfiguracaoService(db).publicas()
