from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.catalogo.schemas.schema_produtos import CategoriaCardapioResponse
from app.api.catalogo.services.service_cardapio import CardapioService
from app.database.db_connection import get_db

router = APIRouter(
    prefix="/api/catalogo/public",
    tags=["Public - Catalogo - Cardápio"],
)


@router.get("/cardapio", response_model=List[CategoriaCardapioResponse])
def cardapio(
    incluir_vazias: bool = Query(False, description="Inclui categorias sem produtos disponíveis"),
    db: Session = Depends(get_db),
):
    return CardapioService(db).montar_cardapio(incluir_vazias)
