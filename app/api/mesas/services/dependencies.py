from fastapi import Depends
from sqlalchemy.orm import Session

from app.database.db_connection import get_db
from app.api.mesas.services.service_mesas import MesaService


def get_mesa_service(db: Session = Depends(get_db)) -> MesaService:
    return MesaService(db)