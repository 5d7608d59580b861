# app/api/configuracoes/models/model_configuracao.py
import json

from sqlalchemy import Column, Integer, String, Text, DateTime

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ConfiguracaoModel(Base):
    __tablename__ = "configuracoes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chave = Column(String(100), nullable=False, unique=True, index=True)
    # Valor serializado em JSON
    valor = Column(Text, nullable=False)
    categoria = Column(String(50), nullable=False, default="geral", index=True)
    descricao = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    @property
    def valor_decodificado(self):
        try:
            return json.loads(self.valor)
        except (TypeError, ValueError):
            return self.valor
