# app/api/mesas/models/model_mesa.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.ext.hybrid import hybrid_property

from app.database.db_connection import Base
from app.database.types import EnumValueType
from app.utils.database_utils import now_trimmed


class StatusMesa(str, enum.Enum):
    """Status possíveis para uma mesa"""
    LIVRE = "LIVRE"
    OCUPADA = "OCUPADA"
    RESERVADA = "RESERVADA"
    MANUTENCAO = "MANUTENCAO"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).upper().strip()
        if normalized in cls.__members__:
            return cls[normalized]
        alias_map = {
            "L": cls.LIVRE,
            "D": cls.LIVRE,
            "O": cls.OCUPADA,
            "R": cls.RESERVADA,
            "M": cls.MANUTENCAO,
            "DISPONIVEL": cls.LIVRE,
            "DISPONÍVEL": cls.LIVRE,
            "MANUTENÇÃO": cls.MANUTENCAO,
        }
        return alias_map.get(normalized)


class MesaModel(Base):
    __tablename__ = "mesas"

    id = Column(Integer, primary_key=True)
    numero = Column(Integer, nullable=False, unique=True)
    capacidade = Column(Integer, nullable=False, default=4)
    status = Column(EnumValueType(StatusMesa), nullable=False, default=StatusMesa.LIVRE)

    responsavel_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True)
    responsavel = relationship("UsuarioModel", lazy="joined")

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    historico = relationship(
        "MesaHistoricoModel",
        back_populates="mesa",
        cascade="all, delete-orphan",
        order_by="MesaHistoricoModel.id",
    )

    @hybrid_property
    def status_descricao(self) -> str:
        status_map = {
            StatusMesa.LIVRE: "Livre",
            StatusMesa.OCUPADA: "Ocupada",
            StatusMesa.RESERVADA: "Reservada",
            StatusMesa.MANUTENCAO: "Em manutenção",
        }
        return status_map.get(self.status, "Desconhecido")

    @property
    def label(self) -> str:
        return f"Mesa {self.numero}"

    @property
    def is_ocupada(self) -> bool:
        return self.status == StatusMesa.OCUPADA

    @property
    def is_livre(self) -> bool:
        return self.status == StatusMesa.LIVRE


class MesaHistoricoModel(Base):
    """Registro de cada mudança de status/responsável de uma mesa"""
    __tablename__ = "mesas_historico"

    id = Column(Integer, primary_key=True)
    mesa_id = Column(Integer, ForeignKey("mesas.id", ondelete="CASCADE"), nullable=False, index=True)
    status_anterior = Column(String(20), nullable=True)
    status_novo = Column(String(20), nullable=False)
    responsavel_id = Column(Integer, nullable=True)
    usuario_id = Column(Integer, nullable=True)
    motivo = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=now_trimmed, nullable=False)

    mesa = relationship("MesaModel", back_populates="historico")
