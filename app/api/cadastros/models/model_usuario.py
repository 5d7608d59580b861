# app/api/cadastros/models/model_usuario.py
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index

from app.database.db_connection import Base
from app.database.types import EnumValueType
from app.utils.database_utils import now_trimmed


class UserRole(str, enum.Enum):
    """Perfis de usuário"""
    CLIENTE = "CLIENTE"
    FUNCIONARIO = "FUNCIONARIO"
    GERENTE = "GERENTE"
    ADMINISTRADOR = "ADMINISTRADOR"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).upper().strip()
        if normalized in cls.__members__:
            return cls[normalized]
        alias_map = {
            "CUSTOMER": cls.CLIENTE,
            "STAFF": cls.FUNCIONARIO,
            "MANAGER": cls.GERENTE,
            "ADMIN": cls.ADMINISTRADOR,
            "CLIENTE": cls.CLIENTE,
            "FUNCIONARIO": cls.FUNCIONARIO,
            "FUNCIONÁRIO": cls.FUNCIONARIO,
            "GERENTE": cls.GERENTE,
            "ADMINISTRADOR": cls.ADMINISTRADOR,
        }
        return alias_map.get(normalized)


STAFF_ROLES = frozenset({UserRole.FUNCIONARIO, UserRole.GERENTE, UserRole.ADMINISTRADOR})
MANAGEMENT_ROLES = frozenset({UserRole.GERENTE, UserRole.ADMINISTRADOR})


class UsuarioModel(Base):
    __tablename__ = "usuarios"
    __table_args__ = (
        Index("idx_usuario_role", "role"),
    )

    id = Column(Integer, primary_key=True)
    nome = Column(String(120), nullable=False)
    email = Column(String(160), nullable=False, unique=True)
    telefone = Column(String(20), nullable=True)
    role = Column(EnumValueType(UserRole), nullable=False, default=UserRole.CLIENTE)
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    @property
    def is_gestor(self) -> bool:
        return self.role in MANAGEMENT_ROLES

    def __repr__(self):
        return f"<Usuario id={self.id} email={self.email} role={self.role}>"
