# app/api/cadastros/schemas/schema_usuario.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

from app.api.cadastros.models.model_usuario import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    nome: constr(strip_whitespace=True, min_length=1, max_length=120)
    email: constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN, max_length=160)
    telefone: Optional[constr(max_length=20)] = None
    role: UserRole = UserRole.CLIENTE

    @field_validator("telefone", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        return None if v == "" else v


class UserUpdate(BaseModel):
    nome: Optional[constr(strip_whitespace=True, min_length=1, max_length=120)] = None
    email: Optional[constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN, max_length=160)] = None
    telefone: Optional[constr(max_length=20)] = None
    role: Optional[UserRole] = None
    ativo: Optional[bool] = None


class UserResponse(BaseModel):
    id: int
    nome: str
    email: str
    telefone: Optional[str] = None
    role: UserRole
    ativo: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserResumo(BaseModel):
    """Usuário embutido em respostas de outros domínios"""
    id: int
    nome: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
