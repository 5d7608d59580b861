# app/api/cadastros/repositories/repo_usuarios.py
from typing import Optional, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel, UserRole


class UsuarioRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[UsuarioModel]:
        return self.db.query(UsuarioModel).filter(UsuarioModel.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[UsuarioModel]:
        return (
            self.db.query(UsuarioModel)
            .filter(UsuarioModel.email == email.strip().lower())
            .first()
        )

    def list(
        self,
        *,
        role: Optional[UserRole] = None,
        ativo: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[UsuarioModel]:
        query = self.db.query(UsuarioModel)
        if role is not None:
            query = query.filter(UsuarioModel.role == role)
        if ativo is not None:
            query = query.filter(UsuarioModel.ativo == ativo)
        if search:
            termo = f"%{search.strip()}%"
            query = query.filter(or_(UsuarioModel.nome.ilike(termo), UsuarioModel.email.ilike(termo)))
        return query.order_by(UsuarioModel.nome).offset(skip).limit(limit).all()

    def list_ids_by_roles(self, roles) -> List[int]:
        rows = self.db.query(UsuarioModel.id).filter(UsuarioModel.role.in_(list(roles))).all()
        return [r[0] for r in rows]

    def create(self, user: UsuarioModel) -> UsuarioModel:
        self.db.add(user)
        self.db.flush()
        return user
