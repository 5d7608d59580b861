# app/api/cadastros/services/service_usuarios.py
from typing import Optional, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel, UserRole
from app.api.cadastros.repositories.repo_usuarios import UsuarioRepository
from app.api.cadastros.schemas.schema_usuario import UserCreate, UserUpdate, UserResponse
from app.api.notifications.services.notification_service import NotificationService
from app.utils.logger import logger


class UsuarioService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UsuarioRepository(db)
        self.notifications = NotificationService(db)

    def _get_or_404(self, user_id: int) -> UsuarioModel:
        user = self.repo.get(user_id)
        if not user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Usuário não encontrado")
        return user

    def get(self, user_id: int) -> UserResponse:
        return UserResponse.model_validate(self._get_or_404(user_id))

    def list(
        self,
        *,
        role: Optional[UserRole] = None,
        ativo: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[UserResponse]:
        users = self.repo.list(role=role, ativo=ativo, search=search, skip=skip, limit=limit)
        return [UserResponse.model_validate(u) for u in users]

    def create(self, data: UserCreate) -> UserResponse:
        if self.repo.get_by_email(data.email):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Já existe um usuário com este email")

        user = self.repo.create(
            UsuarioModel(
                nome=data.nome,
                email=data.email,
                telefone=data.telefone,
                role=data.role,
                ativo=True,
            )
        )
        self.notifications.notificar_novo_usuario(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"[Usuarios] Usuário criado - id={user.id}, role={user.role.value}")
        return UserResponse.model_validate(user)

    def update(self, user_id: int, data: UserUpdate) -> UserResponse:
        user = self._get_or_404(user_id)
        update_data = data.model_dump(exclude_unset=True)

        novo_email = update_data.get("email")
        if novo_email and novo_email != user.email:
            existente = self.repo.get_by_email(novo_email)
            if existente and existente.id != user.id:
                raise HTTPException(status.HTTP_400_BAD_REQUEST, "Já existe um usuário com este email")

        for field, value in update_data.items():
            if value is None and field != "telefone":
                continue
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"[Usuarios] Usuário atualizado - id={user.id}")
        return UserResponse.model_validate(user)

    def desativar(self, user_id: int) -> None:
        user = self._get_or_404(user_id)
        user.ativo = False
        self.db.commit()
        logger.info(f"[Usuarios] Usuário desativado - id={user_id}")
