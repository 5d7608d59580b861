from __future__ import annotations

from typing import Iterable

from fastapi import Depends, HTTPException, status

from app.core.admin_dependencies import get_current_user
from app.api.cadastros.models.model_usuario import UsuarioModel, UserRole, STAFF_ROLES, MANAGEMENT_ROLES
from app.utils.logger import logger


def require_roles(roles: Iterable[UserRole]):
    """
    Dependency que exige um dos perfis informados.
    Retorna o usuário atual para uso no endpoint.
    """
    allowed = frozenset(roles)

    def dependency(current_user: UsuarioModel = Depends(get_current_user)) -> UsuarioModel:
        if current_user.role not in allowed:
            logger.warning(
                "[AUTHZ] Acesso negado user_id=%s role=%s required=%s",
                current_user.id,
                current_user.role.value,
                sorted(r.value for r in allowed),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permissão insuficiente",
            )
        return current_user

    return dependency


require_staff = require_roles(STAFF_ROLES)
require_gestor = require_roles(MANAGEMENT_ROLES)
