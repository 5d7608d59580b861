# app/core/admin_dependencies.py

from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.cadastros.repositories.repo_usuarios import UsuarioRepository
from app.database.db_connection import get_db
from app.utils.logger import logger

USER_HEADER = "X-User-Id"

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Usuário não identificado",
)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> UsuarioModel:
    """
    Identifica o usuário que está operando pelo header X-User-Id.
    A autenticação em si fica a cargo do gateway na frente da API.
    """
    raw_id = request.headers.get(USER_HEADER)
    if not raw_id:
        logger.warning(f"[AUTH] Header {USER_HEADER} ausente.")
        raise credentials_exception

    try:
        user_id = int(raw_id)
    except ValueError:
        logger.warning(f"[AUTH] Header {USER_HEADER} inválido: {raw_id!r}")
        raise credentials_exception

    user = UsuarioRepository(db).get(user_id)
    if not user or not user.ativo:
        logger.warning(f"[AUTH] Usuário {user_id} inexistente ou inativo.")
        raise credentials_exception

    return user
