from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.core.authorization import require_gestor
from app.api.cadastros.models.model_usuario import UserRole
from app.api.cadastros.schemas.schema_usuario import UserCreate, UserUpdate, UserResponse
from app.api.cadastros.services.service_usuarios import UsuarioService
from app.api.cadastros.services.dependencies import get_usuario_service
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/cadastros/admin/usuarios",
    tags=["Admin - Cadastros - Usuários"],
    dependencies=[Depends(require_gestor)],
)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def criar_usuario(body: UserCreate, svc: UsuarioService = Depends(get_usuario_service)):
    logger.info(f"[Usuarios] Criar - email={body.email}, role={body.role.value}")
    return svc.create(body)


@router.get("", response_model=List[UserResponse])
def listar_usuarios(
    role: Optional[UserRole] = Query(None),
    ativo: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Busca por nome ou email"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    svc: UsuarioService = Depends(get_usuario_service),
):
    return svc.list(role=role, ativo=ativo, search=search, skip=skip, limit=limit)


@router.get("/{user_id}", response_model=UserResponse)
def obter_usuario(user_id: int = Path(...), svc: UsuarioService = Depends(get_usuario_service)):
    return svc.get(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def atualizar_usuario(
    body: UserUpdate,
    user_id: int = Path(...),
    svc: UsuarioService = Depends(get_usuario_service),
):
    logger.info(f"[Usuarios] Atualizar - id={user_id}")
    return svc.update(user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def desativar_usuario(user_id: int = Path(...), svc: UsuarioService = Depends(get_usuario_service)):
    logger.info(f"[Usuarios] Desativar - id={user_id}")
    svc.desativar(user_id)
