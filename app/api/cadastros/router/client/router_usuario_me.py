from fastapi import APIRouter, Depends

from app.core.admin_dependencies import get_current_user
from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.cadastros.schemas.schema_usuario import UserResponse

router = APIRouter(
    prefix="/api/cadastros/client/usuarios",
    tags=["Client - Cadastros - Usuários"],
)


@router.get("/me", response_model=UserResponse)
def usuario_atual(current_user: UsuarioModel = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)
