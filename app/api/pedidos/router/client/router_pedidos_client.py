from fastapi import APIRouter, Depends, status

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.pedidos.schemas.schema_pedido import CriarPedidoRequest, PedidoResponse
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/pedidos/client/pedidos",
    tags=["Client - Pedidos"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=PedidoResponse, status_code=status.HTTP_201_CREATED)
def criar_pedido(
    body: CriarPedidoRequest,
    current_user: UsuarioModel = Depends(get_current_user),
    svc: PedidoService = Depends(get_pedido_service),
):
    return svc.criar(body, current_user)
