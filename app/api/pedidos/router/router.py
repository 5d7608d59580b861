from fastapi import APIRouter

from app.api.pedidos.router.admin.router_pedidos_admin import router as router_pedidos_admin
from app.api.pedidos.router.client.router_pedidos_client import router as router_pedidos_client

router = APIRouter(
    tags=["API - Pedidos"]
)

router.include_router(router_pedidos_admin)
router.include_router(router_pedidos_client)
