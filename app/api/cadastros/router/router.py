from fastapi import APIRouter

from app.api.cadastros.router.admin.router_usuarios import router as router_usuarios
from app.api.cadastros.router.client.router_usuario_me import router as router_usuario_me

api_cadastros = APIRouter(
    tags=["API - Cadastros"]
)

api_cadastros.include_router(router_usuarios)
api_cadastros.include_router(router_usuario_me)
