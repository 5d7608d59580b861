from fastapi import APIRouter

from app.api.configuracoes.router.admin.router_configuracoes_admin import router as router_configuracoes_admin
from app.api.configuracoes.router.public.router_configuracoes_public import router as router_configuracoes_public

router = APIRouter(
    tags=["API - Configurações"]
)

router.include_router(router_configuracoes_admin)
router.include_router(router_configuracoes_public)
