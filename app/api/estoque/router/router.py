from fastapi import APIRouter

from app.api.estoque.router.admin.router_estoque_admin import router as router_estoque_admin

router = APIRouter(
    tags=["API - Estoque"]
)

router.include_router(router_estoque_admin)
