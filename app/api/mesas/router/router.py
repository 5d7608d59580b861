from fastapi import APIRouter

from app.api.mesas.router.admin.router_mesas_admin import router as router_mesas_admin

router = APIRouter(
    tags=["API - Mesas"]
)

router.include_router(router_mesas_admin)
