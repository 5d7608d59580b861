from fastapi import APIRouter

from app.api.entrega.router.public.router_taxa_entrega import router as router_taxa_entrega

router = APIRouter(
    tags=["API - Entrega"]
)

router.include_router(router_taxa_entrega)
