from fastapi import APIRouter

from app.api.catalogo.router.admin import router_categorias, router_produtos, router_adicionais
from app.api.catalogo.router.public import router_cardapio

router = APIRouter(tags=["API - Catalogo"])

# Rotas admin (leitura para qualquer usuário identificado, escrita para gestores)
router.include_router(router_categorias.router)
router.include_router(router_produtos.router)
router.include_router(router_adicionais.router)

# Rotas públicas
router.include_router(router_cardapio.router)
