import os

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.core.exception_handlers import (
    validation_exception_handler,
    http_exception_handler,
    integrity_exception_handler,
    general_exception_handler,
)
from app.utils.logger import logger
from app.config.settings import CORS_ORIGINS, CORS_ALLOW_ALL, BASE_URL as SETTINGS_BASE_URL, ENABLE_DOCS

# ───────────────────────────
# Importar modelos antes das rotas
# Garante que todos os modelos estejam registrados no SQLAlchemy
# antes de qualquer query ser executada
# ───────────────────────────
from app.database.init_db import importar_models

importar_models()

from app.api.cadastros.router.router import api_cadastros
from app.api.catalogo.router.router import router as catalogo_router
from app.api.mesas.router.router import router as mesas_router
from app.api.pedidos.router.router import router as pedidos_router
from app.api.estoque.router.router import router as estoque_router
from app.api.notifications.router.router import router as notifications_router
from app.api.configuracoes.router.router import router as configuracoes_router
from app.api.entrega.router.router import router as entrega_router
from app.api.monitoring.router import router_public as monitoring_router_public


BASE_URL = SETTINGS_BASE_URL or os.getenv("BASE_URL", "http://localhost:8000")
# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="API Lanchonete",
    version="1.0.0",
    description="Pedidos, mesas, cardápio, estoque e notificações do restaurante",
    docs_url=("/swagger" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    servers=[{"url": BASE_URL, "description": "Base URL do ambiente"}],
    redirect_slashes=False  # Evita redirecionamento 307 quando URL não termina com /
)

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(IntegrityError, integrity_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares
# ───────────────────────────
# Middlewares são executados na ORDEM REVERSA da adição (último adicionado = primeiro executado)
from app.utils.prometheus_metrics import PrometheusMiddleware
app.add_middleware(PrometheusMiddleware)

# CORS (adicionado por último, será executado primeiro)
# - Se CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
# - Caso contrário => allow_origins=CORS_ORIGINS (se vazio cai para ["*"]), allow_credentials=True somente quando houver origens explícitas
if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────────────────────
# Startup
# ───────────────────────────
@app.on_event("startup")
async def startup():
    from app.database.init_db import inicializar_banco

    logger.info("Iniciando API e banco de dados...")
    inicializar_banco()
    logger.info("API iniciada com sucesso.")


@app.on_event("shutdown")
async def shutdown():
    logger.info("API encerrada.")


# ───────────────────────────
# Rotas
# ───────────────────────────
@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}


@app.get("/health")
def health():
    from app.database.db_connection import SessionLocal

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"[Health] Banco indisponível: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    finally:
        db.close()
    return {"status": "healthy"}


app.include_router(monitoring_router_public)  # Métricas públicas

app.include_router(api_cadastros)
app.include_router(catalogo_router)
app.include_router(mesas_router)
app.include_router(pedidos_router)
app.include_router(estoque_router)
app.include_router(notifications_router)
app.include_router(configuracoes_router)
app.include_router(entrega_router)


# ───────────────────────────
# OpenAPI: header X-User-Id no Swagger
# ───────────────────────────
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        servers=app.servers,
    )

    components = openapi_schema.get("components", {})
    security_schemes = components.get("securitySchemes", {})
    security_schemes.update({
        "userIdHeader": {
            "type": "apiKey",
            "in": "header",
            "name": "X-User-Id",
        }
    })
    components["securitySchemes"] = security_schemes
    openapi_schema["components"] = components
    openapi_schema["security"] = [{"userIdHeader": []}]

    # Endpoints públicos não exigem o header
    public_prefixes = ("/api/catalogo/public", "/api/configuracoes/public", "/api/entrega", "/api/monitoring")
    for path, methods in openapi_schema.get("paths", {}).items():
        if path in {"/", "/health"} or path.startswith(public_prefixes):
            for method_obj in methods.values():
                method_obj["security"] = []

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
