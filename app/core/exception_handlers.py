"""
Exception handlers globais para capturar e logar erros da API.
"""
import json
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.utils.logger import logger


def _format_validation_errors(exc: RequestValidationError) -> list[dict]:
    error_details = []
    for error in exc.errors():
        error_details.append({
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "type": error.get("type", "unknown"),
            "message": error.get("msg", "Erro de validação"),
            "input": error.get("input"),
        })
    return error_details


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Erros de validação (422) do FastAPI/Pydantic.
    """
    error_details = _format_validation_errors(exc)

    logger.error(
        f"[VALIDATION ERROR 422] {request.method} {request.url.path} - "
        f"Erros de validação detectados:\n{json.dumps(error_details, indent=2, ensure_ascii=False, default=str)}"
    )
    query_params = dict(request.query_params)
    if query_params:
        logger.error(f"[VALIDATION ERROR 422] Query params: {json.dumps(query_params, ensure_ascii=False)}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": json.loads(json.dumps(error_details, default=str)),
            "message": "Erro de validação nos dados fornecidos",
            "errors": json.loads(json.dumps(error_details, default=str)),
        }
    )


async def http_exception_handler(request: Request, exc):
    """
    HTTPExceptions lançadas por repositórios, services e dependencies.
    """
    status_code = exc.status_code
    log_message = (
        f"[HTTP ERROR {status_code}] {request.method} {request.url.path} - "
        f"Detalhes: {exc.detail}"
    )
    if status_code >= 500:
        logger.error(log_message)
    else:
        logger.warning(log_message)

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.detail if isinstance(exc.detail, (dict, list)) else str(exc.detail),
            "status_code": status_code
        },
        headers=getattr(exc, "headers", None),
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    """Violação de constraint que escapou das validações dos services."""
    logger.error(f"[INTEGRITY ERROR] {request.method} {request.url.path} - {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": "Conflito de dados: registro duplicado ou referência inválida",
            "status_code": status.HTTP_409_CONFLICT,
        }
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Exceções não tratadas.
    """
    logger.error(
        f"[UNHANDLED EXCEPTION] {request.method} {request.url.path} - "
        f"{type(exc).__name__}: {str(exc)}"
    )
    logger.error(f"[UNHANDLED EXCEPTION] Traceback completo:\n{''.join(traceback.format_exception(exc))}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Erro interno do servidor",
            "error_type": type(exc).__name__,
            "message": str(exc)
        }
    )
