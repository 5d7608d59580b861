"""
Métricas Prometheus da API da lanchonete.
"""
import re
from time import time
from typing import Callable

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Requisições HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total de requisições HTTP',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'Duração das requisições HTTP em segundos',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

http_errors_total = Counter(
    'http_errors_total',
    'Total de erros HTTP',
    ['method', 'endpoint', 'status_code']
)

active_connections = Gauge(
    'active_connections',
    'Número de conexões ativas'
)

log_messages_total = Counter(
    'log_messages_total',
    'Total de mensagens de log',
    ['level']
)

# Métricas de negócio
pedidos_criados_total = Counter(
    'pedidos_criados_total',
    'Pedidos criados',
    ['origem']
)

pedidos_status_total = Counter(
    'pedidos_status_total',
    'Transições de status de pedidos',
    ['status']
)

mesas_transicoes_total = Counter(
    'mesas_transicoes_total',
    'Mudanças de status de mesas',
    ['status']
)

_UUID_RE = re.compile(r'/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}')
_ID_RE = re.compile(r'/\d+')


def normalize_endpoint(endpoint: str) -> str:
    """
    Remove ids do path para evitar alta cardinalidade.
    Ex: /api/mesas/admin/mesas/12/status -> /api/mesas/admin/mesas/{id}/status
    """
    endpoint = _UUID_RE.sub('/{uuid}', endpoint)
    return _ID_RE.sub('/{id}', endpoint)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Coleta métricas das requisições HTTP."""

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path.endswith("/metrics"):
            return await call_next(request)

        method = request.method
        endpoint = normalize_endpoint(request.url.path)

        start_time = time()
        active_connections.inc()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(time() - start_time)
            if status_code >= 400:
                http_errors_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
            active_connections.dec()


def get_metrics():
    """Retorna as métricas no formato Prometheus."""
    return generate_latest()


def record_log(level: str):
    log_messages_total.labels(level=level).inc()


def record_pedido_criado(origem: str):
    pedidos_criados_total.labels(origem=origem).inc()


def record_pedido_status(status: str):
    pedidos_status_total.labels(status=status).inc()


def record_mesa_transicao(status: str):
    mesas_transicoes_total.labels(status=status).inc()
