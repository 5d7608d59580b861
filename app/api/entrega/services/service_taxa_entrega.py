from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from fastapi import HTTPException, status

from app.api.entrega.adapters.google_maps_adapter import GoogleMapsAdapter
from app.api.entrega.schemas.schema_entrega import CalcularTaxaRequest, CalcularTaxaResponse
from app.config import settings
from app.utils.logger import logger


def calcular_taxa(distancia_metros: int, base: Optional[float] = None, por_km: Optional[float] = None) -> Decimal:
    """taxa = max(base, base + max(0, km - 1) * por_km), com 2 casas."""
    base = Decimal(str(settings.DELIVERY_BASE_FEE if base is None else base))
    por_km = Decimal(str(settings.DELIVERY_FEE_PER_KM if por_km is None else por_km))
    km = Decimal(distancia_metros) / Decimal(1000)
    taxa = max(base, base + max(Decimal(0), km - 1) * por_km)
    return taxa.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class TaxaEntregaService:
    def __init__(self, adapter: GoogleMapsAdapter):
        self.adapter = adapter

    def calcular(self, req: CalcularTaxaRequest) -> CalcularTaxaResponse:
        if not self.adapter.api_key:
            raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "API key do Google Maps não configurada")

        origem = (req.origem or "").strip()
        destino = (req.destino or "").strip()
        if not origem or not destino:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Origem e destino são obrigatórios")

        resultado = self.adapter.calcular_distancia(origem, destino)
        if not resultado:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Não foi possível calcular a distância")

        taxa = calcular_taxa(resultado["distancia_metros"])
        logger.info(
            f"[Entrega] Taxa calculada - distancia={resultado['distancia_metros']}m, taxa={taxa}"
        )
        return CalcularTaxaResponse(
            distancia_metros=resultado["distancia_metros"],
            duracao_segundos=resultado["duracao_segundos"],
            taxa=float(taxa),
        )
