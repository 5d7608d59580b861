from fastapi import APIRouter, Depends

from app.api.entrega.adapters.google_maps_adapter import GoogleMapsAdapter, get_google_maps_adapter
from app.api.entrega.schemas.schema_entrega import CalcularTaxaRequest, CalcularTaxaResponse
from app.api.entrega.services.service_taxa_entrega import TaxaEntregaService

router = APIRouter(
    prefix="/api/entrega",
    tags=["Public - Entrega"],
)


@router.post("/calcular-taxa", response_model=CalcularTaxaResponse)
def calcular_taxa_entrega(
    body: CalcularTaxaRequest,
    adapter: GoogleMapsAdapter = Depends(get_google_maps_adapter),
):
    return TaxaEntregaService(adapter).calcular(body)
