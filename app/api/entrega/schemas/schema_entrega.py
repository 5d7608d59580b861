from pydantic import BaseModel, Field


class CalcularTaxaRequest(BaseModel):
    origem: str = Field("", max_length=500, description="Endereço de origem em texto")
    destino: str = Field("", max_length=500, description="Endereço de destino em texto")


class CalcularTaxaResponse(BaseModel):
    distancia_metros: int
    duracao_segundos: int
    taxa: float
