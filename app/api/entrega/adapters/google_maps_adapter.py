from typing import Optional, Dict

import httpx

from app.config import settings
from app.utils.logger import logger


class GoogleMapsAdapter:
    """Adapter para a Distance Matrix API do Google Maps."""

    DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key or settings.GOOGLE_MAPS_API_KEY
        self.timeout = timeout or settings.GOOGLE_MAPS_TIMEOUT_SECONDS

    def calcular_distancia(self, origem: str, destino: str, mode: str = "driving") -> Optional[Dict[str, int]]:
        """
        Consulta distância e duração entre dois endereços em texto.

        Returns:
            {"distancia_metros": int, "duracao_segundos": int} ou None se não conseguir calcular
        """
        if not self.api_key:
            logger.warning("[GoogleMapsAdapter] API key não configurada")
            return None

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(
                    self.DISTANCE_MATRIX_URL,
                    params={
                        "origins": origem,
                        "destinations": destino,
                        "mode": mode,
                        "key": self.api_key,
                        "language": "pt-BR",
                        "units": "metric",
                    },
                )
            response.raise_for_status()
            data = response.json()

            rows = data.get("rows") or []
            elements = (rows[0].get("elements") or []) if rows else []
            if data.get("status") != "OK" or not elements:
                logger.warning(
                    f"[GoogleMapsAdapter] Erro ao calcular distância: {data.get('status')} "
                    f"{data.get('error_message', '')}"
                )
                return None

            element = elements[0]
            if element.get("status") != "OK":
                logger.warning(f"[GoogleMapsAdapter] Erro no elemento de distância: {element.get('status')}")
                return None

            return {
                "distancia_metros": int(element.get("distance", {}).get("value") or 0),
                "duracao_segundos": int(element.get("duration", {}).get("value") or 0),
            }
        except httpx.HTTPStatusError as e:
            logger.error(f"[GoogleMapsAdapter] Erro HTTP ao calcular distância: Status {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"[GoogleMapsAdapter] Erro ao calcular distância para '{origem}' -> '{destino}': {e}")
            return None


def get_google_maps_adapter() -> GoogleMapsAdapter:
    return GoogleMapsAdapter()
