from decimal import Decimal

from app.api.entrega.adapters.google_maps_adapter import get_google_maps_adapter
from app.api.entrega.services.service_taxa_entrega import calcular_taxa

URL = "/api/entrega/calcular-taxa"


class MockAdapter:
    def __init__(self, api_key: str = "fake", distancia_metros: int = 3500):
        self.api_key = api_key
        self.distancia_metros = distancia_metros
        self.chamadas = []

    def calcular_distancia(self, origem: str, destino: str, mode: str = "driving"):
        self.chamadas.append((origem, destino))
        if self.distancia_metros is None:
            return None
        return {"distancia_metros": self.distancia_metros, "duracao_segundos": 600}


def _usar(client, adapter):
    client.app.dependency_overrides[get_google_maps_adapter] = lambda: adapter


def test_sem_api_key_retorna_503(client):
    resp = client.post(URL, json={"origem": "Rua A, 1", "destino": "Rua B, 2"})
    assert resp.status_code == 503, resp.text


def test_origem_vazia_retorna_400(client):
    adapter = MockAdapter()
    _usar(client, adapter)
    resp = client.post(URL, json={"origem": "   ", "destino": "Rua B, 2"})
    assert resp.status_code == 400, resp.text
    assert adapter.chamadas == []


def test_distancia_indisponivel_retorna_400(client):
    _usar(client, MockAdapter(distancia_metros=None))
    resp = client.post(URL, json={"origem": "Rua A, 1", "destino": "Rua B, 2"})
    assert resp.status_code == 400, resp.text


def test_calcula_taxa_por_km(client):
    adapter = MockAdapter(distancia_metros=3500)
    _usar(client, adapter)
    resp = client.post(URL, json={"origem": " Rua A, 1 ", "destino": "Rua B, 2"})
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"distancia_metros": 3500, "duracao_segundos": 600, "taxa": 10.0}
    assert adapter.chamadas == [("Rua A, 1", "Rua B, 2")]


def test_ate_um_km_cobra_taxa_base(client):
    _usar(client, MockAdapter(distancia_metros=800))
    resp = client.post(URL, json={"origem": "Rua A, 1", "destino": "Rua B, 2"})
    assert resp.json()["taxa"] == 5.0


def test_calcular_taxa():
    assert calcular_taxa(0, base=5, por_km=2) == Decimal("5.00")
    assert calcular_taxa(1000, base=5, por_km=2) == Decimal("5.00")
    assert calcular_taxa(2250, base=5, por_km=2) == Decimal("7.50")
    assert calcular_taxa(1333, base=4, por_km=1.5) == Decimal("4.50")
