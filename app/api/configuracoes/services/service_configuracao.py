from copy import deepcopy
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.configuracoes.repositories.repo_configuracao import ConfiguracaoRepository
from app.api.configuracoes.schemas.schema_configuracao import (
    ConfiguracaoRequest,
    ConfiguracaoResponse,
)
from app.utils.logger import logger

CONFIGURACOES_PUBLICAS_PADRAO: Dict[str, Any] = {
    "restaurantName": "Lanchonete Next",
    "restaurantDescription": "Deliciosos lanches e refeições",
    "deliveryEnabled": True,
    "deliveryFee": 5.00,
    "minOrderValue": 15.00,
    "estimatedDeliveryTime": 30,
    "workingHours": {
        "monday": {"open": "08:00", "close": "22:00", "closed": False},
        "tuesday": {"open": "08:00", "close": "22:00", "closed": False},
        "wednesday": {"open": "08:00", "close": "22:00", "closed": False},
        "thursday": {"open": "08:00", "close": "22:00", "closed": False},
        "friday": {"open": "08:00", "close": "23:00", "closed": False},
        "saturday": {"open": "09:00", "close": "23:00", "closed": False},
        "sunday": {"open": "09:00", "close": "21:00", "closed": False},
    },
    "paymentMethods": ["DINHEIRO", "CARTAO", "PIX"],
    "contactInfo": {
        "phone": "(11) 99999-9999",
        "email": "contato@lanchonete.com",
        "address": "Rua das Delícias, 123 - Centro",
    },
}


class ConfiguracaoService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ConfiguracaoRepository(db)

    def listar_agrupadas(self, categoria: Optional[str] = None) -> Dict[str, Dict[str, ConfiguracaoResponse]]:
        agrupadas: Dict[str, Dict[str, ConfiguracaoResponse]] = {}
        for config in self.repo.listar(categoria):
            agrupadas.setdefault(config.categoria, {})[config.chave] = ConfiguracaoResponse.model_validate(config)
        return agrupadas

    def salvar(self, req: ConfiguracaoRequest) -> ConfiguracaoResponse:
        config = self.repo.upsert(**req.model_dump())
        self.db.commit()
        self.db.refresh(config)
        logger.info(f"[Configuracoes] Configuração salva - chave={config.chave}")
        return ConfiguracaoResponse.model_validate(config)

    def salvar_lote(self, itens: List[ConfiguracaoRequest]) -> List[ConfiguracaoResponse]:
        configs = [self.repo.upsert(**req.model_dump()) for req in itens]
        self.db.commit()
        for config in configs:
            self.db.refresh(config)
        logger.info(f"[Configuracoes] {len(configs)} configurações salvas em lote")
        return [ConfiguracaoResponse.model_validate(c) for c in configs]

    def deletar(self, chave: str) -> None:
        config = self.repo.buscar_por_chave(chave)
        if not config:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Configuração não encontrada")
        self.repo.deletar(config)
        self.db.commit()
        logger.info(f"[Configuracoes] Configuração removida - chave={chave}")

    def publicas(self) -> Dict[str, Any]:
        """Padrões sobrescritos pelos valores salvos de mesma chave."""
        resultado = deepcopy(CONFIGURACOES_PUBLICAS_PADRAO)
        for config in self.repo.listar():
            if config.chave in resultado:
                resultado[config.chave] = config.valor_decodificado
        return resultado
