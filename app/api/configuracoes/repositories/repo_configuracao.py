import json
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.api.configuracoes.models.model_configuracao import ConfiguracaoModel


class ConfiguracaoRepository:
    def __init__(self, db: Session):
        self.db = db

    def buscar_por_chave(self, chave: str) -> Optional[ConfiguracaoModel]:
        return self.db.query(ConfiguracaoModel).filter(ConfiguracaoModel.chave == chave).first()

    def listar(self, categoria: Optional[str] = None) -> List[ConfiguracaoModel]:
        query = self.db.query(ConfiguracaoModel)
        if categoria:
            query = query.filter(ConfiguracaoModel.categoria == categoria)
        return query.order_by(ConfiguracaoModel.categoria, ConfiguracaoModel.chave).all()

    def upsert(self, *, chave: str, valor: Any, categoria: str, descricao: Optional[str]) -> ConfiguracaoModel:
        valor_json = json.dumps(valor, ensure_ascii=False)
        config = self.buscar_por_chave(chave)
        if config:
            config.valor = valor_json
            if descricao is not None:
                config.descricao = descricao
        else:
            config = ConfiguracaoModel(chave=chave, valor=valor_json, categoria=categoria, descricao=descricao)
            self.db.add(config)
        self.db.flush()
        return config

    def deletar(self, config: ConfiguracaoModel):
        self.db.delete(config)
        self.db.flush()
