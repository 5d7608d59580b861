"""
Classe base para inicializadores de domínio.
"""
from abc import ABC, abstractmethod
from typing import List
import logging

logger = logging.getLogger(__name__)


class DomainInitializer(ABC):
    """
    Cada domínio informa seu nome e os models cujas tabelas possui;
    `initialize` cria essas tabelas no startup (checkfirst, sem migrações).
    """

    @abstractmethod
    def get_domain_name(self) -> str:
        pass

    @abstractmethod
    def get_models(self) -> List[type]:
        pass

    def initialize(self, engine, db) -> None:
        from app.database.db_connection import Base

        nome = self.get_domain_name()
        tables = [model.__table__ for model in self.get_models()]
        if not tables:
            logger.warning(f"Domínio '{nome}' não declarou tabelas.")
            return

        try:
            Base.metadata.create_all(bind=engine, tables=tables, checkfirst=True)
        except Exception as e:
            logger.error(f"Erro ao criar tabelas do domínio {nome}: {e}", exc_info=True)
            raise
        logger.info(f"Domínio {nome} inicializado ({len(tables)} tabela(s)).")
