"""
Registro dos inicializadores de domínio da lanchonete.

Cada pacote `app/api/<dominio>/database/initializer.py` se registra ao ser
importado; `init_db.inicializar_banco` percorre os domínios na ordem em que
foram registrados, o que garante que as tabelas referenciadas por FK
(usuários, catálogo) existam antes de mesas e pedidos.
"""
from typing import List, Dict
import logging

from .base import DomainInitializer

logger = logging.getLogger(__name__)


class DomainRegistry:
    def __init__(self):
        self._initializers: Dict[str, DomainInitializer] = {}

    def register(self, initializer: DomainInitializer) -> None:
        nome = initializer.get_domain_name()
        if nome in self._initializers:
            # Reimportação do módulo (ex.: reload em dev) mantém a posição original
            logger.warning(f"Domínio '{nome}' registrado novamente, substituindo inicializador")
        self._initializers[nome] = initializer
        logger.debug(f"Domínio '{nome}' registrado")

    def get_all(self) -> List[DomainInitializer]:
        return list(self._initializers.values())

    def nomes(self) -> List[str]:
        return list(self._initializers)

    def count(self) -> int:
        return len(self._initializers)


_registry = DomainRegistry()


def register_domain(initializer: DomainInitializer) -> None:
    _registry.register(initializer)


def get_registry() -> DomainRegistry:
    return _registry
