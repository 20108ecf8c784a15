"""
Registry de inicializadores de domínio.
"""
from typing import List, Dict, Optional
import logging

from .base import DomainInitializer

logger = logging.getLogger(__name__)


class DomainRegistry:
    """
    Registry central para inicializadores de domínio (instância única global).
    """
    _instance: Optional['DomainRegistry'] = None
    _initializers: Dict[str, DomainInitializer] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def register(self, initializer: DomainInitializer) -> None:
        """Registra (ou substitui) o inicializador de um domínio."""
        domain_name = initializer.get_domain_name()

        if domain_name in self._initializers:
            logger.warning(f"⚠️ Domínio '{domain_name}' já está registrado. Substituindo...")

        self._initializers[domain_name] = initializer
        logger.debug(f"📝 Domínio '{domain_name}' registrado no registry")

    def get(self, domain_name: str) -> Optional[DomainInitializer]:
        return self._initializers.get(domain_name)

    def get_all(self) -> List[DomainInitializer]:
        """Retorna todos os inicializadores na ordem de registro."""
        return list(self._initializers.values())

    def clear(self) -> None:
        """Limpa o registry (útil para testes)."""
        self._initializers.clear()

    def count(self) -> int:
        return len(self._initializers)


# Instância global do registry
_registry = DomainRegistry()


def register_domain(initializer: DomainInitializer) -> None:
    _registry.register(initializer)


def get_registry() -> DomainRegistry:
    return _registry
