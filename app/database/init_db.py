"""
Inicialização do banco usando o sistema de domínios.
"""
import logging

# Importa os inicializadores de domínios para garantir registro automático
from app.api.payments.database import PaymentsInitializer  # noqa: F401

from app.database.domain.orchestrator import DatabaseOrchestrator, inicializar_banco

logger = logging.getLogger(__name__)

__all__ = ["inicializar_banco", "verificar_banco_inicializado"]


def verificar_banco_inicializado() -> bool:
    return DatabaseOrchestrator().verificar_banco_inicializado()


if __name__ == "__main__":
    inicializar_banco()
