"""
Orquestrador central de inicialização do banco de dados.
"""
import logging

from sqlalchemy import inspect

from .registry import get_registry
from ..db_connection import engine

logger = logging.getLogger(__name__)


class DatabaseOrchestrator:
    """
    Coordena a inicialização de todos os domínios registrados.
    """

    def __init__(self):
        self.registry = get_registry()

    def verificar_banco_inicializado(self) -> bool:
        """True quando todas as tabelas dos domínios registrados já existem."""
        existentes = set(inspect(engine).get_table_names())
        esperadas = {
            model.__tablename__
            for initializer in self.registry.get_all()
            for model in initializer.get_models()
        }
        return bool(esperadas) and esperadas <= existentes

    def inicializar_dominios(self) -> None:
        initializers = self.registry.get_all()

        if not initializers:
            logger.warning("⚠️ Nenhum domínio registrado para inicialização.")
            return

        logger.info(f"📦 Inicializando {len(initializers)} domínio(s)...")

        for initializer in initializers:
            initializer.initialize()

    def initialize(self) -> None:
        logger.info("🚀 Iniciando processo de inicialização do banco de dados...")

        try:
            self.inicializar_dominios()
            logger.info("✅ Banco inicializado com sucesso.")
        except Exception as e:
            logger.error(f"❌ Erro durante inicialização do banco: {e}", exc_info=True)
            raise


def inicializar_banco():
    """Função de conveniência para inicializar o banco."""
    DatabaseOrchestrator().initialize()
