"""
Classe base abstrata para inicializadores de domínio.
"""
from abc import ABC, abstractmethod
from typing import List, Type
import logging

logger = logging.getLogger(__name__)


class DomainInitializer(ABC):
    """
    Classe base para inicializadores de domínio.

    Cada domínio cria uma subclasse informando seu nome e os models
    cujas tabelas ele possui.
    """

    @abstractmethod
    def get_domain_name(self) -> str:
        """
        Retorna o nome do domínio (para logging e identificação).

        Returns:
            str: Nome do domínio (ex: "payments")
        """

    @abstractmethod
    def get_models(self) -> List[Type]:
        """
        Retorna os models declarativos do domínio, em ordem de dependência.
        """

    def initialize_tables(self) -> None:
        """
        Cria as tabelas do domínio (checkfirst: tabelas existentes são mantidas).
        """
        from app.database.db_connection import engine, Base

        tables = [model.__table__ for model in self.get_models()]
        if not tables:
            logger.warning(f"⚠️ Nenhuma tabela encontrada para o domínio '{self.get_domain_name()}'.")
            return

        logger.info(f"📋 Criando {len(tables)} tabela(s) do domínio {self.get_domain_name()}...")
        Base.metadata.create_all(bind=engine, tables=tables, checkfirst=True)
        for table in tables:
            logger.info(f"  ✅ Tabela {table.name} criada/verificada")

    def initialize_data(self) -> None:
        """
        Popula dados iniciais do domínio (opcional).
        """

    def validate(self) -> bool:
        """
        Valida se o domínio foi inicializado corretamente (opcional).
        """
        return True

    def initialize(self) -> None:
        """
        Método principal de inicialização chamado pelo orquestrador.
        """
        logger.info(f"🏗️ Inicializando domínio {self.get_domain_name()}...")

        try:
            self.initialize_tables()
            self.initialize_data()

            if self.validate():
                logger.info(f"✅ Domínio {self.get_domain_name()} inicializado com sucesso.")
            else:
                logger.warning(f"⚠️ Domínio {self.get_domain_name()} inicializado, mas validação falhou.")
        except Exception as e:
            logger.error(f"❌ Erro ao inicializar domínio {self.get_domain_name()}: {e}", exc_info=True)
            raise
