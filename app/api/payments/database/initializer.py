"""
Inicializador do domínio Payments.
Responsável por criar as tabelas do domínio e, opcionalmente, os dados de demonstração.
"""
import logging

from app.config.settings import SEED_DEMO_DATA
from app.database.db_connection import SessionLocal
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.payments.models import CashDeskModel, EmployeeModel, EmployeeRole, PaymentModel, PaymentItemModel
from app.api.payments.repositories.repo_cash_desk import CashDeskRepository
from app.api.payments.repositories.repo_employee import EmployeeRepository

logger = logging.getLogger(__name__)

DEMO_CASH_DESKS = [1, 2, 3]
DEMO_EMPLOYEES = [
    {"registration_number": 1001, "first_name": "Manager", "last_name": "Demo", "role": EmployeeRole.MANAGER},
    {"registration_number": 1002, "first_name": "Cashier", "last_name": "Demo", "role": EmployeeRole.CASHIER},
]


def seed_demo_data(db) -> int:
    """Cria os caixas e funcionários de demonstração que ainda não existem; retorna quantos foram criados"""
    repo_cash_desk = CashDeskRepository(db)
    repo_employee = EmployeeRepository(db)
    created = 0

    for number in DEMO_CASH_DESKS:
        if not repo_cash_desk.get_by_number(number):
            repo_cash_desk.create(number)
            created += 1

    for employee in DEMO_EMPLOYEES:
        if not repo_employee.get_by_registration_number(employee["registration_number"]):
            repo_employee.create(**employee)
            created += 1

    db.commit()
    return created


class PaymentsInitializer(DomainInitializer):
    """Inicializador do domínio Payments."""

    def __init__(self, seed: bool = SEED_DEMO_DATA):
        self.seed = seed

    def get_domain_name(self) -> str:
        return "payments"

    def get_models(self):
        return [CashDeskModel, EmployeeModel, PaymentModel, PaymentItemModel]

    def initialize_data(self) -> None:
        if not self.seed:
            return

        db = SessionLocal()
        try:
            created = seed_demo_data(db)
            logger.info(f"🌱 Dados de demonstração: {created} registro(s) criado(s)")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


# Cria e registra a instância do inicializador
_payments_initializer = PaymentsInitializer()
register_domain(_payments_initializer)
