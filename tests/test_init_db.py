from sqlalchemy import inspect

from app.api.payments.database.initializer import PaymentsInitializer
from app.api.payments.models import CashDeskModel, EmployeeModel, EmployeeRole
from app.database.db_connection import Base, SessionLocal, engine
from app.database.domain.registry import get_registry
from app.database.init_db import verificar_banco_inicializado

import pytest


@pytest.fixture
def clean_database():
    Base.metadata.drop_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_payments_domain_is_registered():
    initializer = get_registry().get("payments")

    assert isinstance(initializer, PaymentsInitializer)


def test_initialize_creates_tables(clean_database):
    assert verificar_banco_inicializado() is False

    PaymentsInitializer(seed=False).initialize()

    tables = set(inspect(engine).get_table_names())
    assert {"cash_desks", "employees", "payments", "payment_items"} <= tables
    assert verificar_banco_inicializado() is True


def test_initialize_with_seed_is_idempotent(clean_database):
    initializer = PaymentsInitializer(seed=True)

    initializer.initialize()
    initializer.initialize()

    db = SessionLocal()
    try:
        assert db.query(CashDeskModel).count() == 3
        roles = {e.registration_number: e.role for e in db.query(EmployeeModel).all()}
        assert roles == {1001: EmployeeRole.MANAGER, 1002: EmployeeRole.CASHIER}
    finally:
        db.close()
