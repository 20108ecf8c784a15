import os
import tempfile

# Banco SQLite em memória e logs em diretório temporário antes de importar o app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="payments-logs-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.database.db_connection import Base, SessionLocal, engine, get_db  # noqa: E402
from app.api.payments.models import CashDeskModel, EmployeeModel, EmployeeRole  # noqa: E402
from app.api.payments.services.service_payment import PaymentService  # noqa: E402

MANAGER_ID = 1001
CASHIER_ID = 1002


@pytest.fixture
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    """Sessão com caixas 1 e 2, um gerente (1001) e um operador de caixa (1002)"""
    session = SessionLocal()
    session.add_all([
        CashDeskModel(number=1),
        CashDeskModel(number=2),
        EmployeeModel(registration_number=MANAGER_ID, first_name="Manager", last_name="Test", role=EmployeeRole.MANAGER),
        EmployeeModel(registration_number=CASHIER_ID, first_name="Cashier", last_name="Test", role=EmployeeRole.CASHIER),
    ])
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service(db) -> PaymentService:
    return PaymentService(db)


@pytest.fixture
def client(db):
    def override_get_db():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
