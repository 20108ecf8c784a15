from fastapi import Depends
from sqlalchemy.orm import Session

from app.database.db_connection import get_db
from app.api.payments.services.service_payment import PaymentService


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency para obter o service de pagamentos da sessão do request"""
    return PaymentService(db)
