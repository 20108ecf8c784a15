from typing import Optional
from sqlalchemy.orm import Session

from app.api.payments.models.model_cash_desk import CashDeskModel


class CashDeskRepository:
    """Repository de caixas"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_number(self, number: int, for_update: bool = False) -> Optional[CashDeskModel]:
        """Busca um caixa pelo número; `for_update` trava a linha até o fim da transação"""
        query = self.db.query(CashDeskModel).filter(CashDeskModel.number == number)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def create(self, number: int) -> CashDeskModel:
        cash_desk = CashDeskModel(number=number)
        self.db.add(cash_desk)
        self.db.flush()
        return cash_desk
