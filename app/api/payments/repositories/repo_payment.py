from datetime import date, datetime, time
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload, selectinload

from app.api.payments.models.model_payment import PaymentModel
from app.api.payments.models.model_payment_item import PaymentItemModel


class PaymentRepository:
    """
    Repository de pagamentos.

    Apenas faz flush; commit/rollback ficam com o service, que trata cada
    operação como uma única transação.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return (
            self.db.query(PaymentModel)
            .options(
                joinedload(PaymentModel.cash_desk),
                joinedload(PaymentModel.employee),
                selectinload(PaymentModel.items),
            )
        )

    def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[PaymentModel]:
        """Busca um pagamento por ID com caixa, funcionário e itens"""
        query = self._query().filter(PaymentModel.id == payment_id)
        if for_update:
            query = query.with_for_update(of=PaymentModel)
        return query.first()

    def list(
        self,
        cash_desk: Optional[int] = None,
        date_from: Optional[date] = None,
    ) -> List[PaymentModel]:
        """Lista pagamentos filtrando por número do caixa e data mínima"""
        query = self._query()

        if cash_desk is not None:
            query = query.filter(PaymentModel.cash_desk_number == cash_desk)

        if date_from is not None:
            query = query.filter(PaymentModel.payment_datetime >= datetime.combine(date_from, time.min))

        return query.order_by(PaymentModel.payment_datetime.asc(), PaymentModel.id.asc()).all()

    def get_open_by_cash_desk(self, cash_desk_number: int) -> Optional[PaymentModel]:
        return (
            self.db.query(PaymentModel)
            .filter(
                PaymentModel.cash_desk_number == cash_desk_number,
                PaymentModel.confirmed.is_(None),
            )
            .first()
        )

    def create(self, **data) -> PaymentModel:
        payment = PaymentModel(**data)
        self.db.add(payment)
        self.db.flush()
        return payment

    def add_item(self, payment: PaymentModel, **data) -> PaymentItemModel:
        item = PaymentItemModel(**data)
        payment.items.append(item)
        self.db.flush()
        return item

    def delete_items(self, payment: PaymentModel) -> int:
        """Remove todos os itens do pagamento; retorna quantos foram removidos"""
        items = list(payment.items)
        for item in items:
            payment.items.remove(item)
        self.db.flush()
        return len(items)

    def delete(self, payment: PaymentModel) -> None:
        self.db.delete(payment)
        self.db.flush()
