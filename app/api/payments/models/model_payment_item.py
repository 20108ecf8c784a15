# app/api/payments/models/model_payment_item.py
from decimal import Decimal
from sqlalchemy import Column, Integer, Numeric, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base


class PaymentItemModel(Base):
    __tablename__ = "payment_items"
    __table_args__ = (
        Index("idx_payment_item_payment", "payment_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    payment_id = Column(Integer, ForeignKey("payments.id", ondelete="RESTRICT"), nullable=False)
    payment = relationship("PaymentModel", back_populates="items")

    article_name = Column(String(255), nullable=False)
    amount = Column(Integer, nullable=False)  # Quantidade
    price = Column(Numeric(18, 2), nullable=False)  # Preço unitário

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.amount or 0) * Decimal(self.price or 0)
