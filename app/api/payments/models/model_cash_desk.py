# app/api/payments/models/model_cash_desk.py
from sqlalchemy import Column, Integer
from sqlalchemy.orm import relationship

from app.database.db_connection import Base


class CashDeskModel(Base):
    __tablename__ = "cash_desks"

    number = Column(Integer, primary_key=True, autoincrement=False)

    payments = relationship("PaymentModel", back_populates="cash_desk")
