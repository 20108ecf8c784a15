# app/api/payments/models/model_payment.py
from decimal import Decimal
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum as SAEnum, Index, text
from sqlalchemy.orm import relationship
import enum

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class PaymentType(str, enum.Enum):
    """Formas de pagamento aceitas no caixa"""
    CASH = "Cash"
    MAESTRO = "Maestro"
    CREDIT_CARD = "CreditCard"

    @classmethod
    def _missing_(cls, value):
        if value is None:
            return None
        normalized = str(value).strip().replace("_", "").replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


class PaymentModel(Base):
    __tablename__ = "payments"
    __table_args__ = (
        Index("idx_payment_cash_desk", "cash_desk_number"),
        Index("idx_payment_datetime", "payment_datetime"),
        # No máximo um pagamento aberto (confirmed IS NULL) por caixa
        Index(
            "uq_payment_open_per_cash_desk",
            "cash_desk_number",
            unique=True,
            postgresql_where=text("confirmed IS NULL"),
            sqlite_where=text("confirmed IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Relacionamentos
    cash_desk_number = Column(Integer, ForeignKey("cash_desks.number", ondelete="RESTRICT"), nullable=False)
    cash_desk = relationship("CashDeskModel", back_populates="payments")

    employee_registration_number = Column(
        Integer, ForeignKey("employees.registration_number", ondelete="RESTRICT"), nullable=False
    )
    employee = relationship("EmployeeModel", back_populates="payments")

    payment_type = Column(
        SAEnum(
            PaymentType,
            name="payment_type_enum",
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )

    # Datas
    payment_datetime = Column(DateTime, default=now_trimmed, nullable=False)
    confirmed = Column(DateTime, nullable=True)  # NULL enquanto o pagamento estiver aberto

    # Itens só são removidos junto com o pagamento quando o service pede explicitamente
    items = relationship(
        "PaymentItemModel",
        back_populates="payment",
        cascade="all, delete-orphan",
        order_by="PaymentItemModel.id",
    )

    @property
    def is_open(self) -> bool:
        return self.confirmed is None

    @property
    def total(self) -> Decimal:
        """Soma de quantidade * preço dos itens"""
        return sum((item.subtotal for item in self.items), Decimal("0"))
