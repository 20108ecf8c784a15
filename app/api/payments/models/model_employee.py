# app/api/payments/models/model_employee.py
from sqlalchemy import Column, Integer, String, Enum as SAEnum
from sqlalchemy.orm import relationship
import enum

from app.database.db_connection import Base


class EmployeeRole(str, enum.Enum):
    """Funções possíveis de um funcionário do caixa"""
    MANAGER = "Manager"
    CASHIER = "Cashier"

    @property
    def can_authorize_credit_card(self) -> bool:
        """Somente gerentes podem abrir pagamentos com cartão de crédito"""
        return self is EmployeeRole.MANAGER


class EmployeeModel(Base):
    __tablename__ = "employees"

    registration_number = Column(Integer, primary_key=True, autoincrement=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        SAEnum(
            EmployeeRole,
            name="employee_role_enum",
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )

    payments = relationship("PaymentModel", back_populates="employee")
