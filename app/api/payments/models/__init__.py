from .model_cash_desk import CashDeskModel
from .model_employee import EmployeeModel, EmployeeRole
from .model_payment import PaymentModel, PaymentType
from .model_payment_item import PaymentItemModel

__all__ = [
    "CashDeskModel",
    "EmployeeModel",
    "EmployeeRole",
    "PaymentModel",
    "PaymentType",
    "PaymentItemModel",
]
