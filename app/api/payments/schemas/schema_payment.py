from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.api.payments.models.model_employee import EmployeeRole
from app.api.payments.models.model_payment import PaymentType


class CamelModel(BaseModel):
    """Base dos schemas do domínio: JSON em camelCase, atributos em snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ======================================================================
# ============================ REQUESTS ================================

class PaymentCreate(CamelModel):
    """Schema para abrir um novo pagamento"""
    cash_desk_id: int = Field(..., description="Número do caixa")
    employee_id: int = Field(..., description="Matrícula do funcionário")
    # Validado no service para devolver 400 "Invalid payment type"
    payment_type: str = Field(..., description="Cash, Maestro ou CreditCard")


class PaymentItemCreate(CamelModel):
    """Schema para adicionar um item a um pagamento aberto"""
    payment_id: int = Field(..., description="ID do pagamento (deve ser igual ao da URL)")
    article_name: str = Field(..., min_length=1, max_length=255, description="Nome do artigo")
    amount: int = Field(..., gt=0, description="Quantidade")
    price: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2, description="Preço unitário")


# ======================================================================
# ============================ RESPONSES ===============================

class CashDeskResponse(CamelModel):
    number: int


class EmployeeResponse(CamelModel):
    registration_number: int
    first_name: str
    last_name: str
    role: EmployeeRole


class PaymentItemResponse(CamelModel):
    id: int
    article_name: str
    amount: int
    price: Decimal


class PaymentResponse(CamelModel):
    """Schema de resposta para pagamento"""
    id: int
    payment_datetime: datetime = Field(..., alias="paymentDateTime")
    confirmed: Optional[datetime] = None
    payment_type: PaymentType
    cash_desk: CashDeskResponse
    employee: EmployeeResponse
    items: List[PaymentItemResponse] = Field(default_factory=list, alias="paymentItems")
    total: Decimal = Decimal("0")
