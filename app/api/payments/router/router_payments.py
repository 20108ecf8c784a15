from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, status, Query, Path, Body, HTTPException, Response

from app.api.payments.schemas.schema_payment import (
    PaymentCreate,
    PaymentItemCreate,
    PaymentItemResponse,
    PaymentResponse,
)
from app.api.payments.services.dependencies import get_payment_service
from app.api.payments.services.exceptions import PaymentServiceException
from app.api.payments.services.service_payment import MSG_NOT_FOUND, PaymentService
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
)


def _bad_request(e: PaymentServiceException, not_found_as_404: bool = False) -> HTTPException:
    """Converte a exceção de domínio em HTTPException (400, ou 404 quando pedido)"""
    if not_found_as_404 and e.not_found:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


# ======================================================================
# ============================ LISTAR ==================================
@router.get("", response_model=List[PaymentResponse], status_code=status.HTTP_200_OK)
def listar_payments(
    cash_desk: Optional[int] = Query(None, alias="cashDesk", description="Filtrar pelo número do caixa"),
    date_from: Optional[date] = Query(None, alias="dateFrom", description="Pagamentos a partir desta data"),
    svc: PaymentService = Depends(get_payment_service),
):
    """
    Lista pagamentos com filtros opcionais.

    - **cashDesk**: número do caixa
    - **dateFrom**: data mínima (YYYY-MM-DD) do pagamento
    """
    payments = svc.list_payments(cash_desk=cash_desk, date_from=date_from)
    return [PaymentResponse.model_validate(p) for p in payments]


# ======================================================================
# ============================ BUSCAR POR ID ===========================
@router.get("/{payment_id}", response_model=PaymentResponse, status_code=status.HTTP_200_OK)
def get_payment(
    payment_id: int = Path(..., description="ID do pagamento"),
    svc: PaymentService = Depends(get_payment_service),
):
    payment = svc.get_payment(payment_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MSG_NOT_FOUND)
    return PaymentResponse.model_validate(payment)


# ======================================================================
# ============================ CRIAR ===================================
@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def criar_payment(
    response: Response,
    data: PaymentCreate = Body(...),
    svc: PaymentService = Depends(get_payment_service),
):
    """
    Abre um novo pagamento.

    - **cashDeskId**: número do caixa
    - **employeeId**: matrícula do funcionário
    - **paymentType**: Cash, Maestro ou CreditCard (CreditCard somente para gerentes)

    Não permite abrir um novo pagamento se o caixa já tiver um pagamento aberto.
    """
    logger.info(f"[Payment] Criar - cash_desk={data.cash_desk_id} employee={data.employee_id}")
    try:
        payment = svc.create_payment(data)
    except PaymentServiceException as e:
        raise _bad_request(e)

    response.headers["Location"] = f"{router.prefix}/{payment.id}"
    return PaymentResponse.model_validate(payment)


# ======================================================================
# ============================ CONFIRMAR ===============================
@router.patch("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def confirmar_payment(
    payment_id: int = Path(..., description="ID do pagamento a ser confirmado"),
    svc: PaymentService = Depends(get_payment_service),
):
    """Confirma (fecha) um pagamento aberto."""
    try:
        svc.confirm_payment(payment_id)
    except PaymentServiceException as e:
        raise _bad_request(e, not_found_as_404=True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ======================================================================
# ============================ ADICIONAR ITEM ==========================
@router.post("/{payment_id}/items", response_model=PaymentItemResponse, status_code=status.HTTP_201_CREATED)
def adicionar_item(
    response: Response,
    payment_id: int = Path(..., description="ID do pagamento"),
    data: PaymentItemCreate = Body(...),
    svc: PaymentService = Depends(get_payment_service),
):
    """
    Adiciona um item a um pagamento aberto.

    O **paymentId** do corpo deve ser igual ao ID da URL.
    """
    if payment_id != data.payment_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PaymentId in URL and body must match",
        )

    try:
        item = svc.add_payment_item(data)
    except PaymentServiceException as e:
        raise _bad_request(e)

    response.headers["Location"] = f"{router.prefix}/{payment_id}"
    return PaymentItemResponse.model_validate(item)


# ======================================================================
# ============================ EXCLUIR =================================
@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def deletar_payment(
    payment_id: int = Path(..., description="ID do pagamento"),
    delete_items: bool = Query(False, alias="deleteItems", description="Excluir também os itens"),
    svc: PaymentService = Depends(get_payment_service),
):
    """
    Exclui um pagamento.

    Se o pagamento tiver itens, **deleteItems=true** é obrigatório.
    """
    if not svc.get_payment(payment_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MSG_NOT_FOUND)

    logger.info(f"[Payment] Excluir - payment_id={payment_id} delete_items={delete_items}")
    try:
        svc.delete_payment(payment_id, delete_items)
    except PaymentServiceException as e:
        raise _bad_request(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
