from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.payments.models.model_payment import PaymentModel, PaymentType
from app.api.payments.models.model_payment_item import PaymentItemModel
from app.api.payments.repositories.repo_cash_desk import CashDeskRepository
from app.api.payments.repositories.repo_employee import EmployeeRepository
from app.api.payments.repositories.repo_payment import PaymentRepository
from app.api.payments.schemas.schema_payment import PaymentCreate, PaymentItemCreate
from app.api.payments.services.exceptions import PaymentServiceException
from app.utils.database_utils import now_trimmed
from app.utils.logger import logger

MSG_INVALID_CASH_DESK = "Invalid cash desk"
MSG_INVALID_EMPLOYEE = "Invalid employee"
MSG_INVALID_PAYMENT_TYPE = "Invalid payment type"
MSG_OPEN_PAYMENT = "Open payment for cashdesk"
MSG_INSUFFICIENT_RIGHTS = "Insufficient rights to create a credit card payment."
MSG_NOT_FOUND = "Payment not found"
MSG_ALREADY_CONFIRMED = "Payment already confirmed."
MSG_HAS_ITEMS = "Payment has items. Set deleteItems to true to delete them as well."


class PaymentService:
    """
    Regras do ciclo de vida do pagamento: abrir, adicionar itens, confirmar e excluir.

    Cada operação de escrita é uma única transação: as validações e a gravação
    são confirmadas juntas, e qualquer falha faz rollback antes de propagar.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = now_trimmed):
        self.db = db
        self.clock = clock
        self.repo = PaymentRepository(db)
        self.repo_cash_desk = CashDeskRepository(db)
        self.repo_employee = EmployeeRepository(db)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def _reject(message: str, not_found: bool = False, **context) -> PaymentServiceException:
        details = " ".join(f"{k}={v}" for k, v in context.items())
        logger.warning(f"[Payment] Rejeitado: {message} {details}".rstrip())
        return PaymentServiceException(message, not_found=not_found)

    def _open_payment_or_fail(self, payment_id: int) -> PaymentModel:
        """Busca (travando a linha) um pagamento que ainda esteja aberto"""
        payment = self.repo.get_by_id(payment_id, for_update=True)
        if not payment:
            raise self._reject(MSG_NOT_FOUND, not_found=True, payment_id=payment_id)
        if not payment.is_open:
            raise self._reject(MSG_ALREADY_CONFIRMED, payment_id=payment_id)
        return payment

    # -------- Leitura --------
    def get_payment(self, payment_id: int) -> Optional[PaymentModel]:
        return self.repo.get_by_id(payment_id)

    def list_payments(
        self,
        cash_desk: Optional[int] = None,
        date_from: Optional[date] = None,
    ) -> List[PaymentModel]:
        return self.repo.list(cash_desk=cash_desk, date_from=date_from)

    # -------- Escrita --------
    def create_payment(self, data: PaymentCreate) -> PaymentModel:
        """Abre um novo pagamento para o caixa"""
        with self._transaction():
            # Trava o caixa: verificação de pagamento aberto e insert ficam serializados
            cash_desk = self.repo_cash_desk.get_by_number(data.cash_desk_id, for_update=True)
            if not cash_desk:
                raise self._reject(MSG_INVALID_CASH_DESK, cash_desk=data.cash_desk_id)

            employee = self.repo_employee.get_by_registration_number(data.employee_id)
            if not employee:
                raise self._reject(MSG_INVALID_EMPLOYEE, employee=data.employee_id)

            try:
                payment_type = PaymentType(data.payment_type)
            except ValueError:
                raise self._reject(MSG_INVALID_PAYMENT_TYPE, payment_type=data.payment_type)

            if self.repo.get_open_by_cash_desk(cash_desk.number):
                raise self._reject(MSG_OPEN_PAYMENT, cash_desk=cash_desk.number)

            if payment_type is PaymentType.CREDIT_CARD and not employee.role.can_authorize_credit_card:
                raise self._reject(
                    MSG_INSUFFICIENT_RIGHTS,
                    employee=employee.registration_number,
                    role=employee.role.value,
                )

            try:
                payment = self.repo.create(
                    cash_desk=cash_desk,
                    employee=employee,
                    payment_type=payment_type,
                    payment_datetime=self.clock(),
                )
            except IntegrityError as e:
                # Índice único parcial: outro request abriu um pagamento neste caixa.
                # A sessão fica pendente de rollback, não acessar atributos do ORM aqui
                raise self._reject(MSG_OPEN_PAYMENT, cash_desk=data.cash_desk_id) from e

        logger.info(
            f"[Payment] Criado payment_id={payment.id} cash_desk={data.cash_desk_id} "
            f"employee={data.employee_id} type={payment_type.value}"
        )
        return payment

    def confirm_payment(self, payment_id: int) -> PaymentModel:
        """Fecha o pagamento; depois disso ele não pode mais ser alterado"""
        with self._transaction():
            payment = self._open_payment_or_fail(payment_id)
            payment.confirmed = self.clock()
            self.db.flush()

        logger.info(f"[Payment] Confirmado payment_id={payment_id}")
        return payment

    def add_payment_item(self, data: PaymentItemCreate) -> PaymentItemModel:
        """Adiciona um item a um pagamento aberto"""
        with self._transaction():
            payment = self._open_payment_or_fail(data.payment_id)
            item = self.repo.add_item(
                payment,
                article_name=data.article_name,
                amount=data.amount,
                price=data.price,
            )

        logger.info(
            f"[Payment] Item adicionado payment_id={data.payment_id} item_id={item.id} "
            f"article={data.article_name} amount={data.amount}"
        )
        return item

    def delete_payment(self, payment_id: int, delete_items: bool = False) -> None:
        """
        Exclui o pagamento. Pagamento inexistente é ignorado.

        Com itens, a exclusão só acontece quando `delete_items` é True: os itens
        são removidos primeiro e depois o pagamento.
        """
        with self._transaction():
            payment = self.repo.get_by_id(payment_id, for_update=True)
            if not payment:
                logger.info(f"[Payment] Exclusão ignorada, payment_id={payment_id} não existe")
                return

            if payment.items and not delete_items:
                raise self._reject(MSG_HAS_ITEMS, payment_id=payment_id, items=len(payment.items))

            removed = self.repo.delete_items(payment) if payment.items else 0
            self.repo.delete(payment)

        logger.info(f"[Payment] Removido payment_id={payment_id} itens_removidos={removed}")
