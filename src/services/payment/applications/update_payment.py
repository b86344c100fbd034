from decimal import Decimal

from services.booking.applications import BookingTransitions
from services.booking.domain import BookingRepository
from services.payment.domain import (
    Payment,
    PaymentRepository,
    PaymentStatus,
    TransactionId,
)
from services.shared.domain import Money, PaymentId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.domain.sink import AuditLog
from services.shared.utils import CompensationStack, get_logger, run_side_effect

logger = get_logger("payment")


class UpdatePaymentService:
    """決済の直接更新（経理の管理画面用）

    None を渡した項目は変更しない。ステータスの変更は遷移ルールに従い、
    COMPLETED への変更は予約の確定、REFUNDED への変更は払い戻しとして扱う。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        booking_repository: BookingRepository,
        transitions: BookingTransitions,
        audit_log: AuditLog,
    ) -> None:
        self._repository = repository
        self._booking_repository = booking_repository
        self._transitions = transitions
        self._audit_log = audit_log

    def update(
        self,
        payment_id: PaymentId,
        amount: Decimal | None = None,
        status: PaymentStatus | str | None = None,
        transaction_id: str | None = None,
    ) -> Payment:
        """決済を更新する

        Raises:
            ValidationException: 金額・ステータスが不正
            ResourceNotFoundException: 決済または予約が存在しない
            BusinessRuleViolationException: 許可されない遷移、予約の状態と矛盾
        """
        if amount is not None and amount <= 0:
            raise ValidationException(
                "Valid amount is required (must be greater than 0)"
            )
        new_status = PaymentStatus.parse(status) if status is not None else None
        new_transaction_id = (
            TransactionId(transaction_id)
            if transaction_id and transaction_id.strip()
            else None
        )

        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")
        current_status = payment.status

        if amount is not None:
            payment.change_amount(Money(amount=amount, currency=payment.amount.currency))
        if new_transaction_id is not None:
            payment.change_transaction_id(new_transaction_id)

        if new_status == PaymentStatus.REFUNDED and current_status != new_status:
            self._transitions.refund(payment)
        elif new_status == PaymentStatus.COMPLETED and current_status != new_status:
            self._complete(payment, current_status)
        else:
            if new_status is not None:
                payment.change_status(new_status)
            self._repository.update(payment, expected_status=current_status)

        logger.info(
            "Payment updated",
            extra={
                "payment_id": str(payment.id),
                "status": payment.status.value,
                "previous_status": current_status.value,
            },
        )
        run_side_effect(
            logger,
            "audit PAYMENT_UPDATED",
            self._audit_log.log_action,
            "finance",
            "PAYMENT_UPDATED",
            f"Payment-{payment.id}",
            f"Status: {current_status.value} -> {payment.status.value}, "
            f"Amount: {payment.amount}, Transaction: {payment.transaction_id}",
        )
        return payment

    def _complete(self, payment: Payment, current_status: PaymentStatus) -> None:
        """決済を完了にし、予約に紐付けて確定する"""
        booking = self._booking_repository.find_by_id(payment.booking_id)
        if booking is None:
            raise ResourceNotFoundException(
                f"Booking not found: {payment.booking_id}"
            )
        if booking.payment_id is not None and booking.payment_id != payment.id:
            raise DuplicateResourceException(
                f"Payment already exists for this booking. "
                f"Booking ID: {booking.id.reference}"
            )
        if booking.is_cancelled:
            raise BusinessRuleViolationException(
                "Cannot complete a payment for a cancelled booking"
            )

        payment.change_status(PaymentStatus.COMPLETED)
        self._repository.update(payment, expected_status=current_status)

        compensation = CompensationStack(logger)
        compensation.push(
            "restore payment status",
            lambda: self._restore(payment, current_status),
        )
        try:
            self._transitions.confirm(booking, payment.id)
        except Exception:
            compensation.unwind()
            raise

    def _restore(self, payment: Payment, status: PaymentStatus) -> None:
        payment.restore_status(status)
        self._repository.update(payment, expected_status=PaymentStatus.COMPLETED)
