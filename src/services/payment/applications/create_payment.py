from decimal import Decimal

from services.booking.applications import BookingTransitions
from services.booking.domain import BookingRepository
from services.payment.domain import (
    Payment,
    PaymentDetails,
    PaymentFactory,
    PaymentMethod,
    PaymentRepository,
    PaymentStatus,
)
from services.shared.domain import BookingId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.domain.sink import AuditLog
from services.shared.utils import CompensationStack, get_logger, run_side_effect

logger = get_logger("payment")


class CreatePaymentService:
    """決済の直接登録（経理の管理画面用）

    ゲートウェイを通さない。COMPLETED で登録した場合のみ予約に紐付けて確定する。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        booking_repository: BookingRepository,
        factory: PaymentFactory,
        transitions: BookingTransitions,
        audit_log: AuditLog,
    ) -> None:
        self._repository = repository
        self._booking_repository = booking_repository
        self._factory = factory
        self._transitions = transitions
        self._audit_log = audit_log

    def create(
        self,
        booking_id: BookingId,
        amount: Decimal,
        status: PaymentStatus | str,
        method: PaymentMethod | str = PaymentMethod.CARD,
        transaction_id: str | None = None,
    ) -> Payment:
        """決済を登録する

        Raises:
            ValidationException: 金額・ステータス・支払い方法が不正
            ResourceNotFoundException: 予約が存在しない
            BusinessRuleViolationException: COMPLETED だが予約が決済済み・キャンセル済み
        """
        if amount is None or amount <= 0:
            raise ValidationException(
                "Valid amount is required (must be greater than 0)"
            )
        payment_status = PaymentStatus.parse(status)
        if payment_status == PaymentStatus.REFUNDED:
            raise ValidationException("A payment cannot be created as REFUNDED")
        payment_method = PaymentMethod.parse(method)

        booking = self._booking_repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")

        completes = payment_status == PaymentStatus.COMPLETED
        if completes:
            if booking.payment_id is not None:
                raise DuplicateResourceException(
                    f"Payment already exists for this booking. "
                    f"Booking ID: {booking.id.reference}"
                )
            if booking.is_cancelled:
                raise BusinessRuleViolationException(
                    "Cannot complete a payment for a cancelled booking"
                )

        payment_details: PaymentDetails = {
            "amount": amount,
            "currency_code": str(booking.total_price.currency),
            "method": payment_method,
            "transaction_id": transaction_id,
        }
        payment = self._factory.create(booking.id, payment_details, payment_status)

        compensation = CompensationStack(logger)
        try:
            self._repository.save(payment)
            if completes:
                compensation.push(
                    "delete payment", lambda: self._repository.delete(payment)
                )
                self._transitions.confirm(booking, payment.id)
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Payment created",
            extra={
                "payment_id": str(payment.id),
                "booking_id": str(booking.id),
                "status": payment.status.value,
            },
        )
        run_side_effect(
            logger,
            "audit PAYMENT_CREATED",
            self._audit_log.log_action,
            str(booking.user_id),
            "PAYMENT_CREATED",
            f"Payment-{payment.id}",
            f"Status: {payment.status.value}, Amount: {payment.amount}",
        )
        return payment
