from services.booking.applications import BookingTransitions
from services.payment.domain import Payment, PaymentRepository
from services.shared.domain import PaymentId
from services.shared.domain.exception import ResourceNotFoundException
from services.shared.domain.sink import AuditLog
from services.shared.utils import get_logger, run_side_effect

logger = get_logger("payment")


class RefundPaymentService:
    """払い戻しのユースケース

    完了済みの決済のみ払い戻せる。紐付いた予約はキャンセルされ、座席が返却される。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        transitions: BookingTransitions,
        audit_log: AuditLog,
    ) -> None:
        self._repository = repository
        self._transitions = transitions
        self._audit_log = audit_log

    def refund(self, payment_id: PaymentId) -> Payment:
        """決済を払い戻す

        Raises:
            ResourceNotFoundException: 決済が存在しない
            BusinessRuleViolationException: 完了済みでない
        """
        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")

        booking = self._transitions.refund(payment)

        logger.info(
            "Payment refunded",
            extra={
                "payment_id": str(payment.id),
                "booking_id": str(payment.booking_id),
                "booking_cancelled": booking is not None,
            },
        )
        run_side_effect(
            logger,
            "audit PAYMENT_REFUNDED",
            self._audit_log.log_action,
            str(booking.user_id) if booking else "system",
            "PAYMENT_REFUNDED",
            f"Payment-{payment.id}",
            f"Amount: {payment.amount}, Booking: {payment.booking_id.reference}",
        )
        return payment
