from services.booking.applications import BookingTransitions
from services.booking.domain import BookingRepository
from services.payment.domain import PaymentRepository
from services.shared.domain import PaymentId
from services.shared.domain.exception import ResourceNotFoundException
from services.shared.domain.sink import AuditLog
from services.shared.utils import CompensationStack, get_logger, run_side_effect

logger = get_logger("payment")


class DeletePaymentService:
    """決済の削除（経理の管理画面用）

    予約との紐付けを外し、予約をキャンセル（座席を返却）してから決済を削除する。
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

    def delete(self, payment_id: PaymentId) -> None:
        """決済を削除する

        Raises:
            ResourceNotFoundException: 決済が存在しない
            OptimisticLockException: 読み込み後に他の処理が更新していた
        """
        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")

        self._repository.delete(payment, expected_status=payment.status)

        compensation = CompensationStack(logger)
        compensation.push("re-save payment", lambda: self._repository.save(payment))
        try:
            booking = self._booking_repository.find_by_id(payment.booking_id)
            if booking is not None and booking.payment_id == payment.id:
                if booking.is_cancelled:
                    booking.detach_payment()
                    self._booking_repository.update(booking)
                else:
                    self._transitions.cancel(
                        booking, refund_payment=False, detach_payment=True
                    )
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Payment deleted",
            extra={"payment_id": str(payment.id), "booking_id": str(payment.booking_id)},
        )
        run_side_effect(
            logger,
            "audit PAYMENT_DELETED",
            self._audit_log.log_action,
            str(booking.user_id) if booking else "finance",
            "PAYMENT_DELETED",
            f"Payment-{payment.id}",
            f"Booking: {payment.booking_id.reference}",
        )
