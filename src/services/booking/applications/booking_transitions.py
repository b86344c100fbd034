from services.booking.domain import Booking, BookingRepository, BookingStatus
from services.flight.applications import FlightInventoryService
from services.payment.domain import Payment, PaymentRepository, PaymentStatus
from services.shared.domain import PaymentId
from services.shared.utils import CompensationStack, get_logger

logger = get_logger("booking")


class BookingTransitions:
    """予約ステータス遷移の共通処理

    予約の確定・キャンセル（座席の返却）・決済の払い戻しを1か所にまとめる。
    予約系・決済系どちらのユースケースもここを経由する。

    - 予約の書き込みは version 条件付きで、これが同時実行の直列化点になる
    - 途中の書き込みが失敗したら、それまでの書き込みを補償して例外を再送出する
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        payment_repository: PaymentRepository,
        inventory: FlightInventoryService,
    ) -> None:
        self._booking_repository = booking_repository
        self._payment_repository = payment_repository
        self._inventory = inventory

    def confirm(self, booking: Booking, payment_id: PaymentId | None = None) -> None:
        """予約を確定する（決済が渡された場合は紐付ける）"""
        booking.confirm(payment_id)
        self._booking_repository.update(booking)
        logger.info(
            "Booking confirmed",
            extra={
                "booking_id": str(booking.id),
                "payment_id": str(payment_id) if payment_id else None,
            },
        )

    def cancel(
        self,
        booking: Booking,
        *,
        refund_payment: bool = True,
        detach_payment: bool = False,
    ) -> Payment | None:
        """予約をキャンセルし、座席を返却する

        Args:
            refund_payment: 紐付いた完了済み決済を払い戻すか
            detach_payment: 決済との紐付けを外すか

        Returns:
            払い戻した決済（なければ None）

        Raises:
            BusinessRuleViolationException: キャンセル済み
            OptimisticLockException: 他の処理が先に予約を更新していた
        """
        previous_status = booking.status
        previous_payment_id = booking.payment_id

        booking.cancel()
        if detach_payment:
            booking.detach_payment()

        compensation = CompensationStack(logger)
        try:
            self._booking_repository.update(booking)
            compensation.push(
                "restore booking",
                lambda: self._restore_booking(
                    booking, previous_status, previous_payment_id
                ),
            )

            release = self._inventory.release_seats(
                booking.flight_id, booking.passenger_count
            )
            if release.restocked:
                compensation.push(
                    "re-reserve seats",
                    lambda: self._inventory.reserve_seats(
                        booking.flight_id, release.restocked
                    ),
                )

            refunded = None
            if refund_payment and previous_payment_id is not None:
                refunded = self._refund_attached(previous_payment_id)
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Booking cancelled",
            extra={
                "booking_id": str(booking.id),
                "flight_id": str(booking.flight_id),
                "seats_restocked": release.restocked,
            },
        )
        return refunded

    def refund(self, payment: Payment) -> Booking | None:
        """完了済み決済を払い戻し、紐付いた予約をキャンセルする

        Returns:
            キャンセルした予約（紐付いた予約がない、またはキャンセル済みなら None）

        Raises:
            BusinessRuleViolationException: 決済が完了済みでない
        """
        payment.refund()
        self._payment_repository.update(
            payment, expected_status=PaymentStatus.COMPLETED
        )

        compensation = CompensationStack(logger)
        compensation.push(
            "restore payment",
            lambda: self._restore_payment(payment, PaymentStatus.COMPLETED),
        )
        try:
            booking = self._booking_repository.find_by_id(payment.booking_id)
            if (
                booking is None
                or booking.payment_id != payment.id
                or booking.is_cancelled
            ):
                return None
            self.cancel(booking, refund_payment=False)
        except Exception:
            compensation.unwind()
            raise
        return booking

    def _refund_attached(self, payment_id: PaymentId) -> Payment | None:
        payment = self._payment_repository.find_by_id(payment_id)
        if payment is None or payment.status != PaymentStatus.COMPLETED:
            return None
        payment.refund()
        self._payment_repository.update(
            payment, expected_status=PaymentStatus.COMPLETED
        )
        logger.info(
            "Payment refunded",
            extra={
                "payment_id": str(payment.id),
                "booking_id": str(payment.booking_id),
            },
        )
        return payment

    def _restore_booking(
        self,
        booking: Booking,
        status: BookingStatus,
        payment_id: PaymentId | None,
    ) -> None:
        booking.restore_state(status, payment_id)
        self._booking_repository.update(booking)

    def _restore_payment(self, payment: Payment, status: PaymentStatus) -> None:
        current = payment.status
        payment.restore_status(status)
        self._payment_repository.update(payment, expected_status=current)
