from services.booking.applications.booking_transitions import BookingTransitions
from services.booking.domain import Booking, BookingRepository
from services.shared.domain import BookingId
from services.shared.domain.exception import ResourceNotFoundException
from services.shared.domain.sink import AuditLog
from services.shared.utils import get_logger, run_side_effect

logger = get_logger("booking")


class CancelBookingService:
    """予約キャンセルのユースケース

    座席を返却し、完了済みの決済があれば払い戻し済みにする。
    """

    def __init__(
        self,
        repository: BookingRepository,
        transitions: BookingTransitions,
        audit_log: AuditLog,
    ) -> None:
        self._repository = repository
        self._transitions = transitions
        self._audit_log = audit_log

    def cancel(self, booking_id: BookingId) -> Booking:
        """予約をキャンセルする

        Raises:
            ResourceNotFoundException: 予約が存在しない
            BusinessRuleViolationException: キャンセル済み
        """
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")

        refunded = self._transitions.cancel(booking)

        run_side_effect(
            logger,
            "audit CANCEL_BOOKING",
            self._audit_log.log_action,
            str(booking.user_id),
            "CANCEL_BOOKING",
            f"Booking-{booking.id}",
            f"Seats restocked: {booking.passenger_count}"
            + (f", Payment refunded: {refunded.id}" if refunded else ""),
        )
        return booking
