from services.booking.domain import BookingRepository
from services.flight.applications import FlightInventoryService
from services.shared.domain import BookingId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)
from services.shared.domain.sink import AuditLog
from services.shared.utils import CompensationStack, get_logger, run_side_effect

logger = get_logger("booking")


class DeleteBookingService:
    """予約削除のユースケース

    決済が紐付いている予約は削除できない。キャンセル済みでなければ座席を返却する。
    """

    def __init__(
        self,
        repository: BookingRepository,
        inventory: FlightInventoryService,
        audit_log: AuditLog,
    ) -> None:
        self._repository = repository
        self._inventory = inventory
        self._audit_log = audit_log

    def delete(self, booking_id: BookingId) -> None:
        """予約と搭乗者明細を削除する

        Raises:
            ResourceNotFoundException: 予約が存在しない
            BusinessRuleViolationException: 決済が紐付いている
        """
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if booking.payment_id is not None:
            raise BusinessRuleViolationException(
                "Cannot delete booking because it has an associated payment. "
                "Please cancel or remove the payment first."
            )

        restocked = 0
        compensation = CompensationStack(logger)
        try:
            self._repository.delete(booking)
            compensation.push("re-save booking", lambda: self._repository.save(booking))
            if not booking.is_cancelled:
                restocked = self._inventory.release_seats(
                    booking.flight_id, booking.passenger_count
                ).restocked
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Booking deleted",
            extra={
                "booking_id": str(booking.id),
                "seats_restocked": restocked,
            },
        )
        run_side_effect(
            logger,
            "audit DELETE_BOOKING",
            self._audit_log.log_action,
            str(booking.user_id),
            "DELETE_BOOKING",
            f"Booking-{booking.id}",
            f"Flight: {booking.flight_id}, Passengers: {booking.passenger_count}",
        )
