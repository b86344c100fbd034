from decimal import Decimal

from services.booking.applications.booking_transitions import BookingTransitions
from services.booking.domain import (
    Booking,
    BookingPolicy,
    BookingRepository,
    BookingStatus,
    PricingCalculator,
)
from services.flight.applications import FlightInventoryService
from services.shared.domain import BookingId, Money
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.domain.sink import AuditLog
from services.shared.utils import CompensationStack, get_logger, run_side_effect

logger = get_logger("booking")


class UpdateBookingService:
    """予約変更のユースケース

    None を渡した項目は変更しない。人数・追加料金・プロモーションコードの
    いずれかが変わったら、現在の運賃から合計金額を計算し直す。
    """

    def __init__(
        self,
        repository: BookingRepository,
        inventory: FlightInventoryService,
        transitions: BookingTransitions,
        pricing: PricingCalculator,
        policy: BookingPolicy,
        audit_log: AuditLog,
    ) -> None:
        self._repository = repository
        self._inventory = inventory
        self._transitions = transitions
        self._pricing = pricing
        self._policy = policy
        self._audit_log = audit_log

    def update(
        self,
        booking_id: BookingId,
        passenger_count: int | None = None,
        status: BookingStatus | str | None = None,
        booking_extras: Decimal | None = None,
        promo_code: str | None = None,
    ) -> Booking:
        """予約を変更する

        Raises:
            ValidationException: 入力値が不正
            ResourceNotFoundException: 予約が存在しない
            InsufficientSeatsException: 増員分の空席がない
            BusinessRuleViolationException: キャンセル済み、または許可されない遷移
        """
        new_status = BookingStatus.parse(status) if status is not None else None
        if passenger_count is not None:
            self._policy.validate_passenger_count(passenger_count)
        self._policy.validate_extras(booking_extras)

        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if booking.is_cancelled:
            raise BusinessRuleViolationException("Cannot update a cancelled booking")

        count = booking.passenger_count if passenger_count is None else passenger_count
        extras_amount = (
            booking.booking_extras.amount if booking_extras is None else booking_extras
        )
        promo = booking.promo_code if promo_code is None else (promo_code.strip() or None)
        details_changed = (
            count != booking.passenger_count
            or extras_amount != booking.booking_extras.amount
            or promo != booking.promo_code
        )

        if new_status == BookingStatus.CANCELLED:
            if details_changed:
                raise ValidationException(
                    "Booking details cannot be changed while cancelling"
                )
            self._transitions.cancel(booking)
            self._audit(booking, "Status: CANCELLED")
            return booking

        if new_status is not None:
            booking.ensure_can_transition_to(new_status)

        if details_changed:
            flight = self._inventory.get_flight(booking.flight_id)
            extras = Money(amount=extras_amount, currency=flight.fare.currency)
            total_price = self._pricing.price(flight.fare, count, extras, promo)
        seat_delta = count - booking.passenger_count

        compensation = CompensationStack(logger)
        try:
            if seat_delta > 0:
                self._inventory.reserve_seats(booking.flight_id, seat_delta)
                compensation.push(
                    "release added seats",
                    lambda: self._inventory.release_seats(
                        booking.flight_id, seat_delta
                    ),
                )
            elif seat_delta < 0:
                release = self._inventory.release_seats(
                    booking.flight_id, -seat_delta
                )
                if release.restocked:
                    compensation.push(
                        "re-reserve released seats",
                        lambda: self._inventory.reserve_seats(
                            booking.flight_id, release.restocked
                        ),
                    )

            if details_changed:
                booking.change_passenger_count(count)
                booking.change_promo_code(promo)
                booking.reprice(total_price, extras)
            if new_status == BookingStatus.CONFIRMED:
                booking.confirm()

            self._repository.update(booking)
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Booking updated",
            extra={
                "booking_id": str(booking.id),
                "passenger_count": booking.passenger_count,
                "seat_delta": seat_delta,
                "status": booking.status.value,
            },
        )
        self._audit(
            booking,
            f"Passengers: {booking.passenger_count}, "
            f"Status: {booking.status.value}, Total: {booking.total_price}",
        )
        return booking

    def _audit(self, booking: Booking, details: str) -> None:
        run_side_effect(
            logger,
            "audit UPDATE_BOOKING",
            self._audit_log.log_action,
            str(booking.user_id),
            "UPDATE_BOOKING",
            f"Booking-{booking.id}",
            details,
        )
