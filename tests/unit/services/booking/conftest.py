from decimal import Decimal

import pytest

from services.booking.domain import Booking, BookingStatus, Passenger
from services.shared.domain import BookingId, FlightId, Money, PaymentId, UserId


@pytest.fixture
def create_booking_entity():
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: BookingStatus = BookingStatus.PENDING,
        booking_id: str = "booking-1",
        passenger_count: int = 2,
        total_price: Decimal = Decimal("220"),
        booking_extras: Decimal = Decimal("20"),
        payment_id: str | None = None,
        passengers: list[Passenger] | None = None,
    ) -> Booking:
        return Booking(
            id=BookingId(value=booking_id),
            user_id=UserId(value="user-1"),
            flight_id=FlightId(value="flight-1"),
            passenger_count=passenger_count,
            total_price=Money.of(total_price, "LKR"),
            booking_extras=Money.of(booking_extras, "LKR"),
            status=status,
            payment_id=PaymentId(value=payment_id) if payment_id else None,
            passengers=passengers,
        )

    return _factory
