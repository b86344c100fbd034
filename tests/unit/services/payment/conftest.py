from decimal import Decimal

import pytest

from services.payment.domain import (
    Payment,
    PaymentMethod,
    PaymentStatus,
    TransactionId,
)
from services.shared.domain import BookingId, Money, PaymentId

EZ_CASH = {"mobile": "712345678"}


@pytest.fixture
def create_payment_entity():
    """Payment を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: PaymentStatus = PaymentStatus.PENDING,
        payment_id: str = "payment-1",
        booking_id: str = "booking-1",
        amount: Decimal = Decimal("220"),
        method: PaymentMethod = PaymentMethod.CARD,
        transaction_id: str = "TXN-0000ABCD",
    ) -> Payment:
        return Payment(
            id=PaymentId(value=payment_id),
            booking_id=BookingId(value=booking_id),
            amount=Money.of(amount, "LKR"),
            method=method,
            transaction_id=TransactionId(transaction_id),
            status=status,
        )

    return _factory


@pytest.fixture
def pending_booking(container, user, add_flight):
    """空席10のフライトに2名分の PENDING 予約（合計 200 LKR）"""
    flight = add_flight(seats_available=10)
    return container.create_booking.create(user.id, flight.id, 2)


@pytest.fixture
def paid_booking(container, pending_booking):
    """eZ Cash で決済済み（CONFIRMED）の予約と決済"""
    payment = container.process_payment.process(
        pending_booking.id, Decimal("200"), "EZ_CASH", EZ_CASH
    )
    booking = container.booking_repository.find_by_id(pending_booking.id)
    return booking, payment


@pytest.fixture
def valid_card():
    """Luhn チェックを通るカードの入力項目"""
    return {
        "card_number": "4111 1111 1111 1111",
        "cardholder_name": "Nimal Perera",
        "expiry": "12/27",
        "cvv": "123",
        "email": "nimal@example.com",
    }
