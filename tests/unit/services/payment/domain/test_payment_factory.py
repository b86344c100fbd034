import re
from decimal import Decimal

from services.payment.domain import PaymentFactory, PaymentMethod, PaymentStatus
from services.shared.domain import BookingId, Money


class TestPaymentFactory:
    def test_create_generates_ids(self):
        payment = PaymentFactory().create(
            BookingId(value="booking-1"),
            {"amount": Decimal("220"), "currency_code": "LKR", "method": PaymentMethod.CARD},
        )

        assert payment.status == PaymentStatus.PENDING
        assert payment.amount == Money.of(220, "LKR")
        assert re.fullmatch(r"TXN-[A-F0-9]{8}", str(payment.transaction_id))

    def test_create_keeps_given_transaction_id(self):
        payment = PaymentFactory().create(
            BookingId(value="booking-1"),
            {
                "amount": Decimal("220"),
                "currency_code": "LKR",
                "method": PaymentMethod.EZ_CASH,
                "transaction_id": "bank-ref-9",
            },
            status=PaymentStatus.COMPLETED,
        )

        assert str(payment.transaction_id) == "BANK-REF-9"
        assert payment.status == PaymentStatus.COMPLETED

    def test_each_payment_gets_a_new_id(self):
        factory = PaymentFactory()
        details = {
            "amount": Decimal("1"),
            "currency_code": "LKR",
            "method": PaymentMethod.CARD,
        }
        first = factory.create(BookingId(value="b"), details)
        second = factory.create(BookingId(value="b"), details)
        assert first.id != second.id
