from services.payment.domain import Payment, PaymentRepository, PaymentStatus
from services.shared.domain import BookingId, PaymentId
from services.shared.infrastructure import InMemoryStore


class InMemoryPaymentRepository(PaymentRepository):
    """インメモリの PaymentRepository"""

    def __init__(self) -> None:
        self._store: InMemoryStore[PaymentId, Payment] = InMemoryStore("Payment")

    def save(self, payment: Payment) -> None:
        self._store.insert(payment.id, payment)

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        return self._store.get(payment_id)

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        return self._sorted(self._store.values(lambda p: p.booking_id == booking_id))

    def find_all(self) -> list[Payment]:
        return self._sorted(self._store.values())

    def find_by_status(self, status: PaymentStatus) -> list[Payment]:
        return self._sorted(self._store.values(lambda p: p.status == status))

    def update(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        self._store.replace_if(
            payment.id,
            payment,
            lambda current: expected_status is None
            or current.status == expected_status,
            _conflict_message(payment, expected_status),
        )

    def delete(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        self._store.remove_if(
            payment.id,
            lambda current: expected_status is None
            or current.status == expected_status,
            _conflict_message(payment, expected_status),
        )

    @staticmethod
    def _sorted(payments: list[Payment]) -> list[Payment]:
        return sorted(payments, key=lambda p: p.payment_date.value, reverse=True)


def _conflict_message(payment: Payment, expected: PaymentStatus | None) -> str:
    return (
        f"Payment status conflict: expected {expected.value if expected else None}, "
        f"payment_id={payment.id}"
    )
