import copy

from services.booking.domain import Booking, BookingRepository, BookingStatus
from services.shared.domain import BookingId, UserId
from services.shared.infrastructure import InMemoryStore


class InMemoryBookingRepository(BookingRepository):
    """インメモリの BookingRepository

    搭乗者明細は予約と一緒に保存されるため、削除も一括になる。
    """

    def __init__(self) -> None:
        self._store: InMemoryStore[BookingId, Booking] = InMemoryStore("Booking")

    def save(self, booking: Booking) -> None:
        self._store.insert(booking.id, booking)

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        return self._store.get(booking_id)

    def find_all(self) -> list[Booking]:
        return self._sorted(self._store.values())

    def find_by_user_id(self, user_id: UserId) -> list[Booking]:
        return self._sorted(self._store.values(lambda b: b.user_id == user_id))

    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        return self._sorted(self._store.values(lambda b: b.status == status))

    def update(self, booking: Booking) -> None:
        expected = booking.version
        stored = copy.deepcopy(booking)
        stored.increment_version()
        self._store.replace_if(
            booking.id,
            stored,
            lambda current: current.version == expected,
            f"Booking was modified concurrently: {booking.id}",
        )
        booking.increment_version()

    def delete(self, booking: Booking) -> None:
        expected = booking.version
        self._store.remove_if(
            booking.id,
            lambda current: current.version == expected,
            f"Booking was modified concurrently: {booking.id}",
        )

    @staticmethod
    def _sorted(bookings: list[Booking]) -> list[Booking]:
        return sorted(bookings, key=lambda b: b.created_at.value, reverse=True)
