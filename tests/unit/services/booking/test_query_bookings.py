import pytest

from services.booking.domain import BookingStatus
from services.shared.domain import BookingId, UserId
from services.shared.domain.exception import (
    ResourceNotFoundException,
    ValidationException,
)


class TestBookingQueryService:
    def test_queries(self, container, user, add_flight):
        flight = add_flight(seats_available=10)
        first = container.create_booking.create(user.id, flight.id, 1)
        second = container.create_booking.create(user.id, flight.id, 1)
        container.cancel_booking.cancel(second.id)
        queries = container.booking_queries

        assert queries.get_by_id(first.id).id == first.id
        assert {b.id for b in queries.get_all()} == {first.id, second.id}
        assert len(queries.get_by_user_id(user.id)) == 2
        assert queries.get_by_user_id(UserId(value="other")) == []
        assert [b.id for b in queries.get_by_status("cancelled")] == [second.id]
        assert [b.id for b in queries.get_by_status(BookingStatus.PENDING)] == [
            first.id
        ]

    def test_get_by_id_not_found(self, container):
        with pytest.raises(ResourceNotFoundException):
            container.booking_queries.get_by_id(BookingId(value="missing"))

    def test_unknown_status(self, container):
        with pytest.raises(ValidationException, match="Invalid booking status"):
            container.booking_queries.get_by_status("ARCHIVED")
