from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from threading import Barrier
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from services.booking.domain import BookingStatus
from services.booking.infrastructure import DynamoDBBookingRepository
from services.shared.domain import FlightId, Money, UserId
from services.shared.domain.exception import (
    InsufficientSeatsException,
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.domain.sink import NotificationType


class TestCreateBooking:
    def test_create_reserves_seats_and_prices_booking(
        self, container, user, add_flight, seats
    ):
        flight = add_flight(seats_available=10, fare=Decimal("100"))

        booking = container.create_booking.create(
            user.id, flight.id, 2, booking_extras=Decimal("20"), promo_code="SUMMER"
        )

        assert booking.total_price == Money.of(220, "LKR")
        assert booking.status == BookingStatus.PENDING
        assert booking.promo_code == "SUMMER"
        assert seats(flight.id) == 8
        assert container.booking_repository.find_by_id(booking.id) is not None

    def test_create_emits_audit_and_notification(self, container, user, add_flight):
        flight = add_flight()

        booking = container.create_booking.create(user.id, flight.id, 1)

        record = container.audit_log.records[-1]
        assert record.action == "CREATE_BOOKING"
        assert record.resource == f"Booking-{booking.id}"
        notification = container.notifications.next_notification()
        assert notification.type == NotificationType.EMAIL
        assert notification.recipient == user.email
        assert notification.subject == "Booking Created"

    def test_create_with_caller_supplied_status(self, container, user, add_flight):
        flight = add_flight()
        booking = container.create_booking.create(
            user.id, flight.id, 1, status="confirmed"
        )
        assert booking.status == BookingStatus.CONFIRMED

    def test_cannot_create_cancelled_booking(self, container, user, add_flight):
        flight = add_flight()
        with pytest.raises(ValidationException):
            container.create_booking.create(user.id, flight.id, 1, status="CANCELLED")

    def test_unknown_status(self, container, user, add_flight):
        flight = add_flight()
        with pytest.raises(ValidationException, match="Invalid booking status"):
            container.create_booking.create(user.id, flight.id, 1, status="DONE")

    @pytest.mark.parametrize("count", [0, 11])
    def test_passenger_count_out_of_range(
        self, container, user, add_flight, seats, count
    ):
        flight = add_flight(seats_available=20)
        with pytest.raises(ValidationException):
            container.create_booking.create(user.id, flight.id, count)
        assert seats(flight.id) == 20

    def test_negative_extras(self, container, user, add_flight):
        flight = add_flight()
        with pytest.raises(ValidationException):
            container.create_booking.create(
                user.id, flight.id, 1, booking_extras=Decimal("-5")
            )

    def test_fractional_passenger_count_is_validation_error(
        self, container, user, add_flight, seats
    ):
        flight = add_flight(seats_available=10)
        with pytest.raises(ValidationException):
            container.create_booking.create(user.id, flight.id, 2.5)
        assert seats(flight.id) == 10

    def test_unknown_user(self, container, add_flight):
        flight = add_flight()
        with pytest.raises(ResourceNotFoundException, match="User not found"):
            container.create_booking.create(UserId(value="nobody"), flight.id, 1)

    def test_unknown_flight(self, container, user):
        with pytest.raises(ResourceNotFoundException, match="Flight not found"):
            container.create_booking.create(user.id, FlightId(value="missing"), 1)

    def test_insufficient_seats(self, container, user, add_flight, seats):
        flight = add_flight(seats_available=1)
        with pytest.raises(InsufficientSeatsException):
            container.create_booking.create(user.id, flight.id, 2)
        assert seats(flight.id) == 1
        assert container.booking_repository.find_all() == []

    def test_failed_save_releases_seats(self, container, user, add_flight, seats):
        flight = add_flight(seats_available=10)
        service = container.create_booking
        service._repository = MagicMock()
        service._repository.save.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            service.create(user.id, flight.id, 3)
        assert seats(flight.id) == 10

    def test_failed_passenger_write_leaves_no_booking(
        self, container, user, add_flight, seats, passenger_details
    ):
        flight = add_flight(seats_available=10)
        table = MagicMock()
        batch = table.batch_writer.return_value.__enter__.return_value
        batch.put_item.side_effect = ClientError(
            {"Error": {"Code": "InternalServerError"}}, "BatchWriteItem"
        )
        service = container.create_booking
        service._repository = DynamoDBBookingRepository(table=table)

        with pytest.raises(ClientError):
            service.create_with_passengers(
                user.id, flight.id, 2, passenger_details(2)
            )

        assert seats(flight.id) == 10
        assert table.put_item.call_count == 1
        deleted = [c.kwargs["Key"]["SK"] for c in table.delete_item.call_args_list]
        assert "BOOKING" in deleted

    def test_side_effect_failure_does_not_roll_back(
        self, container, user, add_flight, seats
    ):
        flight = add_flight(seats_available=10)
        service = container.create_booking
        service._audit_log = MagicMock()
        service._audit_log.log_action.side_effect = RuntimeError("audit down")

        booking = service.create(user.id, flight.id, 2)

        assert container.booking_repository.find_by_id(booking.id) is not None
        assert seats(flight.id) == 8

    def test_concurrent_bookings_for_last_seat(
        self, container, user, add_flight, seats
    ):
        """残り1席に同時に2件の予約 → 1件成功、1件は空席不足"""
        flight = add_flight(seats_available=1)
        barrier = Barrier(2)

        def book(_):
            barrier.wait()
            try:
                container.create_booking.create(user.id, flight.id, 1)
                return "ok"
            except InsufficientSeatsException:
                return "capacity"

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(book, range(2)))

        assert sorted(results) == ["capacity", "ok"]
        assert seats(flight.id) == 0
        assert len(container.booking_repository.find_all()) == 1


class TestCreateBookingWithPassengers:
    def test_persists_passengers(
        self, container, user, add_flight, seats, passenger_details
    ):
        flight = add_flight(seats_available=10)

        booking = container.create_booking.create_with_passengers(
            user.id, flight.id, 2, passenger_details(2)
        )

        stored = container.booking_repository.find_by_id(booking.id)
        assert [p.first_name for p in stored.passengers] == [
            "Passenger1",
            "Passenger2",
        ]
        assert seats(flight.id) == 8

    def test_primary_email_must_match_user(
        self, container, user, add_flight, seats, passenger_details
    ):
        flight = add_flight(seats_available=10)

        with pytest.raises(ValidationException, match="Primary passenger email"):
            container.create_booking.create_with_passengers(
                user.id,
                flight.id,
                1,
                passenger_details(1, primary_email="someone@example.com"),
            )
        assert seats(flight.id) == 10

    def test_detail_path_allows_at_most_five(
        self, container, user, add_flight, passenger_details
    ):
        flight = add_flight(seats_available=10)
        with pytest.raises(ValidationException, match="maximum 5 passengers"):
            container.create_booking.create_with_passengers(
                user.id, flight.id, 6, passenger_details(6)
            )

    def test_details_must_match_count(
        self, container, user, add_flight, passenger_details
    ):
        flight = add_flight()
        with pytest.raises(ValidationException, match="each passenger"):
            container.create_booking.create_with_passengers(
                user.id, flight.id, 3, passenger_details(2)
            )

    def test_missing_passenger_field(
        self, container, user, add_flight, passenger_details
    ):
        flight = add_flight()
        details = passenger_details(1)
        details[0]["country"] = "  "
        with pytest.raises(ValidationException, match="country is required"):
            container.create_booking.create_with_passengers(
                user.id, flight.id, 1, details
            )
