import pytest

from services.flight.domain import CabinClass
from services.shared.domain.exception import (
    InsufficientSeatsException,
    ValidationException,
)


class TestFlight:
    def test_reserve_decrements_seats(self, create_flight):
        flight = create_flight(seats_available=10)
        flight.reserve(3)
        assert flight.seats_available == 7

    def test_reserve_more_than_available_leaves_seats_unchanged(self, create_flight):
        flight = create_flight(seats_available=2)
        with pytest.raises(InsufficientSeatsException, match="Not enough seats"):
            flight.reserve(3)
        assert flight.seats_available == 2

    def test_release_is_clamped_to_capacity(self, create_flight):
        flight = create_flight(seats_available=48, capacity=50)
        restocked = flight.release(5)
        assert restocked == 2
        assert flight.seats_available == 50

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count_is_rejected(self, create_flight, count):
        flight = create_flight()
        with pytest.raises(ValidationException):
            flight.reserve(count)
        with pytest.raises(ValidationException):
            flight.release(count)

    def test_seats_above_capacity_are_rejected(self, create_flight):
        with pytest.raises(ValidationException, match="between 0 and capacity"):
            create_flight(seats_available=51, capacity=50)

    def test_negative_seats_are_rejected(self, create_flight):
        with pytest.raises(ValidationException):
            create_flight(seats_available=-1)

    def test_route(self, create_flight):
        flight = create_flight(origin="CMB", destination="SIN")
        assert flight.route == "CMB → SIN"


class TestCabinClass:
    def test_parse_is_case_insensitive(self):
        assert CabinClass.parse(" first_class ") == CabinClass.FIRST_CLASS

    def test_parse_unknown_value(self):
        with pytest.raises(ValidationException, match="Invalid cabin class"):
            CabinClass.parse("PREMIUM")
