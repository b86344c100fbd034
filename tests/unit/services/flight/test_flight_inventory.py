import random
from concurrent.futures import ThreadPoolExecutor
from threading import Barrier

import pytest

from services.flight.applications import FlightInventoryService
from services.flight.domain import SeatRelease
from services.flight.infrastructure import InMemoryFlightRepository
from services.shared.domain import FlightId
from services.shared.domain.exception import (
    InsufficientSeatsException,
    ResourceNotFoundException,
    ValidationException,
)


@pytest.fixture
def repository():
    return InMemoryFlightRepository()


@pytest.fixture
def inventory(repository):
    return FlightInventoryService(repository)


class TestFlightInventoryService:
    def test_reserve_returns_remaining_seats(self, repository, inventory, create_flight):
        flight = create_flight(seats_available=10)
        repository.save(flight)

        assert inventory.reserve_seats(flight.id, 4) == 6
        assert repository.find_by_id(flight.id).seats_available == 6

    def test_reserve_unknown_flight(self, inventory):
        with pytest.raises(ResourceNotFoundException):
            inventory.reserve_seats(FlightId(value="missing"), 1)

    def test_release_unknown_flight(self, inventory):
        with pytest.raises(ResourceNotFoundException):
            inventory.release_seats(FlightId(value="missing"), 1)

    def test_reserve_insufficient_seats(self, repository, inventory, create_flight):
        flight = create_flight(seats_available=1)
        repository.save(flight)

        with pytest.raises(InsufficientSeatsException):
            inventory.reserve_seats(flight.id, 2)
        assert repository.find_by_id(flight.id).seats_available == 1

    def test_release_is_clamped_to_capacity(self, repository, inventory, create_flight):
        flight = create_flight(seats_available=9, capacity=10)
        repository.save(flight)

        release = inventory.release_seats(flight.id, 3)

        assert release.seats_available == 10
        assert release.restocked == 1

    @pytest.mark.parametrize("count", [0, -2, True, 1.5])
    def test_invalid_count(self, repository, inventory, create_flight, count):
        flight = create_flight()
        repository.save(flight)
        with pytest.raises(ValidationException):
            inventory.reserve_seats(flight.id, count)

    def test_get_flight_not_found(self, inventory):
        with pytest.raises(ResourceNotFoundException, match="Flight not found"):
            inventory.get_flight(FlightId(value="missing"))


class TestSeatConcurrency:
    def test_last_seat_is_sold_once(self, repository, inventory, create_flight):
        """残り1席に同時に2件の確保 → 1件だけ成功する"""
        flight = create_flight(seats_available=1)
        repository.save(flight)
        barrier = Barrier(2)

        def reserve():
            barrier.wait()
            try:
                inventory.reserve_seats(flight.id, 1)
                return "ok"
            except InsufficientSeatsException:
                return "capacity"

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda _: reserve(), range(2)))

        assert sorted(results) == ["capacity", "ok"]
        assert repository.find_by_id(flight.id).seats_available == 0

    def test_many_concurrent_reservations_never_oversell(
        self, repository, inventory, create_flight
    ):
        flight = create_flight(seats_available=20, capacity=20)
        repository.save(flight)

        def reserve(_):
            try:
                inventory.reserve_seats(flight.id, 3)
                return 3
            except InsufficientSeatsException:
                return 0

        with ThreadPoolExecutor(max_workers=8) as pool:
            reserved = sum(pool.map(reserve, range(16)))

        assert reserved == 18
        assert repository.find_by_id(flight.id).seats_available == 2

    def test_random_sequence_keeps_seats_within_bounds(
        self, repository, inventory, create_flight
    ):
        flight = create_flight(seats_available=5, capacity=10)
        repository.save(flight)
        rng = random.Random(42)
        expected = 5

        for _ in range(200):
            count = rng.randint(1, 4)
            if rng.random() < 0.5:
                if expected >= count:
                    assert inventory.reserve_seats(flight.id, count) == expected - count
                    expected -= count
                else:
                    with pytest.raises(InsufficientSeatsException):
                        inventory.reserve_seats(flight.id, count)
            else:
                restocked = min(count, 10 - expected)
                expected += restocked
                assert inventory.release_seats(flight.id, count) == SeatRelease(
                    expected, restocked
                )

            assert 0 <= repository.find_by_id(flight.id).seats_available <= 10
