import threading
from collections import defaultdict

from services.flight.domain import Flight, FlightRepository, SeatRelease
from services.shared.domain import FlightId
from services.shared.domain.exception import ResourceNotFoundException
from services.shared.infrastructure import InMemoryStore


class InMemoryFlightRepository(FlightRepository):
    """インメモリの FlightRepository

    座席の増減はフライトごとのロックの中で read-modify-write を行う。
    """

    def __init__(self) -> None:
        self._store: InMemoryStore[FlightId, Flight] = InMemoryStore("Flight")
        self._locks: defaultdict[FlightId, threading.Lock] = defaultdict(
            threading.Lock
        )
        self._locks_guard = threading.Lock()

    def save(self, flight: Flight) -> None:
        self._store.insert(flight.id, flight)

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        return self._store.get(flight_id)

    def reserve_seats(self, flight_id: FlightId, count: int) -> int:
        with self._lock_for(flight_id):
            flight = self._load(flight_id)
            flight.reserve(count)
            self._store.replace(flight_id, flight)
            return flight.seats_available

    def release_seats(self, flight_id: FlightId, count: int) -> SeatRelease:
        with self._lock_for(flight_id):
            flight = self._load(flight_id)
            restocked = flight.release(count)
            self._store.replace(flight_id, flight)
            return SeatRelease(flight.seats_available, restocked)

    def _load(self, flight_id: FlightId) -> Flight:
        flight = self._store.get(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        return flight

    def _lock_for(self, flight_id: FlightId) -> threading.Lock:
        with self._locks_guard:
            return self._locks[flight_id]
