from services.flight.domain.enum import CabinClass
from services.flight.domain.value_object import FlightNumber
from services.shared.domain import AggregateRoot, FlightId, IsoDateTime, Money
from services.shared.domain.exception import (
    InsufficientSeatsException,
    ValidationException,
)


class Flight(AggregateRoot[FlightId]):
    """フライト（座席在庫を保持する集約）

    不変条件: 0 <= seats_available <= capacity
    """

    def __init__(
        self,
        id: FlightId,
        flight_number: FlightNumber,
        origin: str,
        destination: str,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        fare: Money,
        cabin_class: CabinClass,
        seats_available: int,
        capacity: int,
        aircraft_type: str,
        status: str = "SCHEDULED",
        version: int = 0,
    ) -> None:
        super().__init__(id, version)

        self._flight_number = flight_number
        self._origin = origin
        self._destination = destination
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._fare = fare
        self._cabin_class = cabin_class
        self._seats_available = seats_available
        self._capacity = capacity
        self._aircraft_type = aircraft_type
        self._status = status

        self._validate_schedule()
        self._validate_inventory()

    def _validate_schedule(self) -> None:
        """出発時刻 < 到着時刻"""
        if not self._departure_time.is_before(self._arrival_time):
            raise ValidationException("Departure time must be before arrival time")

    def _validate_inventory(self) -> None:
        if self._capacity < 1:
            raise ValidationException("Capacity must be at least 1")
        if not 0 <= self._seats_available <= self._capacity:
            raise ValidationException(
                f"Seats available must be between 0 and capacity ({self._capacity})"
            )

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def fare(self) -> Money:
        return self._fare

    @property
    def cabin_class(self) -> CabinClass:
        return self._cabin_class

    @property
    def seats_available(self) -> int:
        return self._seats_available

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def aircraft_type(self) -> str:
        return self._aircraft_type

    @property
    def status(self) -> str:
        return self._status

    @property
    def route(self) -> str:
        return f"{self._origin} → {self._destination}"

    def has_seats(self, count: int) -> bool:
        return self._seats_available >= count

    def reserve(self, count: int) -> None:
        """座席を確保する（空席が足りなければ例外、在庫は変えない）"""
        _ensure_positive(count)
        if not self.has_seats(count):
            raise InsufficientSeatsException(
                f"Not enough seats available on flight {self._flight_number}: "
                f"requested {count}, available {self._seats_available}"
            )
        self._seats_available -= count

    def release(self, count: int) -> int:
        """座席を戻す

        capacity を上限に丸める。実際に戻した席数を返す。
        """
        _ensure_positive(count)
        restocked = min(count, self._capacity - self._seats_available)
        self._seats_available += restocked
        return restocked


def _ensure_positive(count: int) -> None:
    if count < 1:
        raise ValidationException(f"Seat count must be at least 1: {count}")
