from abc import abstractmethod

from services.flight.domain.entity import Flight
from services.flight.domain.value_object import SeatRelease
from services.shared.domain import FlightId, Repository


class FlightRepository(Repository[Flight, FlightId]):
    """フライトリポジトリ

    座席数の増減は read-modify-write をせず、reserve_seats / release_seats
    の中で原子的に行う。並行する予約が同じ最後の1席を取り合っても
    一方だけが成功しなければならない。
    """

    @abstractmethod
    def save(self, flight: Flight) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索"""
        raise NotImplementedError

    @abstractmethod
    def reserve_seats(self, flight_id: FlightId, count: int) -> int:
        """空席を原子的に減らし、残席数を返す

        Raises:
            ResourceNotFoundException: フライトが存在しない
            InsufficientSeatsException: 空席が count 未満
        """
        raise NotImplementedError

    @abstractmethod
    def release_seats(self, flight_id: FlightId, count: int) -> SeatRelease:
        """空席を原子的に戻し（capacity が上限）、残席数と実際に戻した席数を返す

        Raises:
            ResourceNotFoundException: フライトが存在しない
        """
        raise NotImplementedError
