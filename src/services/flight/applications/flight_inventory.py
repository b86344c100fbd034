from services.flight.domain import Flight, FlightRepository, SeatRelease
from services.shared.domain import FlightId
from services.shared.domain.exception import (
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.utils import get_logger

logger = get_logger("flight")


class FlightInventoryService:
    """フライトの座席在庫サービス

    座席数を変更する唯一の入口。実際の原子性はリポジトリが担保する。
    """

    def __init__(self, repository: FlightRepository) -> None:
        self._repository = repository

    def get_flight(self, flight_id: FlightId) -> Flight:
        """フライトを取得する（存在しなければ例外）"""
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        return flight

    def reserve_seats(self, flight_id: FlightId, count: int) -> int:
        """座席を確保し、残席数を返す"""
        _validate_count(count)
        remaining = self._repository.reserve_seats(flight_id, count)
        logger.info(
            "Seats reserved",
            extra={
                "flight_id": str(flight_id),
                "count": count,
                "seats_available": remaining,
            },
        )
        return remaining

    def release_seats(self, flight_id: FlightId, count: int) -> SeatRelease:
        """座席を戻す（capacity で丸めた実際の返却数も返す）"""
        _validate_count(count)
        release = self._repository.release_seats(flight_id, count)
        logger.info(
            "Seats released",
            extra={
                "flight_id": str(flight_id),
                "count": count,
                "restocked": release.restocked,
                "seats_available": release.seats_available,
            },
        )
        return release


def _validate_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValidationException(f"Seat count must be a positive integer: {count}")
