from services.booking.domain import Booking, BookingRepository, BookingStatus
from services.shared.domain import BookingId, UserId
from services.shared.domain.exception import ResourceNotFoundException


class BookingQueryService:
    """予約の参照系ユースケース"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get_by_id(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def get_all(self) -> list[Booking]:
        return self._repository.find_all()

    def get_by_user_id(self, user_id: UserId) -> list[Booking]:
        return self._repository.find_by_user_id(user_id)

    def get_by_status(self, status: BookingStatus | str) -> list[Booking]:
        """ステータスで検索する（不明なステータス文字列は ValidationException）"""
        return self._repository.find_by_status(BookingStatus.parse(status))
