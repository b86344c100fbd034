from datetime import date
from typing import NotRequired, TypedDict

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import PassengerId
from services.shared.domain import BookingId, FlightId, IsoDateTime, Money, UserId
from services.shared.domain.exception import ValidationException


class PassengerDetails(TypedDict):
    """搭乗者明細の入力データ構造"""

    first_name: str
    last_name: str
    email: str
    date_of_birth: date | None
    country: str
    phone: NotRequired[str | None]
    passport_number: NotRequired[str | None]
    passport_expiry: NotRequired[date | None]


class BookingFactory:
    """予約エンティティのファクトリ

    - ID の採番
    - 搭乗者明細の検証と正規化（氏名・国は trim、メールは小文字化）
    - 初期状態の設定
    """

    def create(
        self,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        total_price: Money,
        booking_extras: Money,
        promo_code: str | None = None,
        status: BookingStatus = BookingStatus.PENDING,
        passengers: list[Passenger] | None = None,
    ) -> Booking:
        """新規予約エンティティを生成する"""
        return Booking(
            id=BookingId.generate(),
            user_id=user_id,
            flight_id=flight_id,
            passenger_count=passenger_count,
            total_price=total_price,
            booking_extras=booking_extras,
            status=status,
            promo_code=promo_code,
            passengers=passengers,
            created_at=IsoDateTime.now(),
        )

    def create_passengers(self, details: list[PassengerDetails]) -> list[Passenger]:
        """搭乗者明細を検証して Passenger に変換する

        Raises:
            ValidationException: 必須項目（氏名・メール・生年月日・国）の欠落
        """
        return [
            self._create_passenger(number, detail)
            for number, detail in enumerate(details, start=1)
        ]

    def _create_passenger(self, number: int, detail: PassengerDetails) -> Passenger:
        first_name = _required_text(detail.get("first_name"), number, "first name")
        last_name = _required_text(detail.get("last_name"), number, "last name")
        email = _required_text(detail.get("email"), number, "email").lower()
        country = _required_text(detail.get("country"), number, "country")
        date_of_birth = detail.get("date_of_birth")
        if date_of_birth is None:
            raise ValidationException(f"Passenger {number} date of birth is required")

        return Passenger(
            id=PassengerId.generate(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            date_of_birth=date_of_birth,
            country=country,
            phone=detail.get("phone"),
            passport_number=detail.get("passport_number"),
            passport_expiry=detail.get("passport_expiry"),
        )


def _required_text(value: str | None, number: int, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationException(f"Passenger {number} {label} is required")
    return value.strip()
