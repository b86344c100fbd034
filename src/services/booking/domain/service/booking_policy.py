from dataclasses import dataclass
from decimal import Decimal

from services.shared.config import Settings
from services.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class BookingPolicy:
    """予約作成・変更時の入力ルール

    人数の上限は1か所で設定する。搭乗者明細付きの作成は別の上限を持つ。
    """

    max_passengers: int = 10
    max_passengers_with_details: int = 5

    @classmethod
    def from_settings(cls, settings: Settings) -> "BookingPolicy":
        return cls(
            max_passengers=settings.max_passengers,
            max_passengers_with_details=settings.max_passengers_with_details,
        )

    def passenger_limit(self, with_details: bool = False) -> int:
        if with_details:
            return self.max_passengers_with_details
        return self.max_passengers

    def validate_passenger_count(
        self, count: int | None, with_details: bool = False
    ) -> None:
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValidationException(
                "Invalid number of passengers (must be greater than 0)"
            )
        limit = self.passenger_limit(with_details)
        if count > limit:
            raise ValidationException(
                f"Invalid number of passengers "
                f"(maximum {limit} passengers allowed)"
            )

    def validate_extras(self, extras: Decimal | None) -> None:
        if extras is not None and extras < 0:
            raise ValidationException("Booking extras cannot be negative")
