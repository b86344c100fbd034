from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from services.booking.domain import BookingStatus
from services.shared.utils import blank_to_none, to_decimal


class PassengerRequest(BaseModel):
    """搭乗者明細の入力スキーマ"""

    first_name: str = Field(..., description="名")
    last_name: str = Field(..., description="姓")
    email: str = Field(..., description="メールアドレス")
    date_of_birth: date | None = Field(default=None, description="生年月日")
    country: str = Field(..., description="国")
    phone: str | None = None
    passport_number: str | None = None
    passport_expiry: date | None = None

    @field_validator("phone", "passport_number", "passport_expiry", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)


class CreateBookingRequest(BaseModel):
    """予約作成リクエストスキーマ

    passengers を指定した場合は搭乗者明細付きの作成になる。
    """

    user_id: str = Field(..., min_length=1, description="ユーザーID")
    flight_id: str = Field(..., min_length=1, description="フライトID")
    passenger_count: int = Field(..., description="人数", examples=[2])
    booking_extras: Decimal | None = Field(
        default=None, description="追加料金（0以上）", examples=[20]
    )
    promo_code: str | None = Field(default=None, description="プロモーションコード")
    status: BookingStatus | None = Field(default=None, description="初期ステータス")
    passengers: list[PassengerRequest] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-123",
                    "flight_id": "flight-123",
                    "passenger_count": 2,
                    "booking_extras": 20,
                    "promo_code": "SUMMER",
                }
            ]
        }
    }

    @field_validator("booking_extras", mode="before")
    @classmethod
    def convert_extras_to_decimal(cls, v):
        return to_decimal(blank_to_none(v))

    @field_validator("promo_code", mode="before")
    @classmethod
    def blank_promo_code(cls, v):
        return blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v):
        v = blank_to_none(v)
        return None if v is None else BookingStatus.parse(v)


class UpdateBookingRequest(BaseModel):
    """予約変更リクエストスキーマ（省略した項目は変更しない）"""

    booking_id: str = Field(..., min_length=1)
    passenger_count: int | None = None
    status: BookingStatus | None = None
    booking_extras: Decimal | None = None
    promo_code: str | None = None

    @field_validator("booking_extras", mode="before")
    @classmethod
    def convert_extras_to_decimal(cls, v):
        return to_decimal(blank_to_none(v))

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v):
        v = blank_to_none(v)
        return None if v is None else BookingStatus.parse(v)


class CancelBookingRequest(BaseModel):
    """予約キャンセルリクエストモデル"""

    booking_id: str = Field(..., min_length=1)


class DeleteBookingRequest(BaseModel):
    """予約削除リクエストモデル"""

    booking_id: str = Field(..., min_length=1)
