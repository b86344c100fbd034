from __future__ import annotations

from pydantic import BaseModel

from services.booking.domain import Booking, Passenger


class PassengerData(BaseModel):
    """搭乗者明細のレスポンスモデル"""

    passenger_id: str
    first_name: str
    last_name: str
    email: str
    date_of_birth: str
    country: str
    phone: str | None = None
    passport_number: str | None = None
    passport_expiry: str | None = None


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    booking_reference: str
    user_id: str
    flight_id: str
    passenger_count: int
    total_price: str
    booking_extras: str
    currency: str
    status: str
    promo_code: str | None = None
    payment_id: str | None = None
    created_at: str
    passengers: list[PassengerData] = []


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData | None = None


def to_booking_data(booking: Booking) -> BookingData:
    return BookingData(
        booking_id=str(booking.id),
        booking_reference=booking.id.reference,
        user_id=str(booking.user_id),
        flight_id=str(booking.flight_id),
        passenger_count=booking.passenger_count,
        total_price=str(booking.total_price.amount),
        booking_extras=str(booking.booking_extras.amount),
        currency=str(booking.total_price.currency),
        status=booking.status.value,
        promo_code=booking.promo_code,
        payment_id=str(booking.payment_id) if booking.payment_id else None,
        created_at=str(booking.created_at),
        passengers=[_to_passenger_data(p) for p in booking.passengers],
    )


def _to_passenger_data(passenger: Passenger) -> PassengerData:
    return PassengerData(
        passenger_id=str(passenger.id),
        first_name=passenger.first_name,
        last_name=passenger.last_name,
        email=passenger.email,
        date_of_birth=passenger.date_of_birth.isoformat(),
        country=passenger.country,
        phone=passenger.phone,
        passport_number=passenger.passport_number,
        passport_expiry=(
            passenger.passport_expiry.isoformat()
            if passenger.passport_expiry
            else None
        ),
    )


def to_response(booking: Booking | None = None) -> dict:
    """Booking エンティティをレスポンス辞書に変換する"""
    data = to_booking_data(booking) if booking is not None else None
    return SuccessResponse(data=data).model_dump()
