from services.booking.domain.entity.passenger import Passenger
from services.booking.domain.enum import BookingStatus
from services.shared.domain import (
    AggregateRoot,
    BookingId,
    FlightId,
    IsoDateTime,
    Money,
    PaymentId,
    UserId,
)
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    ValidationException,
)


class Booking(AggregateRoot[BookingId]):
    """フライト予約

    - 合計金額 = 運賃 × 人数 + 追加料金 − 割引
    - 決済は高々1件まで紐付く
    """

    def __init__(
        self,
        id: BookingId,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        total_price: Money,
        booking_extras: Money,
        status: BookingStatus = BookingStatus.PENDING,
        promo_code: str | None = None,
        passengers: list[Passenger] | None = None,
        payment_id: PaymentId | None = None,
        created_at: IsoDateTime | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)

        self._user_id = user_id
        self._flight_id = flight_id
        self._passenger_count = passenger_count
        self._total_price = total_price
        self._booking_extras = booking_extras
        self._status = status
        self._promo_code = promo_code
        self._passengers = list(passengers or [])
        self._payment_id = payment_id
        self._created_at = created_at or IsoDateTime.now()

        self._validate_passenger_count(passenger_count)

    @staticmethod
    def _validate_passenger_count(count: int) -> None:
        if count < 1:
            raise ValidationException(
                "Invalid number of passengers (must be greater than 0)"
            )

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def passenger_count(self) -> int:
        return self._passenger_count

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def booking_extras(self) -> Money:
        return self._booking_extras

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def promo_code(self) -> str | None:
        return self._promo_code

    @property
    def passengers(self) -> list[Passenger]:
        return list(self._passengers)

    @property
    def payment_id(self) -> PaymentId | None:
        return self._payment_id

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def is_cancelled(self) -> bool:
        return self._status == BookingStatus.CANCELLED

    def ensure_can_transition_to(self, status: BookingStatus) -> None:
        """ステータス遷移が許可されているか検証する（同一ステータスは許可）"""
        if status == self._status:
            return
        if not self._status.can_transition_to(status):
            raise BusinessRuleViolationException(
                f"Cannot change booking status from {self._status.value} "
                f"to {status.value}"
            )

    def confirm(self, payment_id: PaymentId | None = None) -> None:
        """予約を確定する（決済が渡された場合は紐付ける）"""
        if self._status == BookingStatus.CANCELLED:
            raise BusinessRuleViolationException("Cannot confirm a cancelled booking")
        if payment_id is not None:
            self.attach_payment(payment_id)
        self._status = BookingStatus.CONFIRMED

    def cancel(self) -> None:
        """予約をキャンセルする"""
        if self._status == BookingStatus.CANCELLED:
            raise BusinessRuleViolationException("Booking already cancelled")
        self._status = BookingStatus.CANCELLED

    def attach_payment(self, payment_id: PaymentId) -> None:
        if self._payment_id is not None and self._payment_id != payment_id:
            raise DuplicateResourceException(
                f"Payment already exists for this booking. "
                f"Booking ID: {self.id.reference}"
            )
        self._payment_id = payment_id

    def detach_payment(self) -> PaymentId | None:
        payment_id, self._payment_id = self._payment_id, None
        return payment_id

    def change_passenger_count(self, count: int) -> int:
        """人数を変更し、座席数の差分（新 − 旧）を返す"""
        self._validate_passenger_count(count)
        delta = count - self._passenger_count
        self._passenger_count = count
        return delta

    def change_promo_code(self, promo_code: str | None) -> None:
        self._promo_code = promo_code

    def reprice(self, total_price: Money, booking_extras: Money) -> None:
        """合計金額と追加料金を差し替える"""
        self._total_price = total_price
        self._booking_extras = booking_extras

    def restore_state(
        self, status: BookingStatus, payment_id: PaymentId | None
    ) -> None:
        """補償処理用: キャンセル前のステータスと決済の紐付けに戻す"""
        self._status = status
        self._payment_id = payment_id
