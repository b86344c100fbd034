from enum import Enum

from services.shared.domain.exception import ValidationException


class BookingStatus(str, Enum):
    """予約ステータス

    PENDING --(決済成功)--> CONFIRMED --(キャンセル/払い戻し)--> CANCELLED
    PENDING --(キャンセル)--> CANCELLED
    CANCELLED からの遷移はない。
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value: "str | BookingStatus") -> "BookingStatus":
        """文字列から変換する（大文字小文字・前後空白は無視）"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as e:
            raise ValidationException(f"Invalid booking status: {value}") from e

    def can_transition_to(self, other: "BookingStatus") -> bool:
        return other in _TRANSITIONS[self]


_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
}
