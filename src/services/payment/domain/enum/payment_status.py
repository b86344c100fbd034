from enum import Enum

from services.shared.domain.exception import ValidationException


class PaymentStatus(str, Enum):
    """決済ステータス"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"

    @classmethod
    def parse(cls, value: "str | PaymentStatus") -> "PaymentStatus":
        """文字列から変換する（大文字小文字・前後空白は無視）"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as e:
            raise ValidationException(f"Invalid payment status: {value}") from e

    def can_transition_to(self, other: "PaymentStatus") -> bool:
        return other in _TRANSITIONS[self]


# 管理画面からの直接変更を含めた遷移表。COMPLETED から戻すには払い戻しのみ。
_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PENDING, PaymentStatus.COMPLETED}),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.REFUNDED: frozenset(),
}
