from enum import Enum

from services.shared.domain.exception import ValidationException


class PaymentMethod(str, Enum):
    """支払い方法"""

    CARD = "CARD"
    EZ_CASH = "EZ_CASH"
    BANK_TRANSFER = "BANK_TRANSFER"

    @classmethod
    def parse(cls, value: "str | PaymentMethod") -> "PaymentMethod":
        """文字列から変換する（大文字小文字・前後空白は無視）"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as e:
            raise ValidationException(f"Invalid payment method: {value}") from e
