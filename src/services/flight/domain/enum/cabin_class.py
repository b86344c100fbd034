from enum import Enum

from services.shared.domain.exception import ValidationException


class CabinClass(str, Enum):
    """客室クラス"""

    ECONOMY = "ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST_CLASS = "FIRST_CLASS"

    @classmethod
    def parse(cls, value: str) -> "CabinClass":
        """文字列から変換する（大文字小文字・前後空白は無視）"""
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as e:
            raise ValidationException(f"Invalid cabin class: {value}") from e
