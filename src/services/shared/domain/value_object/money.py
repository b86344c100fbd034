from dataclasses import dataclass
from decimal import Decimal

from services.shared.domain.exception import ValidationException

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報を含む）

    Value Object として不変性を保証。
    金額の演算メソッドを提供。負の金額は表現できない。
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValidationException("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def add(self, other: "Money") -> "Money":
        """金額を加算する"""
        self._ensure_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other: "Money") -> "Money":
        """金額を減算する（結果が負になる場合は例外）"""
        self._ensure_same_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def multiply(self, factor: int) -> "Money":
        """整数倍する"""
        return Money(amount=self.amount * factor, currency=self.currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    def _ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValidationException("Cannot combine money with different currencies")

    @classmethod
    def of(cls, amount: Decimal | int | str, currency_code: str) -> "Money":
        """プリミティブ値から Money を生成"""
        return cls(amount=Decimal(str(amount)), currency=Currency(currency_code))

    @classmethod
    def zero(cls, currency: Currency) -> "Money":
        return cls(amount=Decimal("0"), currency=currency)
