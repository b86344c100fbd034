import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

from services.payment.domain.enum import PaymentMethod
from services.shared.domain.exception import ValidationException

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def luhn_checksum_valid(digits: str) -> bool:
    """Luhn チェックサムが正しいかどうか"""
    if not digits.isdigit():
        return False
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


@dataclass(frozen=True)
class CardDetails:
    """カード決済の入力項目

    書式のみを検証する。Luhn チェックはゲートウェイ側の判定に任せる。
    """

    card_number: str
    cardholder_name: str
    expiry: str
    cvv: str
    email: str

    CARD_NUMBER_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{13,19}$")
    EXPIRY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
    CVV_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{3,4}$")

    def __post_init__(self) -> None:
        _require(self.card_number, "Card number is required")
        _require(self.cardholder_name, "Cardholder name is required")
        _require(self.expiry, "Card expiry date is required")
        _require(self.cvv, "CVV is required")
        _require(self.email, "Email is required for card payment")

        if not EMAIL_PATTERN.match(self.email.strip()):
            raise ValidationException("Invalid email format")
        if not self.EXPIRY_PATTERN.match(self.expiry.strip()):
            raise ValidationException("Invalid expiry format. Use MM/YY")
        if not self.CVV_PATTERN.match(self.cvv.strip()):
            raise ValidationException("CVV must be 3 or 4 digits")

        # 空白区切りの入力を許容する
        normalized = re.sub(r"\s+", "", self.card_number)
        if not self.CARD_NUMBER_PATTERN.match(normalized):
            raise ValidationException(
                "Invalid card number format. Must be 13-19 digits"
            )
        object.__setattr__(self, "card_number", normalized)
        object.__setattr__(self, "email", self.email.strip())

    def __repr__(self) -> str:
        return f"CardDetails(card=****{self.last_four})"

    @property
    def last_four(self) -> str:
        return self.card_number[-4:]


@dataclass(frozen=True)
class MobileWalletDetails:
    """モバイルウォレット（eZ Cash）決済の入力項目"""

    mobile: str

    # 7 から始まる9桁
    MOBILE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^7\d{8}$")

    def __post_init__(self) -> None:
        _require(self.mobile, "Mobile number is required for eZ Cash payment")
        normalized = self.mobile.strip()
        if not self.MOBILE_PATTERN.match(normalized):
            raise ValidationException(
                "Invalid mobile number format. "
                "Must be 7XXXXXXXX (9 digits starting with 7)"
            )
        object.__setattr__(self, "mobile", normalized)

    def __repr__(self) -> str:
        return f"MobileWalletDetails(mobile=*****{self.mobile[-4:]})"


PaymentMethodDetails = CardDetails | MobileWalletDetails


def _require(value: str | None, message: str) -> None:
    if value is None or not value.strip():
        raise ValidationException(message)


def build_method_details(
    method: PaymentMethod, fields: Mapping[str, str | None]
) -> PaymentMethodDetails:
    """支払い方法ごとの入力項目を検証して Value Object に変換する

    Raises:
        ValidationException: 入力項目の不足・書式不正、または未対応の支払い方法
    """
    if method == PaymentMethod.CARD:
        return CardDetails(
            card_number=fields.get("card_number") or "",
            cardholder_name=fields.get("cardholder_name") or "",
            expiry=fields.get("expiry") or "",
            cvv=fields.get("cvv") or "",
            email=fields.get("email") or "",
        )
    if method == PaymentMethod.EZ_CASH:
        return MobileWalletDetails(mobile=fields.get("mobile") or "")
    raise ValidationException("Invalid payment method. Must be CARD or EZ_CASH")
