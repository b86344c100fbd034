from __future__ import annotations

import uuid
from dataclasses import dataclass

from services.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class Identifier:
    """集約ID の基底 Value Object

    不変で、値と型が同じなら同一とみなされる。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationException(f"{type(self).__name__} cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls):
        """新しい ID を採番する"""
        return cls(value=str(uuid.uuid4()))


@dataclass(frozen=True)
class UserId(Identifier):
    """ユーザーID"""


@dataclass(frozen=True)
class FlightId(Identifier):
    """フライトID"""


@dataclass(frozen=True)
class BookingId(Identifier):
    """予約ID

    画面やメールでは "BK-<id>" の予約番号として表示する。
    """

    @property
    def reference(self) -> str:
        return f"BK-{self.value}"


@dataclass(frozen=True)
class PaymentId(Identifier):
    """決済ID"""
