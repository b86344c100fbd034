from __future__ import annotations

import uuid
from dataclasses import dataclass

from services.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class TransactionId:
    """決済トランザクションID

    採番時は "TXN-" + 16進8桁（大文字）。管理画面から入力された値は
    前後空白を除いて大文字に正規化する。
    """

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().upper()
        if not normalized:
            raise ValidationException("Transaction ID cannot be empty")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> TransactionId:
        return cls(value=f"TXN-{uuid.uuid4().hex[:8].upper()}")
