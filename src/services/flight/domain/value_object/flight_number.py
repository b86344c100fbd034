import re
from dataclasses import dataclass
from typing import ClassVar

from services.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class FlightNumber:
    """フライト番号

    航空会社コード（英字2文字、または数字+英字）+ 便名番号（1-4桁）の形式。
    例: UL504, SK101, 6E1234
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(?:[A-Z]{2}|\d[A-Z])\d{1,4}$")

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValidationException(
                f"Invalid flight number format: {self.value}. "
                "Expected format: UL504 or 6E1234 (airline code + 1-4 digits)"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @property
    def airline_code(self) -> str:
        """航空会社コード（冒頭2文字）"""
        return self.value[:2]
