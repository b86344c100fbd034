from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from services.payment.domain import PaymentMethod
from services.shared.utils import to_decimal


class CardRequest(BaseModel):
    """カード決済の入力項目"""

    card_number: str | None = None
    cardholder_name: str | None = None
    expiry: str | None = Field(default=None, description="有効期限（MM/YY）")
    cvv: str | None = None
    email: str | None = None


class ProcessPaymentRequest(BaseModel):
    """決済処理リクエストモデル

    支払い方法ごとの項目の検証はドメイン層で行う。
    """

    booking_id: str = Field(..., min_length=1)
    amount: Decimal = Field(
        ...,
        gt=0,
        description="決済金額（0より大きい値）",
    )
    method: PaymentMethod = Field(..., description="支払い方法", examples=["CARD"])
    card: CardRequest | None = None
    mobile: str | None = Field(
        default=None, description="eZ Cash の携帯番号", examples=["712345678"]
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "booking_id": "booking-123",
                    "amount": 220,
                    "method": "EZ_CASH",
                    "mobile": "712345678",
                }
            ]
        }
    }

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return to_decimal(v)

    @field_validator("method", mode="before")
    @classmethod
    def parse_method(cls, v):
        return PaymentMethod.parse(v)

    def method_fields(self) -> dict[str, str | None]:
        """ドメイン層に渡す支払い方法ごとの入力項目"""
        fields: dict[str, str | None] = {"mobile": self.mobile}
        if self.card is not None:
            fields.update(self.card.model_dump())
        return fields


class RefundPaymentRequest(BaseModel):
    """払い戻しリクエストモデル"""

    payment_id: str = Field(..., min_length=1)
