from __future__ import annotations

from pydantic import BaseModel

from services.payment.domain import Payment


class PaymentData(BaseModel):
    """決済データのレスポンスモデル"""

    payment_id: str
    booking_id: str
    amount: str
    currency: str
    status: str
    method: str
    transaction_id: str
    payment_date: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: PaymentData


def to_response(payment: Payment) -> dict:
    """Payment エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(
        data=PaymentData(
            payment_id=str(payment.id),
            booking_id=str(payment.booking_id),
            amount=str(payment.amount.amount),
            currency=str(payment.amount.currency),
            status=payment.status.value,
            method=payment.method.value,
            transaction_id=str(payment.transaction_id),
            payment_date=str(payment.payment_date),
        )
    ).model_dump()
