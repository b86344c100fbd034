from decimal import Decimal
from typing import NotRequired, TypedDict

from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object import TransactionId
from services.shared.domain import (
    BookingId,
    Currency,
    IsoDateTime,
    Money,
    PaymentId,
)


class PaymentDetails(TypedDict):
    """決済の入力データ構造（TypedDict）"""

    amount: Decimal
    currency_code: str
    method: PaymentMethod
    transaction_id: NotRequired[str | None]
    payment_date: NotRequired[IsoDateTime | None]


class PaymentFactory:
    """決済ファクトリ"""

    def create(
        self,
        booking_id: BookingId,
        payment_details: PaymentDetails,
        status: PaymentStatus = PaymentStatus.PENDING,
    ) -> Payment:
        """新規決済エンティティを生成する

        トランザクションIDが指定されなければ採番する。
        """
        money = Money(
            amount=payment_details["amount"],
            currency=Currency(payment_details["currency_code"]),
        )

        transaction_id = payment_details.get("transaction_id")
        return Payment(
            id=PaymentId.generate(),
            booking_id=booking_id,
            amount=money,
            method=payment_details["method"],
            transaction_id=(
                TransactionId(transaction_id)
                if transaction_id
                else TransactionId.generate()
            ),
            status=status,
            payment_date=payment_details.get("payment_date"),
        )
