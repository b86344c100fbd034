from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object import TransactionId
from services.shared.domain import (
    AggregateRoot,
    BookingId,
    IsoDateTime,
    Money,
    PaymentId,
)
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ValidationException,
)


class Payment(AggregateRoot[PaymentId]):
    """決済エンティティ

    1件の予約に対する支払い。金額は 0 より大きい。
    """

    def __init__(
        self,
        id: PaymentId,
        booking_id: BookingId,
        amount: Money,
        method: PaymentMethod,
        transaction_id: TransactionId,
        status: PaymentStatus = PaymentStatus.PENDING,
        payment_date: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)
        self._validate_amount(amount)
        self._booking_id = booking_id
        self._amount = amount
        self._method = method
        self._transaction_id = transaction_id
        self._status = status
        self._payment_date = payment_date or IsoDateTime.now()

    @staticmethod
    def _validate_amount(amount: Money) -> None:
        if amount.is_zero():
            raise ValidationException("Payment amount must be greater than 0")

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def method(self) -> PaymentMethod:
        return self._method

    @property
    def transaction_id(self) -> TransactionId:
        return self._transaction_id

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def payment_date(self) -> IsoDateTime:
        return self._payment_date

    def refund(self) -> None:
        """払い戻しを行う（完了済みの決済のみ）"""
        if self._status != PaymentStatus.COMPLETED:
            raise BusinessRuleViolationException(
                "Only completed payments can be refunded"
            )
        self._status = PaymentStatus.REFUNDED

    def change_status(self, status: PaymentStatus) -> None:
        """ステータスを遷移させる（同一ステータスは何もしない）"""
        if status == self._status:
            return
        if not self._status.can_transition_to(status):
            raise BusinessRuleViolationException(
                f"Cannot change payment status from {self._status.value} "
                f"to {status.value}"
            )
        self._status = status

    def change_amount(self, amount: Money) -> None:
        self._validate_amount(amount)
        self._amount = amount

    def change_transaction_id(self, transaction_id: TransactionId) -> None:
        self._transaction_id = transaction_id

    def restore_status(self, status: PaymentStatus) -> None:
        """補償処理用: 遷移ルールを通さずに元のステータスへ戻す"""
        self._status = status
