import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.payment.domain import (
    Payment,
    PaymentMethod,
    PaymentRepository,
    PaymentStatus,
    TransactionId,
)
from services.shared.domain import (
    BookingId,
    Currency,
    IsoDateTime,
    Money,
    PaymentId,
)
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from services.shared.utils.dynamodb import (
    is_conditional_check_failed,
    query_all,
    scan_all,
)


class DynamoDBPaymentRepository(PaymentRepository):
    """DynamoDBを使用したPaymentRepository の具象実装

    GSI1 (BOOKING#<booking_id>) で予約ごとの決済を引く。
    ステータスの書き換えは期待ステータスを条件にする。
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table

    def save(self, payment: Payment) -> None:
        """決済をDBに保存する"""
        try:
            self.table.put_item(
                Item=self._to_item(payment),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise DuplicateResourceException(
                    f"Payment already exists: {payment.id}"
                )
            raise

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索"""
        response = self.table.get_item(Key=self._key(payment_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約IDで決済を検索する（GSI1）"""
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"BOOKING#{booking_id}"),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def find_all(self) -> list[Payment]:
        items = scan_all(self.table, FilterExpression=Attr("entity_type").eq("PAYMENT"))
        return self._sorted(items)

    def find_by_status(self, status: PaymentStatus) -> list[Payment]:
        items = scan_all(
            self.table,
            FilterExpression=Attr("entity_type").eq("PAYMENT")
            & Attr("status").eq(status.value),
        )
        return self._sorted(items)

    def update(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        """決済を更新する"""
        condition = Attr("PK").exists()
        if expected_status is not None:
            condition = condition & Attr("status").eq(expected_status.value)

        try:
            self.table.put_item(Item=self._to_item(payment), ConditionExpression=condition)
        except ClientError as e:
            if is_conditional_check_failed(e):
                self._raise_conflict(payment, expected_status)
            raise

    def delete(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        """決済を削除する"""
        condition = Attr("PK").exists()
        if expected_status is not None:
            condition = condition & Attr("status").eq(expected_status.value)

        try:
            self.table.delete_item(Key=self._key(payment.id), ConditionExpression=condition)
        except ClientError as e:
            if is_conditional_check_failed(e):
                self._raise_conflict(payment, expected_status)
            raise

    def _raise_conflict(
        self, payment: Payment, expected_status: PaymentStatus | None
    ) -> None:
        if self.find_by_id(payment.id) is None:
            raise ResourceNotFoundException(f"Payment not found: {payment.id}")
        raise OptimisticLockException(
            f"Payment status conflict: "
            f"expected {expected_status.value if expected_status else None}, "
            f"payment_id={payment.id}"
        )

    @staticmethod
    def _key(payment_id: PaymentId) -> dict:
        return {"PK": f"PAYMENT#{payment_id}", "SK": "PAYMENT"}

    def _to_item(self, payment: Payment) -> dict:
        return {
            **self._key(payment.id),
            "entity_type": "PAYMENT",
            "payment_id": str(payment.id),
            "booking_id": str(payment.booking_id),
            "amount": str(payment.amount.amount),
            "currency": str(payment.amount.currency),
            "status": payment.status.value,
            "method": payment.method.value,
            "transaction_id": str(payment.transaction_id),
            "payment_date": str(payment.payment_date),
            "GSI1PK": f"BOOKING#{payment.booking_id}",
            "GSI1SK": f"PAYMENT#{payment.payment_date}",
        }

    def _sorted(self, items: list[dict]) -> list[Payment]:
        payments = [self._to_entity(item) for item in items]
        return sorted(payments, key=lambda p: p.payment_date.value, reverse=True)

    def _to_entity(self, item: dict) -> Payment:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Payment(
            id=PaymentId(value=item["payment_id"]),
            booking_id=BookingId(value=item["booking_id"]),
            amount=Money(
                amount=Decimal(item["amount"]),
                currency=Currency(item["currency"]),
            ),
            method=PaymentMethod(item["method"]),
            transaction_id=TransactionId(item["transaction_id"]),
            status=PaymentStatus(item["status"]),
            payment_date=IsoDateTime.from_string(item["payment_date"]),
        )
