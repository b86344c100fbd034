import os
from collections import defaultdict
from datetime import date
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.booking.domain import (
    Booking,
    BookingRepository,
    BookingStatus,
    Passenger,
    PassengerId,
)
from services.shared.domain import (
    BookingId,
    Currency,
    FlightId,
    IsoDateTime,
    Money,
    PaymentId,
    UserId,
)
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from services.shared.utils import get_logger
from services.shared.utils.dynamodb import (
    is_conditional_check_failed,
    query_all,
    scan_all,
)

logger = get_logger("booking")


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    予約本体は BOOKING#<id> / BOOKING、搭乗者明細は同じパーティションの
    PASSENGER#<nn> に保存する。GSI1 はユーザー単位の検索用。
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table

    def save(self, booking: Booking) -> None:
        """予約と搭乗者明細を保存する"""
        try:
            self.table.put_item(
                Item=self._to_item(booking, booking.version),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                )
            raise

        if not booking.passengers:
            return
        try:
            with self.table.batch_writer() as batch:
                for number, passenger in enumerate(booking.passengers, start=1):
                    batch.put_item(
                        Item=self._passenger_item(booking, number, passenger)
                    )
        except ClientError:
            self._discard_partial_save(booking)
            raise

    def _discard_partial_save(self, booking: Booking) -> None:
        """搭乗者明細の書き込みに失敗した予約を取り除く

        予約本体と書き込み済みの搭乗者明細を削除し、呼び出し元の補償
        （座席の返却）と整合させる。
        """
        keys = [self._key(booking.id)] + [
            {"PK": f"BOOKING#{booking.id}", "SK": f"PASSENGER#{number:02d}"}
            for number in range(1, len(booking.passengers) + 1)
        ]
        for key in keys:
            try:
                self.table.delete_item(Key=key)
            except ClientError:
                logger.exception(
                    "Failed to discard partially saved booking",
                    extra={"booking_id": str(booking.id), "sk": key["SK"]},
                )

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索（搭乗者明細を含む）"""
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}"),
            ConsistentRead=True,
        )
        bookings = self._assemble(items)
        return bookings[0] if bookings else None

    def find_all(self) -> list[Booking]:
        items = scan_all(
            self.table,
            FilterExpression=Attr("entity_type").is_in(["BOOKING", "PASSENGER"]),
        )
        return self._assemble(items)

    def find_by_user_id(self, user_id: UserId) -> list[Booking]:
        """ユーザーIDで検索（GSI1）"""
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}"),
        )
        return self._assemble(items)

    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        items = scan_all(
            self.table,
            FilterExpression=(
                Attr("entity_type").eq("BOOKING") & Attr("status").eq(status.value)
            )
            | Attr("entity_type").eq("PASSENGER"),
        )
        return self._assemble(items)

    def update(self, booking: Booking) -> None:
        """予約本体を version 条件付きで書き換える"""
        try:
            self.table.put_item(
                Item=self._to_item(booking, booking.version + 1),
                ConditionExpression=Attr("version").eq(booking.version),
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                self._raise_conflict(booking)
            raise
        booking.increment_version()

    def delete(self, booking: Booking) -> None:
        """予約本体を version 条件付きで削除し、搭乗者明細も削除する"""
        try:
            self.table.delete_item(
                Key=self._key(booking.id),
                ConditionExpression=Attr("version").eq(booking.version),
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                self._raise_conflict(booking)
            raise

        passenger_items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking.id}")
            & Key("SK").begins_with("PASSENGER#"),
            ConsistentRead=True,
        )
        with self.table.batch_writer() as batch:
            for item in passenger_items:
                batch.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})

    def _raise_conflict(self, booking: Booking) -> None:
        response = self.table.get_item(Key=self._key(booking.id), ConsistentRead=True)
        if not response.get("Item"):
            raise ResourceNotFoundException(f"Booking not found: {booking.id}")
        raise OptimisticLockException(
            f"Booking was modified concurrently: {booking.id}"
        )

    @staticmethod
    def _key(booking_id: BookingId) -> dict:
        return {"PK": f"BOOKING#{booking_id}", "SK": "BOOKING"}

    def _to_item(self, booking: Booking, version: int) -> dict:
        item = {
            **self._key(booking.id),
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "user_id": str(booking.user_id),
            "flight_id": str(booking.flight_id),
            "passenger_count": booking.passenger_count,
            "total_amount": str(booking.total_price.amount),
            "extras_amount": str(booking.booking_extras.amount),
            "currency": str(booking.total_price.currency),
            "status": booking.status.value,
            "created_at": str(booking.created_at),
            "version": version,
            "GSI1PK": f"USER#{booking.user_id}",
            "GSI1SK": f"BOOKING#{booking.created_at}",
        }
        if booking.promo_code:
            item["promo_code"] = booking.promo_code
        if booking.payment_id:
            item["payment_id"] = str(booking.payment_id)
        return item

    @staticmethod
    def _passenger_item(booking: Booking, number: int, passenger: Passenger) -> dict:
        item = {
            "PK": f"BOOKING#{booking.id}",
            "SK": f"PASSENGER#{number:02d}",
            "entity_type": "PASSENGER",
            "booking_id": str(booking.id),
            "passenger_id": str(passenger.id),
            "first_name": passenger.first_name,
            "last_name": passenger.last_name,
            "email": passenger.email,
            "date_of_birth": passenger.date_of_birth.isoformat(),
            "country": passenger.country,
            "GSI1PK": f"USER#{booking.user_id}",
            "GSI1SK": f"BOOKING#{booking.created_at}#PASSENGER#{number:02d}",
        }
        if passenger.phone:
            item["phone"] = passenger.phone
        if passenger.passport_number:
            item["passport_number"] = passenger.passport_number
        if passenger.passport_expiry:
            item["passport_expiry"] = passenger.passport_expiry.isoformat()
        return item

    def _assemble(self, items: list[dict]) -> list[Booking]:
        """予約アイテムと搭乗者アイテムを予約ごとにまとめる（新しい順）"""
        booking_items: dict[str, dict] = {}
        passenger_items: defaultdict[str, list[dict]] = defaultdict(list)
        for item in items:
            if item.get("entity_type") == "BOOKING":
                booking_items[item["booking_id"]] = item
            elif item.get("entity_type") == "PASSENGER":
                passenger_items[item["booking_id"]].append(item)

        bookings = [
            self._to_entity(item, passenger_items[booking_id])
            for booking_id, item in booking_items.items()
        ]
        return sorted(bookings, key=lambda b: b.created_at.value, reverse=True)

    def _to_entity(self, item: dict, passenger_items: list[dict]) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        currency = Currency(item["currency"])
        passengers = [
            self._to_passenger(p) for p in sorted(passenger_items, key=lambda p: p["SK"])
        ]
        return Booking(
            id=BookingId(value=item["booking_id"]),
            user_id=UserId(value=item["user_id"]),
            flight_id=FlightId(value=item["flight_id"]),
            passenger_count=int(item["passenger_count"]),
            total_price=Money(amount=Decimal(item["total_amount"]), currency=currency),
            booking_extras=Money(
                amount=Decimal(item["extras_amount"]), currency=currency
            ),
            status=BookingStatus(item["status"]),
            promo_code=item.get("promo_code"),
            passengers=passengers,
            payment_id=(
                PaymentId(value=item["payment_id"]) if item.get("payment_id") else None
            ),
            created_at=IsoDateTime.from_string(item["created_at"]),
            version=int(item["version"]),
        )

    @staticmethod
    def _to_passenger(item: dict) -> Passenger:
        return Passenger(
            id=PassengerId(value=item["passenger_id"]),
            first_name=item["first_name"],
            last_name=item["last_name"],
            email=item["email"],
            date_of_birth=date.fromisoformat(item["date_of_birth"]),
            country=item["country"],
            phone=item.get("phone"),
            passport_number=item.get("passport_number"),
            passport_expiry=(
                date.fromisoformat(item["passport_expiry"])
                if item.get("passport_expiry")
                else None
            ),
        )
