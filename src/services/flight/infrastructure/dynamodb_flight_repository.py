import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from services.flight.domain import (
    CabinClass,
    Flight,
    FlightNumber,
    FlightRepository,
    SeatRelease,
)
from services.shared.domain import Currency, FlightId, IsoDateTime, Money
from services.shared.domain.exception import (
    DuplicateResourceException,
    InsufficientSeatsException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from services.shared.utils.dynamodb import is_conditional_check_failed


class DynamoDBFlightRepository(FlightRepository):
    """DynamoDBを使用したFlightRepository の具象実装

    - 座席確保: seats_available >= :count を条件にした単一の update_item
    - 座席返却: 読み取った値を条件にした compare-and-swap を再試行
    """

    def __init__(
        self,
        table_name: str | None = None,
        table=None,
        max_retries: int = 5,
    ) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table
        self.max_retries = max_retries

    def save(self, flight: Flight) -> None:
        """フライトをDBに保存する"""
        item = {
            "PK": f"FLIGHT#{flight.id}",
            "SK": "FLIGHT",
            "entity_type": "FLIGHT",
            "flight_id": str(flight.id),
            "flight_number": str(flight.flight_number),
            "origin": flight.origin,
            "destination": flight.destination,
            "departure_time": str(flight.departure_time),
            "arrival_time": str(flight.arrival_time),
            "fare_amount": str(flight.fare.amount),
            "fare_currency": str(flight.fare.currency),
            "cabin_class": flight.cabin_class.value,
            "seats_available": flight.seats_available,
            "capacity": flight.capacity,
            "aircraft_type": flight.aircraft_type,
            "status": flight.status,
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise DuplicateResourceException(f"Flight already exists: {flight.id}")
            raise

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        """フライトIDで検索"""
        response = self.table.get_item(
            Key=self._key(flight_id),
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def reserve_seats(self, flight_id: FlightId, count: int) -> int:
        """空席を条件付きで減算する"""
        try:
            response = self.table.update_item(
                Key=self._key(flight_id),
                UpdateExpression="SET seats_available = seats_available - :count",
                ConditionExpression=Attr("PK").exists()
                & Attr("seats_available").gte(count),
                ExpressionAttributeValues={":count": count},
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as e:
            if not is_conditional_check_failed(e):
                raise
            flight = self.find_by_id(flight_id)
            if flight is None:
                raise ResourceNotFoundException(f"Flight not found: {flight_id}")
            raise InsufficientSeatsException(
                f"Not enough seats available on flight {flight.flight_number}: "
                f"requested {count}, available {flight.seats_available}"
            )
        return int(response["Attributes"]["seats_available"])

    def release_seats(self, flight_id: FlightId, count: int) -> SeatRelease:
        """空席を capacity を上限に戻す（compare-and-swap）"""
        for _ in range(self.max_retries):
            flight = self.find_by_id(flight_id)
            if flight is None:
                raise ResourceNotFoundException(f"Flight not found: {flight_id}")
            observed = flight.seats_available
            restocked = flight.release(count)
            try:
                self.table.update_item(
                    Key=self._key(flight_id),
                    UpdateExpression="SET seats_available = :new",
                    ConditionExpression=Attr("seats_available").eq(observed),
                    ExpressionAttributeValues={":new": flight.seats_available},
                )
            except ClientError as e:
                if is_conditional_check_failed(e):
                    continue
                raise
            return SeatRelease(flight.seats_available, restocked)
        raise OptimisticLockException(
            f"Seat restock conflict after {self.max_retries} attempts: "
            f"flight_id={flight_id}"
        )

    @staticmethod
    def _key(flight_id: FlightId) -> dict:
        return {"PK": f"FLIGHT#{flight_id}", "SK": "FLIGHT"}

    def _to_entity(self, item: dict) -> Flight:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Flight(
            id=FlightId(value=item["flight_id"]),
            flight_number=FlightNumber(value=item["flight_number"]),
            origin=item["origin"],
            destination=item["destination"],
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            arrival_time=IsoDateTime.from_string(item["arrival_time"]),
            fare=Money(
                amount=Decimal(item["fare_amount"]),
                currency=Currency(item["fare_currency"]),
            ),
            cabin_class=CabinClass(item["cabin_class"]),
            seats_available=int(item["seats_available"]),
            capacity=int(item["capacity"]),
            aircraft_type=item["aircraft_type"],
            status=item["status"],
        )
