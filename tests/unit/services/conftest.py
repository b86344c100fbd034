from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.container import build_in_memory_container
from services.flight.domain import CabinClass, Flight, FlightNumber
from services.shared.config import Settings
from services.shared.domain import FlightId, IsoDateTime, Money, UserId
from services.user.domain import User


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def settings():
    """ゲートウェイの遅延なしの設定"""
    return Settings(gateway_latency_seconds=0)


@pytest.fixture
def container(settings):
    """インメモリで組み立てたコンテナ"""
    return build_in_memory_container(settings)


@pytest.fixture
def create_flight():
    """Flight を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        flight_id: str = "flight-1",
        flight_number: str = "UL504",
        seats_available: int = 10,
        capacity: int = 50,
        fare: Decimal = Decimal("100"),
        origin: str = "CMB",
        destination: str = "DXB",
    ) -> Flight:
        return Flight(
            id=FlightId(value=flight_id),
            flight_number=FlightNumber(flight_number),
            origin=origin,
            destination=destination,
            departure_time=IsoDateTime.from_string("2025-06-01T10:00:00+00:00"),
            arrival_time=IsoDateTime.from_string("2025-06-01T14:30:00+00:00"),
            fare=Money.of(fare, "LKR"),
            cabin_class=CabinClass.ECONOMY,
            seats_available=seats_available,
            capacity=capacity,
            aircraft_type="A330",
        )

    return _factory


@pytest.fixture
def user(container):
    """コンテナに登録済みのユーザー"""
    user = User(id=UserId(value="user-1"), username="nimal", email="Nimal@Example.com")
    container.user_repository.save(user)
    return user


@pytest.fixture
def add_flight(container, create_flight):
    """フライトを生成してコンテナに登録する"""

    def _add(**kwargs) -> Flight:
        flight = create_flight(**kwargs)
        container.flight_repository.save(flight)
        return flight

    return _add


@pytest.fixture
def seats(container):
    """フライトの現在の空席数を返す"""

    def _seats(flight_id: FlightId) -> int:
        return container.flight_repository.find_by_id(flight_id).seats_available

    return _seats


@pytest.fixture
def passenger_details():
    """搭乗者明細の入力を生成する"""

    def _factory(count: int = 1, primary_email: str = "nimal@example.com") -> list:
        details = []
        for number in range(1, count + 1):
            details.append(
                {
                    "first_name": f" Passenger{number} ",
                    "last_name": "Perera",
                    "email": primary_email if number == 1 else f"p{number}@example.com",
                    "date_of_birth": date(1990, 1, number),
                    "country": " Sri Lanka ",
                }
            )
        return details

    return _factory


@dataclass
class FakeLambdaContext:
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:ap-south-1:123456789012:function:test-function"
    )
    aws_request_id: str = "request-123"


@pytest.fixture
def lambda_context():
    return FakeLambdaContext()
