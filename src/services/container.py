from dataclasses import dataclass
from functools import lru_cache

import boto3

from services.booking.applications import (
    BookingQueryService,
    BookingTransitions,
    CancelBookingService,
    CreateBookingService,
    DeleteBookingService,
    UpdateBookingService,
)
from services.booking.domain import (
    BookingFactory,
    BookingPolicy,
    BookingRepository,
    PricingCalculator,
)
from services.booking.infrastructure import (
    DynamoDBBookingRepository,
    InMemoryBookingRepository,
)
from services.flight.applications import FlightInventoryService
from services.flight.domain import FlightRepository
from services.flight.infrastructure import (
    DynamoDBFlightRepository,
    InMemoryFlightRepository,
)
from services.payment.applications import (
    CreatePaymentService,
    DeletePaymentService,
    PaymentQueryService,
    ProcessPaymentService,
    RefundPaymentService,
    UpdatePaymentService,
)
from services.payment.domain import PaymentFactory, PaymentGateway, PaymentRepository
from services.payment.infrastructure import (
    DynamoDBPaymentRepository,
    InMemoryPaymentRepository,
    SimulatedPaymentGateway,
)
from services.shared.config import Settings
from services.shared.domain.sink import AuditLog, NotificationQueue
from services.shared.infrastructure import (
    InMemoryAuditLog,
    InMemoryNotificationQueue,
    LoggerAuditLog,
)
from services.shared.utils import get_logger
from services.user.domain import UserRepository
from services.user.infrastructure import (
    DynamoDBUserRepository,
    InMemoryUserRepository,
)


@dataclass(frozen=True)
class Container:
    """組み立て済みのリポジトリ・シンク・ユースケース一式

    プロセス内で1つだけ生成し、各ハンドラーから参照する。
    """

    settings: Settings
    user_repository: UserRepository
    flight_repository: FlightRepository
    booking_repository: BookingRepository
    payment_repository: PaymentRepository
    audit_log: AuditLog
    notifications: NotificationQueue
    gateway: PaymentGateway
    inventory: FlightInventoryService
    transitions: BookingTransitions
    create_booking: CreateBookingService
    update_booking: UpdateBookingService
    cancel_booking: CancelBookingService
    delete_booking: DeleteBookingService
    booking_queries: BookingQueryService
    process_payment: ProcessPaymentService
    create_payment: CreatePaymentService
    update_payment: UpdatePaymentService
    refund_payment: RefundPaymentService
    delete_payment: DeletePaymentService
    payment_queries: PaymentQueryService


def build_container(
    settings: Settings,
    user_repository: UserRepository,
    flight_repository: FlightRepository,
    booking_repository: BookingRepository,
    payment_repository: PaymentRepository,
    audit_log: AuditLog,
    notifications: NotificationQueue,
    gateway: PaymentGateway | None = None,
) -> Container:
    """リポジトリとシンクからユースケースを組み立てる"""
    gateway = gateway or SimulatedPaymentGateway(
        latency_seconds=settings.gateway_latency_seconds,
        timeout_seconds=settings.gateway_timeout_seconds,
    )
    policy = BookingPolicy.from_settings(settings)
    pricing = PricingCalculator()
    inventory = FlightInventoryService(flight_repository)
    transitions = BookingTransitions(booking_repository, payment_repository, inventory)

    return Container(
        settings=settings,
        user_repository=user_repository,
        flight_repository=flight_repository,
        booking_repository=booking_repository,
        payment_repository=payment_repository,
        audit_log=audit_log,
        notifications=notifications,
        gateway=gateway,
        inventory=inventory,
        transitions=transitions,
        create_booking=CreateBookingService(
            repository=booking_repository,
            user_repository=user_repository,
            inventory=inventory,
            factory=BookingFactory(),
            pricing=pricing,
            policy=policy,
            audit_log=audit_log,
            notifications=notifications,
        ),
        update_booking=UpdateBookingService(
            repository=booking_repository,
            inventory=inventory,
            transitions=transitions,
            pricing=pricing,
            policy=policy,
            audit_log=audit_log,
        ),
        cancel_booking=CancelBookingService(
            repository=booking_repository,
            transitions=transitions,
            audit_log=audit_log,
        ),
        delete_booking=DeleteBookingService(
            repository=booking_repository,
            inventory=inventory,
            audit_log=audit_log,
        ),
        booking_queries=BookingQueryService(booking_repository),
        process_payment=ProcessPaymentService(
            repository=payment_repository,
            booking_repository=booking_repository,
            user_repository=user_repository,
            inventory=inventory,
            factory=PaymentFactory(),
            gateway=gateway,
            transitions=transitions,
            audit_log=audit_log,
            notifications=notifications,
        ),
        create_payment=CreatePaymentService(
            repository=payment_repository,
            booking_repository=booking_repository,
            factory=PaymentFactory(),
            transitions=transitions,
            audit_log=audit_log,
        ),
        update_payment=UpdatePaymentService(
            repository=payment_repository,
            booking_repository=booking_repository,
            transitions=transitions,
            audit_log=audit_log,
        ),
        refund_payment=RefundPaymentService(
            repository=payment_repository,
            transitions=transitions,
            audit_log=audit_log,
        ),
        delete_payment=DeletePaymentService(
            repository=payment_repository,
            booking_repository=booking_repository,
            transitions=transitions,
            audit_log=audit_log,
        ),
        payment_queries=PaymentQueryService(payment_repository),
    )


def build_in_memory_container(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
) -> Container:
    """インメモリのリポジトリで組み立てる（ローカル実行・テスト用）"""
    return build_container(
        settings=settings or Settings(),
        user_repository=InMemoryUserRepository(),
        flight_repository=InMemoryFlightRepository(),
        booking_repository=InMemoryBookingRepository(),
        payment_repository=InMemoryPaymentRepository(),
        audit_log=InMemoryAuditLog(),
        notifications=InMemoryNotificationQueue(get_logger("notification")),
        gateway=gateway,
    )


def build_dynamodb_container(settings: Settings) -> Container:
    """DynamoDB のシングルテーブルで組み立てる"""
    if not settings.table_name:
        raise ValueError("TABLE_NAME is required for the DynamoDB container")
    table = boto3.resource("dynamodb").Table(settings.table_name)
    return build_container(
        settings=settings,
        user_repository=DynamoDBUserRepository(table=table),
        flight_repository=DynamoDBFlightRepository(
            table=table, max_retries=settings.seat_update_max_retries
        ),
        booking_repository=DynamoDBBookingRepository(table=table),
        payment_repository=DynamoDBPaymentRepository(table=table),
        audit_log=LoggerAuditLog(get_logger("audit")),
        notifications=InMemoryNotificationQueue(get_logger("notification")),
    )


@lru_cache(maxsize=1)
def get_container() -> Container:
    """プロセス全体で共有するコンテナ

    TABLE_NAME が設定されていれば DynamoDB、なければインメモリで組み立てる。
    """
    settings = Settings.from_env()
    if settings.table_name:
        return build_dynamodb_container(settings)
    return build_in_memory_container(settings)
