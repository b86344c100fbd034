from decimal import Decimal

from services.booking.domain import (
    Booking,
    BookingFactory,
    BookingPolicy,
    BookingRepository,
    BookingStatus,
    PassengerDetails,
    PricingCalculator,
)
from services.flight.applications import FlightInventoryService
from services.flight.domain import Flight
from services.shared.domain import FlightId, Money, UserId
from services.shared.domain.exception import (
    InsufficientSeatsException,
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.domain.sink import AuditLog, NotificationQueue, NotificationType
from services.shared.utils import CompensationStack, get_logger, run_side_effect
from services.user.domain import User, UserRepository

logger = get_logger("booking")


class CreateBookingService:
    """予約作成のユースケース

    座席の確保 → 予約の保存 の順に書き込み、予約の保存に失敗したら
    確保した座席を返却する。
    """

    def __init__(
        self,
        repository: BookingRepository,
        user_repository: UserRepository,
        inventory: FlightInventoryService,
        factory: BookingFactory,
        pricing: PricingCalculator,
        policy: BookingPolicy,
        audit_log: AuditLog,
        notifications: NotificationQueue,
    ) -> None:
        self._repository = repository
        self._user_repository = user_repository
        self._inventory = inventory
        self._factory = factory
        self._pricing = pricing
        self._policy = policy
        self._audit_log = audit_log
        self._notifications = notifications

    def create(
        self,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        booking_extras: Decimal | None = None,
        promo_code: str | None = None,
        status: BookingStatus | str | None = None,
    ) -> Booking:
        """予約を作成する

        Raises:
            ValidationException: 人数・追加料金・ステータスが不正
            ResourceNotFoundException: ユーザーまたはフライトが存在しない
            InsufficientSeatsException: 空席不足
        """
        self._policy.validate_passenger_count(passenger_count)
        self._policy.validate_extras(booking_extras)
        initial_status = _initial_status(status)

        user = self._load_user(user_id)
        flight = self._inventory.get_flight(flight_id)

        booking = self._build(
            user, flight, passenger_count, booking_extras, promo_code, initial_status
        )
        return self._persist(booking, user)

    def create_with_passengers(
        self,
        user_id: UserId,
        flight_id: FlightId,
        passenger_count: int,
        passengers: list[PassengerDetails],
        booking_extras: Decimal | None = None,
        promo_code: str | None = None,
    ) -> Booking:
        """搭乗者明細付きで予約を作成する

        代表搭乗者（1人目）のメールアドレスは予約ユーザーのものと一致すること。
        """
        self._policy.validate_passenger_count(passenger_count, with_details=True)
        self._policy.validate_extras(booking_extras)
        if len(passengers) != passenger_count:
            raise ValidationException(
                f"Passenger details must be provided for each passenger "
                f"(expected {passenger_count}, got {len(passengers)})"
            )
        passenger_list = self._factory.create_passengers(passengers)

        user = self._load_user(user_id)
        if not user.has_email(passenger_list[0].email):
            raise ValidationException(
                "Primary passenger email must match the account email"
            )
        flight = self._inventory.get_flight(flight_id)

        booking = self._build(
            user,
            flight,
            passenger_count,
            booking_extras,
            promo_code,
            BookingStatus.PENDING,
            passenger_list,
        )
        return self._persist(booking, user)

    def _load_user(self, user_id: UserId) -> User:
        user = self._user_repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException(f"User not found: {user_id}")
        return user

    def _build(
        self,
        user: User,
        flight: Flight,
        passenger_count: int,
        booking_extras: Decimal | None,
        promo_code: str | None,
        status: BookingStatus,
        passengers=None,
    ) -> Booking:
        # 早期チェック。最終的な判定は reserve_seats の条件付き更新で行う
        if not flight.has_seats(passenger_count):
            raise InsufficientSeatsException(
                f"Not enough seats available on flight {flight.flight_number}"
            )

        extras = Money(
            amount=booking_extras or Decimal("0"), currency=flight.fare.currency
        )
        promo_code = promo_code.strip() if promo_code and promo_code.strip() else None
        total_price = self._pricing.price(
            flight.fare, passenger_count, extras, promo_code
        )
        return self._factory.create(
            user_id=user.id,
            flight_id=flight.id,
            passenger_count=passenger_count,
            total_price=total_price,
            booking_extras=extras,
            promo_code=promo_code,
            status=status,
            passengers=passengers,
        )

    def _persist(self, booking: Booking, user: User) -> Booking:
        compensation = CompensationStack(logger)
        try:
            self._inventory.reserve_seats(booking.flight_id, booking.passenger_count)
            compensation.push(
                "release seats",
                lambda: self._inventory.release_seats(
                    booking.flight_id, booking.passenger_count
                ),
            )
            self._repository.save(booking)
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Booking created",
            extra={
                "booking_id": str(booking.id),
                "flight_id": str(booking.flight_id),
                "passenger_count": booking.passenger_count,
                "total_price": str(booking.total_price),
            },
        )

        run_side_effect(
            logger,
            "audit CREATE_BOOKING",
            self._audit_log.log_action,
            str(user.id),
            "CREATE_BOOKING",
            f"Booking-{booking.id}",
            f"Flight: {booking.flight_id}, Passengers: {booking.passenger_count}",
        )
        run_side_effect(
            logger,
            "notify booking created",
            self._notifications.enqueue,
            NotificationType.EMAIL,
            user.email,
            "Booking Created",
            "Your booking has been created successfully",
        )
        return booking


def _initial_status(status: BookingStatus | str | None) -> BookingStatus:
    if status is None:
        return BookingStatus.PENDING
    parsed = BookingStatus.parse(status)
    if parsed == BookingStatus.CANCELLED:
        raise ValidationException("A booking cannot be created as CANCELLED")
    return parsed
