import threading
from collections.abc import Mapping
from decimal import Decimal

from services.booking.applications import BookingTransitions
from services.booking.domain import Booking, BookingRepository
from services.flight.applications import FlightInventoryService
from services.payment.domain import (
    Payment,
    PaymentDetails,
    PaymentFactory,
    PaymentGateway,
    PaymentMethod,
    PaymentRepository,
    PaymentStatus,
)
from services.payment.domain.value_object import build_method_details
from services.shared.domain import BookingId, Money
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    PaymentDeclinedException,
    ResourceNotFoundException,
    ValidationException,
)
from services.shared.domain.sink import AuditLog, NotificationQueue, NotificationType
from services.shared.utils import CompensationStack, get_logger, run_side_effect
from services.user.domain import UserRepository

logger = get_logger("payment")


class ProcessPaymentService:
    """決済処理ユースケース

    ゲートウェイで承認された場合のみ決済を COMPLETED で保存し、予約を確定する。
    拒否・タイムアウト・中断の場合は何も保存しない。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        booking_repository: BookingRepository,
        user_repository: UserRepository,
        inventory: FlightInventoryService,
        factory: PaymentFactory,
        gateway: PaymentGateway,
        transitions: BookingTransitions,
        audit_log: AuditLog,
        notifications: NotificationQueue,
    ) -> None:
        self._repository = repository
        self._booking_repository = booking_repository
        self._user_repository = user_repository
        self._inventory = inventory
        self._factory = factory
        self._gateway = gateway
        self._transitions = transitions
        self._audit_log = audit_log
        self._notifications = notifications

    def process(
        self,
        booking_id: BookingId,
        amount: Decimal,
        method: PaymentMethod | str,
        method_fields: Mapping[str, str | None],
        cancel_event: threading.Event | None = None,
    ) -> Payment:
        """予約に対する決済を処理する

        Args:
            method_fields: 支払い方法ごとの入力項目
                (CARD: card_number, cardholder_name, expiry, cvv, email /
                EZ_CASH: mobile)
            cancel_event: セットされるとゲートウェイ呼び出しを中断する

        Raises:
            ValidationException: 金額・支払い方法・入力項目が不正
            ResourceNotFoundException: 予約が存在しない
            DuplicateResourceException: 既に決済済み
            PaymentDeclinedException: ゲートウェイが拒否した
            PaymentGatewayException: タイムアウトまたは中断
        """
        if amount is None or amount <= 0:
            raise ValidationException(
                "Valid amount is required (must be greater than 0)"
            )
        payment_method = PaymentMethod.parse(method)

        booking = self._booking_repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if booking.payment_id is not None:
            raise DuplicateResourceException(
                f"Payment already exists for this booking. "
                f"Booking ID: {booking.id.reference}"
            )
        if booking.is_cancelled:
            raise BusinessRuleViolationException("Cannot pay for a cancelled booking")

        details = build_method_details(payment_method, method_fields)
        money = Money(amount=amount, currency=booking.total_price.currency)

        decision = self._gateway.authorize(payment_method, details, money, cancel_event)
        if not decision.approved:
            logger.warning(
                "Payment declined",
                extra={
                    "booking_id": str(booking.id),
                    "method": payment_method.value,
                    "reason": decision.reason,
                },
            )
            raise PaymentDeclinedException(
                "Payment processing failed. "
                "Please check your payment details and try again."
            )

        payment_details: PaymentDetails = {
            "amount": amount,
            "currency_code": str(money.currency),
            "method": payment_method,
        }
        payment = self._factory.create(
            booking.id, payment_details, status=PaymentStatus.COMPLETED
        )

        compensation = CompensationStack(logger)
        try:
            self._repository.save(payment)
            compensation.push("delete payment", lambda: self._repository.delete(payment))
            self._transitions.confirm(booking, payment.id)
        except Exception:
            compensation.unwind()
            raise

        logger.info(
            "Payment processed",
            extra={
                "payment_id": str(payment.id),
                "transaction_id": str(payment.transaction_id),
                "booking_id": str(booking.id),
            },
        )
        run_side_effect(
            logger,
            "audit PAYMENT_PROCESSED",
            self._audit_log.log_action,
            str(booking.user_id),
            "PAYMENT_PROCESSED",
            f"Payment-{payment.id}",
            f"Method: {payment.method.value}, Amount: {payment.amount}, "
            f"Booking: {booking.id.reference}",
        )
        run_side_effect(
            logger,
            "notify payment confirmation",
            self._send_confirmation,
            booking,
            payment,
        )
        return payment

    def _send_confirmation(self, booking: Booking, payment: Payment) -> None:
        user = self._user_repository.find_by_id(booking.user_id)
        if user is None:
            raise ResourceNotFoundException(f"User not found: {booking.user_id}")
        flight = self._inventory.get_flight(booking.flight_id)

        body = (
            f"Dear {user.username},\n\n"
            "Your payment has been successfully processed!\n\n"
            "PAYMENT DETAILS:\n"
            f"Transaction ID: {payment.transaction_id}\n"
            f"Amount Paid: {payment.amount}\n"
            f"Payment Method: {payment.method.value}\n"
            f"Payment Date: {payment.payment_date}\n\n"
            "BOOKING DETAILS:\n"
            f"Booking Reference: {booking.id.reference}\n"
            f"Flight: {flight.flight_number}\n"
            f"Route: {flight.origin} → {flight.destination}\n"
            f"Passengers: {booking.passenger_count}\n"
            "Status: CONFIRMED\n\n"
            "Thank you for choosing Skylink Airlines!"
        )
        self._notifications.enqueue(
            NotificationType.EMAIL,
            user.email,
            f"Payment Confirmation - Booking {booking.id.reference}",
            body,
        )
