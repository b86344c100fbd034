import threading

from services.payment.domain import (
    CardDetails,
    GatewayDecision,
    MobileWalletDetails,
    PaymentGateway,
    PaymentMethod,
    PaymentMethodDetails,
)
from services.payment.domain.value_object import luhn_checksum_valid
from services.shared.domain import Money
from services.shared.domain.exception import (
    PaymentCancelledException,
    PaymentGatewayTimeoutException,
)
from services.shared.utils import get_logger

logger = get_logger("payment")


class SimulatedPaymentGateway(PaymentGateway):
    """決済ゲートウェイのシミュレーター

    固定の遅延のあと、カードは Luhn チェック、モバイルは番号書式で承認を判定する。
    遅延がタイムアウトを超える場合はタイムアウトまで待って例外を送出する。
    """

    def __init__(self, latency_seconds: float = 1.5, timeout_seconds: float = 10.0):
        self._latency_seconds = latency_seconds
        self._timeout_seconds = timeout_seconds

    def authorize(
        self,
        method: PaymentMethod,
        details: PaymentMethodDetails,
        amount: Money,
        cancel_event: threading.Event | None = None,
    ) -> GatewayDecision:
        event = cancel_event or threading.Event()
        if event.wait(min(self._latency_seconds, self._timeout_seconds)):
            raise PaymentCancelledException("Payment was cancelled by the caller")
        if self._latency_seconds > self._timeout_seconds:
            raise PaymentGatewayTimeoutException(
                f"Payment gateway did not respond within {self._timeout_seconds}s"
            )

        decision = self._decide(method, details)
        logger.info(
            "Gateway decision",
            extra={
                "method": method.value,
                "amount": str(amount),
                "approved": decision.approved,
            },
        )
        return decision

    @staticmethod
    def _decide(
        method: PaymentMethod, details: PaymentMethodDetails
    ) -> GatewayDecision:
        if method == PaymentMethod.CARD and isinstance(details, CardDetails):
            if luhn_checksum_valid(details.card_number):
                return GatewayDecision(approved=True)
            return GatewayDecision(approved=False, reason="Card checksum failed")
        if method == PaymentMethod.EZ_CASH and isinstance(
            details, MobileWalletDetails
        ):
            if MobileWalletDetails.MOBILE_PATTERN.match(details.mobile):
                return GatewayDecision(approved=True)
            return GatewayDecision(approved=False, reason="Invalid mobile number")
        return GatewayDecision(
            approved=False, reason="Payment details do not match the payment method"
        )
