import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from services.payment.domain.enum import PaymentMethod
from services.payment.domain.value_object import PaymentMethodDetails
from services.shared.domain import Money


@dataclass(frozen=True)
class GatewayDecision:
    """ゲートウェイの判定結果"""

    approved: bool
    reason: str | None = None


class PaymentGateway(ABC):
    """外部決済ゲートウェイのポート

    実装は timeout を超えたら PaymentGatewayTimeoutException、
    cancel_event がセットされたら PaymentCancelledException を送出する。
    """

    @abstractmethod
    def authorize(
        self,
        method: PaymentMethod,
        details: PaymentMethodDetails,
        amount: Money,
        cancel_event: threading.Event | None = None,
    ) -> GatewayDecision:
        raise NotImplementedError
