import os
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """アプリケーション設定

    環境変数から読み込む。数値として解釈できない値は起動時に ValueError。
    """

    table_name: str | None = None
    currency_code: str = "LKR"
    max_passengers: int = 10
    max_passengers_with_details: int = 5
    gateway_latency_seconds: float = 1.5
    gateway_timeout_seconds: float = 10.0
    seat_update_max_retries: int = 5

    def __post_init__(self) -> None:
        if self.max_passengers < 1 or self.max_passengers_with_details < 1:
            raise ValueError("Passenger limits must be at least 1")
        if self.gateway_latency_seconds < 0 or self.gateway_timeout_seconds <= 0:
            raise ValueError("Gateway latency must be >= 0 and timeout > 0")
        if self.seat_update_max_retries < 1:
            raise ValueError("SEAT_UPDATE_MAX_RETRIES must be at least 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """環境変数から設定を生成する"""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            table_name=env.get("TABLE_NAME") or None,
            currency_code=env.get("CURRENCY_CODE", defaults.currency_code),
            max_passengers=int(env.get("MAX_PASSENGERS", defaults.max_passengers)),
            max_passengers_with_details=int(
                env.get(
                    "MAX_PASSENGERS_WITH_DETAILS",
                    defaults.max_passengers_with_details,
                )
            ),
            gateway_latency_seconds=float(
                env.get(
                    "PAYMENT_GATEWAY_LATENCY_SECONDS",
                    defaults.gateway_latency_seconds,
                )
            ),
            gateway_timeout_seconds=float(
                env.get(
                    "PAYMENT_GATEWAY_TIMEOUT_SECONDS",
                    defaults.gateway_timeout_seconds,
                )
            ),
            seat_update_max_retries=int(
                env.get("SEAT_UPDATE_MAX_RETRIES", defaults.seat_update_max_retries)
            ),
        )
