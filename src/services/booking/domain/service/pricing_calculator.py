from abc import ABC, abstractmethod

from services.shared.domain import Money


def calculate_total_price(
    fare: Money,
    passenger_count: int,
    extras: Money,
    discount: Money | None = None,
) -> Money:
    """合計金額 = 運賃 × 人数 + 追加料金 − 割引

    割引は運賃合計を上限とする（合計が負にならない）。
    """
    base_fare = fare.multiply(passenger_count)
    if discount is None:
        discount = Money.zero(fare.currency)
    elif discount.amount > base_fare.amount:
        discount = base_fare
    return base_fare.subtract(discount).add(extras)


class DiscountPolicy(ABC):
    """プロモーションコードから割引額を求める"""

    @abstractmethod
    def discount_for(self, promo_code: str | None, base_fare: Money) -> Money:
        raise NotImplementedError


class NoDiscountPolicy(DiscountPolicy):
    """割引なし

    プロモーションの割引計算は対象外。プロモーションコードは予約に
    記録されるが、割引額は常に 0 になる。
    """

    def discount_for(self, promo_code: str | None, base_fare: Money) -> Money:
        return Money.zero(base_fare.currency)


class PricingCalculator:
    """予約金額の計算"""

    def __init__(self, discount_policy: DiscountPolicy | None = None) -> None:
        self._discount_policy = discount_policy or NoDiscountPolicy()

    def price(
        self,
        fare: Money,
        passenger_count: int,
        extras: Money,
        promo_code: str | None = None,
    ) -> Money:
        """運賃・人数・追加料金・プロモーションコードから合計金額を求める"""
        discount = self._discount_policy.discount_for(
            promo_code, fare.multiply(passenger_count)
        )
        return calculate_total_price(fare, passenger_count, extras, discount)
