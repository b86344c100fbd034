from .booking_policy import BookingPolicy as BookingPolicy
from .pricing_calculator import (
    DiscountPolicy as DiscountPolicy,
)
from .pricing_calculator import (
    NoDiscountPolicy as NoDiscountPolicy,
)
from .pricing_calculator import (
    PricingCalculator as PricingCalculator,
)
from .pricing_calculator import (
    calculate_total_price as calculate_total_price,
)
