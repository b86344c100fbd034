from .currency import Currency as Currency
from .identifier import (
    BookingId as BookingId,
)
from .identifier import (
    FlightId as FlightId,
)
from .identifier import (
    Identifier as Identifier,
)
from .identifier import (
    PaymentId as PaymentId,
)
from .identifier import (
    UserId as UserId,
)
from .iso_date_time import IsoDateTime as IsoDateTime
from .money import Money as Money
