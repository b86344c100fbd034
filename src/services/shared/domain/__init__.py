from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    InsufficientSeatsException as InsufficientSeatsException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exception import (
    ValidationException as ValidationException,
)
from .repository import Repository as Repository
from .value_object import (
    BookingId as BookingId,
)
from .value_object import (
    Currency as Currency,
)
from .value_object import (
    FlightId as FlightId,
)
from .value_object import (
    IsoDateTime as IsoDateTime,
)
from .value_object import (
    Money as Money,
)
from .value_object import (
    PaymentId as PaymentId,
)
from .value_object import (
    UserId as UserId,
)
