from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import (
    DomainException as DomainException,
)
from .exceptions import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exceptions import (
    InsufficientSeatsException as InsufficientSeatsException,
)
from .exceptions import (
    OptimisticLockException as OptimisticLockException,
)
from .exceptions import (
    PaymentCancelledException as PaymentCancelledException,
)
from .exceptions import (
    PaymentDeclinedException as PaymentDeclinedException,
)
from .exceptions import (
    PaymentGatewayException as PaymentGatewayException,
)
from .exceptions import (
    PaymentGatewayTimeoutException as PaymentGatewayTimeoutException,
)
from .exceptions import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exceptions import (
    ValidationException as ValidationException,
)
