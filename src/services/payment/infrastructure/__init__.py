from .dynamodb_payment_repository import (
    DynamoDBPaymentRepository as DynamoDBPaymentRepository,
)
from .in_memory_payment_repository import (
    InMemoryPaymentRepository as InMemoryPaymentRepository,
)
from .simulated_payment_gateway import (
    SimulatedPaymentGateway as SimulatedPaymentGateway,
)
