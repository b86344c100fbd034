from .dynamodb_flight_repository import (
    DynamoDBFlightRepository as DynamoDBFlightRepository,
)
from .in_memory_flight_repository import (
    InMemoryFlightRepository as InMemoryFlightRepository,
)
