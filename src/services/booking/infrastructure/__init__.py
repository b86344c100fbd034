from .dynamodb_booking_repository import (
    DynamoDBBookingRepository as DynamoDBBookingRepository,
)
from .in_memory_booking_repository import (
    InMemoryBookingRepository as InMemoryBookingRepository,
)
