from .dynamodb_user_repository import (
    DynamoDBUserRepository as DynamoDBUserRepository,
)
from .in_memory_user_repository import (
    InMemoryUserRepository as InMemoryUserRepository,
)
