from services.shared.domain import UserId
from services.shared.infrastructure import InMemoryStore
from services.user.domain import User, UserRepository


class InMemoryUserRepository(UserRepository):
    """インメモリの UserRepository"""

    def __init__(self) -> None:
        self._store: InMemoryStore[UserId, User] = InMemoryStore("User")

    def save(self, user: User) -> None:
        self._store.insert(user.id, user)

    def find_by_id(self, user_id: UserId) -> User | None:
        return self._store.get(user_id)
