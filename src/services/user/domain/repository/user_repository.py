from abc import abstractmethod

from services.shared.domain import Repository, UserId
from services.user.domain.entity import User


class UserRepository(Repository[User, UserId]):
    """ユーザーリポジトリ"""

    @abstractmethod
    def save(self, user: User) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, user_id: UserId) -> User | None:
        """ユーザーIDで検索"""
        raise NotImplementedError
