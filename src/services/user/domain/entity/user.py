from services.shared.domain import Entity, UserId


class User(Entity[UserId]):
    """予約の所有者となるユーザー（参照専用）"""

    def __init__(self, id: UserId, username: str, email: str) -> None:
        super().__init__(id)
        self._username = username
        self._email = email

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email

    def has_email(self, email: str) -> bool:
        """メールアドレスが一致するか（大文字小文字・前後空白は無視）"""
        return self._email.strip().lower() == email.strip().lower()
