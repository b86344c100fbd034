from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """AggregateRoot 基底クラス

    - 配下のエンティティへのアクセスは必ず集約ルートを経由
    - トランザクション境界 = 集約境界
    - version は永続化のたびに加算され、条件付き書き込みの比較に使う
    """

    def __init__(self, id: ID, version: int = 0) -> None:
        super().__init__(id)
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    def increment_version(self) -> None:
        """永続化成功後にバージョンを進める"""
        self._version += 1
