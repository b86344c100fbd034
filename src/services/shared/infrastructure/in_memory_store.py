import copy
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)

ID = TypeVar("ID")
T = TypeVar("T")


class InMemoryStore(Generic[ID, T]):
    """スレッドセーフなインメモリの集約ストア

    読み書きのたびにディープコピーを取り、呼び出し側が保持する
    エンティティの変更がストアに漏れないようにする（DB の行と同じ扱い）。
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._items: dict[ID, T] = {}
        self._lock = threading.RLock()

    def get(self, id: ID) -> T | None:
        with self._lock:
            item = self._items.get(id)
            return copy.deepcopy(item) if item is not None else None

    def values(self, predicate: Callable[[T], bool] | None = None) -> list[T]:
        with self._lock:
            return [
                copy.deepcopy(item)
                for item in self._items.values()
                if predicate is None or predicate(item)
            ]

    def insert(self, id: ID, item: T) -> None:
        with self._lock:
            if id in self._items:
                raise DuplicateResourceException(f"{self._name} already exists: {id}")
            self._items[id] = copy.deepcopy(item)

    def replace(self, id: ID, item: T) -> None:
        with self._lock:
            if id not in self._items:
                raise ResourceNotFoundException(f"{self._name} not found: {id}")
            self._items[id] = copy.deepcopy(item)

    def replace_if(
        self,
        id: ID,
        item: T,
        condition: Callable[[T], bool],
        conflict_message: str,
    ) -> None:
        """現在値が condition を満たす場合のみ置き換える（条件付き書き込み）"""
        with self._lock:
            current = self._items.get(id)
            if current is None:
                raise ResourceNotFoundException(f"{self._name} not found: {id}")
            if not condition(current):
                raise OptimisticLockException(conflict_message)
            self._items[id] = copy.deepcopy(item)

    def remove_if(
        self,
        id: ID,
        condition: Callable[[T], bool],
        conflict_message: str,
    ) -> None:
        with self._lock:
            current = self._items.get(id)
            if current is None:
                raise ResourceNotFoundException(f"{self._name} not found: {id}")
            if not condition(current):
                raise OptimisticLockException(conflict_message)
            del self._items[id]
