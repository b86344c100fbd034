import threading
from collections import deque
from typing import Callable

from aws_lambda_powertools import Logger

from services.shared.domain.sink import (
    Notification,
    NotificationQueue,
    NotificationType,
)

NotificationListener = Callable[[Notification], None]


class InMemoryNotificationQueue(NotificationQueue):
    """FIFO の通知キュー

    enqueue 時に登録済みリスナーへ同期的に通知する。
    リスナーの失敗は他のリスナーとキューへの積み込みに影響させない。
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger
        self._queue: deque[Notification] = deque()
        self._listeners: list[NotificationListener] = []
        self._lock = threading.Lock()

    def enqueue(
        self,
        type: NotificationType,
        recipient: str,
        subject: str,
        body: str,
    ) -> Notification:
        notification = Notification(
            type=type, recipient=recipient, subject=subject, body=body
        )
        with self._lock:
            self._queue.append(notification)
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(notification)
            except Exception:
                self._logger.exception(
                    "Notification listener failed",
                    extra={"notification_id": notification.id},
                )
        return notification

    def register_listener(self, listener: NotificationListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def next_notification(self) -> Notification | None:
        """先頭の通知を取り出す（空なら None）"""
        with self._lock:
            return self._queue.popleft() if self._queue else None

    def pending_count(self) -> int:
        with self._lock:
            return len(self._queue)
