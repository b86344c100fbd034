import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class NotificationType(str, Enum):
    """通知チャネル"""

    EMAIL = "EMAIL"
    SMS = "SMS"
    IN_APP = "IN_APP"


@dataclass(frozen=True)
class Notification:
    """送信待ちの通知"""

    type: NotificationType
    recipient: str
    subject: str
    body: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationQueue(ABC):
    """通知の送信キュー（fire-and-forget）"""

    @abstractmethod
    def enqueue(
        self,
        type: NotificationType,
        recipient: str,
        subject: str,
        body: str,
    ) -> Notification:
        """通知をキューに積む"""
        raise NotImplementedError
