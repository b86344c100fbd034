from .audit_log import AuditLog as AuditLog
from .notification_queue import (
    Notification as Notification,
)
from .notification_queue import (
    NotificationQueue as NotificationQueue,
)
from .notification_queue import (
    NotificationType as NotificationType,
)
