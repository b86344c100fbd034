from .audit_log import AuditRecord as AuditRecord
from .audit_log import InMemoryAuditLog as InMemoryAuditLog
from .audit_log import LoggerAuditLog as LoggerAuditLog
from .in_memory_store import InMemoryStore as InMemoryStore
from .notification_queue import (
    InMemoryNotificationQueue as InMemoryNotificationQueue,
)
