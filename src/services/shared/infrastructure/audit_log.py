import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from aws_lambda_powertools import Logger

from services.shared.domain.sink import AuditLog


@dataclass(frozen=True)
class AuditRecord:
    actor: str
    action: str
    resource: str
    details: str
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class LoggerAuditLog(AuditLog):
    """監査ログを構造化ログとして出力する"""

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def log_action(self, actor: str, action: str, resource: str, details: str) -> None:
        self._logger.info(
            "Audit",
            extra={
                "audit": {
                    "actor": actor,
                    "action": action,
                    "resource": resource,
                    "details": details,
                }
            },
        )


class InMemoryAuditLog(AuditLog):
    """監査ログをメモリに保持する（ローカル実行・テスト用）"""

    def __init__(self) -> None:
        self._records: list[AuditRecord] = []
        self._lock = threading.Lock()

    def log_action(self, actor: str, action: str, resource: str, details: str) -> None:
        with self._lock:
            self._records.append(AuditRecord(actor, action, resource, details))

    @property
    def records(self) -> list[AuditRecord]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
