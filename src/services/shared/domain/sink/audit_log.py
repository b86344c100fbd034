from abc import ABC, abstractmethod


class AuditLog(ABC):
    """監査ログの出力先

    呼び出し側は失敗を握りつぶす前提（run_side_effect 経由で呼ぶ）。
    """

    @abstractmethod
    def log_action(self, actor: str, action: str, resource: str, details: str) -> None:
        """操作を記録する"""
        raise NotImplementedError
