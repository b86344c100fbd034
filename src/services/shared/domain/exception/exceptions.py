from typing import ClassVar


class DomainException(Exception):
    """ドメイン層で発生する基底例外

    プレゼンテーション層がフォームエラー・フラッシュメッセージの両方を
    組み立てられるよう、種別 (kind) とメッセージを公開する。
    """

    kind: ClassVar[str] = "DOMAIN"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """種別とメッセージを辞書で返す"""
        return {"kind": self.kind, "message": self.message}


class ValidationException(DomainException, ValueError):
    """入力値が不正な場合（永続化の前に検出される）"""

    kind = "VALIDATION"


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    kind = "NOT_FOUND"


class InsufficientSeatsException(DomainException):
    """空席数が不足している場合"""

    kind = "CAPACITY"


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合（現在の状態と矛盾する操作）"""

    kind = "CONFLICT"


class DuplicateResourceException(BusinessRuleViolationException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(BusinessRuleViolationException):
    """楽観ロックの競合エラー（バージョンやステータスが期待値と異なる場合）"""

    pass


class PaymentDeclinedException(DomainException):
    """決済ゲートウェイが決済を拒否した場合"""

    kind = "PAYMENT_DECLINED"


class PaymentGatewayException(DomainException):
    """決済ゲートウェイ呼び出しが完了しなかった場合"""

    kind = "GATEWAY"


class PaymentGatewayTimeoutException(PaymentGatewayException):
    """決済ゲートウェイがタイムアウトした場合"""

    kind = "GATEWAY_TIMEOUT"


class PaymentCancelledException(PaymentGatewayException):
    """呼び出し元が決済処理を中断した場合"""

    kind = "PAYMENT_CANCELLED"
