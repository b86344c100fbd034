from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from services.shared.domain.exception import DomainException, ValidationException


class ErrorDetail(BaseModel):
    """エラー内容（種別 + メッセージ）"""

    kind: str
    message: str


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error: ErrorDetail


def error_response(exc: DomainException) -> dict:
    """ドメイン例外をエラーレスポンス辞書に変換する"""
    return ErrorResponse(error=ErrorDetail(**exc.to_dict())).model_dump()


def request_error_response(exc: PydanticValidationError) -> dict:
    """リクエストの検証エラーをエラーレスポンス辞書に変換する"""
    messages = [
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(ValidationException("; ".join(messages)))
