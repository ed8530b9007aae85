import json

from services.shared.domain.exception import (
    ConflictException,
    DomainException,
    DuplicateResourceException,
    ForbiddenException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)

# 例外の種類を HTTP ステータスコードに写像する（先に一致したものを採用）
_STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (ValidationException, 400),
    (InvalidTransitionException, 400),
    (ResourceNotFoundException, 404),
    (ForbiddenException, 403),
    (ConflictException, 409),
    (DuplicateResourceException, 409),
)


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway Lambda Proxy Integration のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def status_code_for(error: DomainException) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(error, exc_type):
            return status_code
    return 500


def error_response(error: DomainException) -> dict:
    """ドメイン例外をエラーレスポンスに変換する

    例外の種類（kind）をそのままレスポンスに含め、呼び出し側が区別できるようにする。
    """
    status_code = status_code_for(error)
    message = error.message if status_code != 500 else "Internal server error"
    return api_response(
        status_code,
        {"success": False, "error": type(error).__name__, "message": message},
    )
