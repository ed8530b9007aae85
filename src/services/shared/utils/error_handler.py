from aws_lambda_powertools import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator
from pydantic import ValidationError

from services.shared.domain import DomainException

from .http_response import api_response, error_response, status_code_for
from .identity import IdentityError

logger = Logger(child=True)


@lambda_handler_decorator
def translate_errors(handler, event, context) -> dict:
    """ハンドラ内で発生した例外を API レスポンスに変換するミドルウェア

    - 認証情報なし: 401
    - リクエストボディの検証エラー: 400
    - ドメイン例外: 種類ごとのステータスコード
    - それ以外: 500（スタックトレースはログにのみ出力）
    """
    try:
        return handler(event, context)
    except IdentityError as e:
        return api_response(401, {"success": False, "message": str(e)})
    except ValidationError as e:
        messages = [err["msg"] for err in e.errors()]
        return api_response(
            400, {"success": False, "message": "; ".join(messages) or str(e)}
        )
    except DomainException as e:
        if status_code_for(e) >= 500:
            logger.exception("Unhandled domain error")
        else:
            logger.info(
                "Request rejected",
                extra={"error": type(e).__name__, "reason": e.message},
            )
        return error_response(e)
    except Exception:
        logger.exception("Unexpected error")
        return api_response(500, {"success": False, "message": "Internal server error"})
