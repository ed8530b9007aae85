from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.dependencies import build_booking_service
from services.booking.handlers.response_models import to_list_response
from services.shared.utils import api_response, resolve_actor, translate_errors
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)

logger = Logger()

service = build_booking_service()
user_repository = DynamoDBUserRepository()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@translate_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約一覧取得 Lambda Handler（ロールごとに見える範囲が異なる）"""
    actor = resolve_actor(event, user_repository)
    logger.info("Listing bookings", extra={"role": actor.role.value})

    views = service.list(actor)
    return api_response(200, to_list_response(views))
