from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.domain.value_object import BookingId
from services.booking.handlers.dependencies import build_booking_service
from services.booking.handlers.response_models import to_detail_response
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
    """予約詳細取得 Lambda Handler"""
    actor = resolve_actor(event, user_repository)

    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(
            400, {"success": False, "message": "booking_id is required"}
        )

    logger.info("Fetching booking", extra={"booking_id": booking_id})

    view = service.get(BookingId(value=booking_id), actor)
    if view is None:
        return api_response(404, {"success": False, "message": "Booking not found"})
    return api_response(200, to_detail_response(view, actor))
