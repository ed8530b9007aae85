from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.dependencies import build_booking_service
from services.booking.handlers.response_models import to_list_response
from services.shared.utils import api_response, translate_errors
from services.tutor.domain.value_object import TutorProfileId

logger = Logger()

service = build_booking_service()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@translate_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """講師の予約済み枠一覧 Lambda Handler（公開）"""
    tutor_id = (event.path_parameters or {}).get("tutor_id")
    if not tutor_id:
        return api_response(400, {"success": False, "message": "tutor_id is required"})

    logger.info("Listing booked slots", extra={"tutor_id": tutor_id})

    views = service.list_booked_slots(TutorProfileId(value=tutor_id))
    return api_response(200, to_list_response(views))
