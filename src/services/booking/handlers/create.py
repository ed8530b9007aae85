from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.dependencies import build_booking_service
from services.booking.handlers.request_models import CreateBookingRequest
from services.booking.handlers.response_models import to_response
from services.shared.domain import TimeRange
from services.shared.utils import api_response, resolve_actor, translate_errors
from services.tutor.domain.value_object import TutorProfileId
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
    """予約作成 Lambda Handler（生徒のみ）"""
    actor = resolve_actor(event, user_repository)
    service.access_policy.ensure_can_book(actor)

    request = CreateBookingRequest.model_validate_json(event.body or "{}")
    logger.info(
        "Received create booking request",
        extra={"tutor_id": request.tutor_id, "student_id": actor.id},
    )

    view = service.create(
        student_id=actor.id,
        tutor_id=TutorProfileId(value=request.tutor_id),
        time_range=TimeRange(start=request.start_time, end=request.end_time),
    )
    return api_response(201, to_response(view, message="Booking created successfully"))
