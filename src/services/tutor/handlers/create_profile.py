from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.shared.utils import api_response, resolve_actor, translate_errors
from services.tutor.applications.create_tutor_profile import (
    CreateTutorProfileService,
)
from services.tutor.domain.factory import TutorProfileDetails, TutorProfileFactory
from services.tutor.handlers.request_models import CreateTutorProfileRequest
from services.tutor.handlers.response_models import to_response_body
from services.tutor.infrastructure.dynamodb_tutor_profile_repository import (
    DynamoDBTutorProfileRepository,
)
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)

logger = Logger()

user_repository = DynamoDBUserRepository()
service = CreateTutorProfileService(
    repository=DynamoDBTutorProfileRepository(),
    user_repository=user_repository,
    factory=TutorProfileFactory(),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@translate_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """講師プロフィール作成 Lambda Handler"""
    logger.info("Received create tutor profile request")

    actor = resolve_actor(event, user_repository)
    request = CreateTutorProfileRequest.model_validate_json(event.body or "{}")
    details: TutorProfileDetails = {
        "hourly_rate": request.hourly_rate,
        "experience": request.experience,
        "bio": request.bio,
        "subjects": request.subjects,
        "availability": request.availability,
    }
    profile = service.create(actor.id, details)
    return api_response(201, to_response_body(profile))
