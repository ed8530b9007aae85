from services.booking.applications.booking_service import BookingService
from services.booking.domain.factory import BookingFactory
from services.booking.domain.service import ApprovalMode, BookingLifecycle
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.tutor.infrastructure.dynamodb_tutor_profile_repository import (
    DynamoDBTutorProfileRepository,
)
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)


def build_booking_service() -> BookingService:
    """環境変数（TABLE_NAME, BOOKING_APPROVAL_MODE）から BookingService を組み立てる"""
    return BookingService(
        repository=DynamoDBBookingRepository(),
        tutor_profile_repository=DynamoDBTutorProfileRepository(),
        user_repository=DynamoDBUserRepository(),
        factory=BookingFactory(),
        lifecycle=BookingLifecycle(mode=ApprovalMode.from_env()),
    )
