from aws_lambda_powertools import Logger

from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from services.tutor.domain.entity import TutorProfile
from services.tutor.domain.factory import TutorProfileDetails, TutorProfileFactory
from services.tutor.domain.repository import TutorProfileRepository
from services.user.domain.repository import UserRepository

logger = Logger(child=True)


class CreateTutorProfileService:
    """講師プロフィール作成のユースケース

    プロフィール作成とユーザーの講師ロールへの切り替えは
    Repository 側のトランザクションで同時に反映される。
    """

    def __init__(
        self,
        repository: TutorProfileRepository,
        user_repository: UserRepository,
        factory: TutorProfileFactory,
    ) -> None:
        self._repository = repository
        self._user_repository = user_repository
        self._factory = factory

    def create(self, user_id: str, details: TutorProfileDetails) -> TutorProfile:
        """講師プロフィールを作成し、ユーザーを講師に昇格する"""
        if self._repository.find_by_user_id(user_id) is not None:
            raise DuplicateResourceException("User already has a tutor profile")

        if self._user_repository.find_by_id(user_id) is None:
            raise ResourceNotFoundException("User not found")

        profile = self._factory.create(user_id, details)
        self._repository.create_with_role_promotion(profile)

        for event in profile.pull_events():
            logger.info(
                event.name, extra={"tutor_id": str(profile.id), "user_id": user_id}
            )
        return profile
