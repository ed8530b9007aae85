from abc import abstractmethod

from services.shared.domain import ReadRepository
from services.tutor.domain.entity.tutor_profile import TutorProfile
from services.tutor.domain.value_object.tutor_profile_id import TutorProfileId


class TutorProfileRepository(ReadRepository[TutorProfile, TutorProfileId]):
    """講師プロフィールリポジトリのインターフェース"""

    @abstractmethod
    def find_by_id(self, tutor_id: TutorProfileId) -> TutorProfile | None:
        """プロフィールIDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> TutorProfile | None:
        """ユーザーIDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def create_with_role_promotion(self, profile: TutorProfile) -> None:
        """プロフィール作成とユーザーの講師ロールへの切り替えを1トランザクションで行う

        どちらか一方だけが反映されることはない。
        """
        raise NotImplementedError
