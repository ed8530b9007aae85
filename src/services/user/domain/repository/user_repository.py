from abc import abstractmethod

from services.shared.domain import ReadRepository
from services.user.domain.entity.user import User


class UserRepository(ReadRepository[User, str]):
    """ユーザーリポジトリのインターフェース（参照専用）"""

    @abstractmethod
    def find_by_id(self, user_id: str) -> User | None:
        """ユーザーIDで検索する"""
        raise NotImplementedError
