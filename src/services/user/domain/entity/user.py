from services.shared.domain import Entity, Role
from services.user.domain.enum import UserStatus


class User(Entity[str]):
    """利用者アカウント（参照専用。認証基盤が所有する）"""

    def __init__(
        self,
        id: str,
        name: str,
        email: str,
        role: Role = Role.STUDENT,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> None:
        super().__init__(id)
        self._name = name
        self._email = email
        self._role = role
        self._status = status

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def role(self) -> Role:
        return self._role

    @property
    def status(self) -> UserStatus:
        return self._status
