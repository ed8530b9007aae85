from dataclasses import dataclass

from services.shared.domain.enum import Role


@dataclass(frozen=True)
class Actor:
    """操作を行う認証済みの利用者（リクエストごとに解決される不変値）"""

    id: str
    role: Role

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Actor id cannot be empty")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_tutor(self) -> bool:
        return self.role == Role.TUTOR

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT
