from dataclasses import dataclass
from decimal import Decimal

from services.shared.domain import AggregateRoot, DomainEvent
from services.tutor.domain.value_object import TutorProfileId


@dataclass(frozen=True)
class TutorProfileCreated(DomainEvent):
    pass


class TutorProfile(AggregateRoot[TutorProfileId]):
    """講師プロフィール（予約可能なサービス情報。ユーザーアカウントとは別物）"""

    def __init__(
        self,
        id: TutorProfileId,
        user_id: str,
        hourly_rate: Decimal,
        experience: int,
        availability: str | None = None,
        bio: str = "",
        subjects: tuple[str, ...] = (),
    ) -> None:
        super().__init__(id)
        if hourly_rate < 0:
            raise ValueError("Hourly rate cannot be negative")
        if experience < 0:
            raise ValueError("Experience cannot be negative")

        self._user_id = user_id
        self._hourly_rate = hourly_rate
        self._experience = experience
        self._availability = availability
        self._bio = bio
        self._subjects = tuple(subjects)

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def hourly_rate(self) -> Decimal:
        return self._hourly_rate

    @property
    def experience(self) -> int:
        return self._experience

    @property
    def availability(self) -> str | None:
        """空き状況の自由記述（未設定なら None）"""
        return self._availability

    @property
    def bio(self) -> str:
        return self._bio

    @property
    def subjects(self) -> tuple[str, ...]:
        return self._subjects

    def is_owned_by(self, user_id: str) -> bool:
        return self._user_id == user_id
