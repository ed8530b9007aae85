from decimal import Decimal
from typing import NotRequired, TypedDict

from services.tutor.domain.entity import TutorProfile, TutorProfileCreated
from services.tutor.domain.value_object import TutorProfileId


class TutorProfileDetails(TypedDict):
    """講師プロフィールの入力データ構造"""

    hourly_rate: Decimal
    experience: int
    bio: str
    subjects: list[str]
    availability: NotRequired[str | None]


class TutorProfileFactory:
    """講師プロフィールのファクトリ"""

    def create(self, user_id: str, details: TutorProfileDetails) -> TutorProfile:
        """新規講師プロフィールを生成する"""
        availability = details.get("availability") or None

        profile = TutorProfile(
            id=TutorProfileId.generate(),
            user_id=user_id,
            hourly_rate=details["hourly_rate"],
            experience=details["experience"],
            availability=availability,
            bio=details["bio"],
            subjects=tuple(details["subjects"]),
        )
        profile.record_event(TutorProfileCreated(aggregate_id=str(profile.id)))
        return profile
