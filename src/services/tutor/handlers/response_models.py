from __future__ import annotations

from pydantic import BaseModel

from services.tutor.domain.entity import TutorProfile


class TutorProfileData(BaseModel):
    """講師プロフィールのレスポンスモデル"""

    tutor_id: str
    user_id: str
    bio: str
    subjects: list[str]
    hourly_rate: str
    experience: int
    availability: str | None


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    success: bool = True
    data: TutorProfileData


def to_response_body(profile: TutorProfile) -> dict:
    """TutorProfile エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(
        data=TutorProfileData(
            tutor_id=str(profile.id),
            user_id=profile.user_id,
            bio=profile.bio,
            subjects=list(profile.subjects),
            hourly_rate=str(profile.hourly_rate),
            experience=profile.experience,
            availability=profile.availability,
        )
    ).model_dump()
