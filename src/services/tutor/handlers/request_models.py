from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, Field, field_validator


class CreateTutorProfileRequest(BaseModel):
    """講師プロフィール作成リクエストスキーマ"""

    bio: str = Field(..., min_length=1, description="自己紹介")
    subjects: list[str] = Field(..., min_length=1, description="担当科目")
    hourly_rate: Decimal = Field(..., ge=0, description="時給", examples=[40])
    experience: int = Field(..., ge=0, description="経験年数", examples=[5])
    availability: str | None = Field(
        default=None,
        description="空き状況（自由記述）",
        examples=["Mon-Thu, 9am-5pm"],
    )

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def convert_rate_to_decimal(cls, v):
        """Decimalに変換する"""
        if isinstance(v, Decimal):
            return v
        try:
            return Decimal(str(v))
        except InvalidOperation as e:
            raise ValueError("hourly_rate must be a number") from e
