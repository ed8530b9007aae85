from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator, model_validator

from services.booking.domain.enum import BookingStatus

STATUS_CHOICES = ("confirmed", "cancelled", "completed")


class CreateBookingRequest(BaseModel):
    """予約作成リクエストスキーマ"""

    tutor_id: str = Field(
        ...,
        min_length=1,
        description="講師プロフィールID",
        examples=["0b7f4c1e-7a51-4a36-9d6c-3f7f6d1f4e11"],
    )

    start_time: datetime = Field(
        ...,
        description="開始時刻（ISO 8601形式）",
        examples=["2025-06-02T14:00:00Z"],
    )

    end_time: datetime = Field(
        ...,
        description="終了時刻（ISO 8601形式）",
        examples=["2025-06-02T15:00:00Z"],
    )

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """タイムゾーンのない日時は UTC とみなす"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ChangeStatusRequest(BaseModel):
    """ステータス変更リクエストスキーマ"""

    status: str = Field(..., description="変更後のステータス", examples=["cancelled"])

    @model_validator(mode="after")
    def validate_status(self) -> "ChangeStatusRequest":
        if self.status.lower() not in STATUS_CHOICES:
            raise ValueError(
                f"Invalid status. Must be one of: {', '.join(STATUS_CHOICES)}"
            )
        return self

    @property
    def target(self) -> BookingStatus:
        return BookingStatus(self.status.upper())
