from __future__ import annotations

from pydantic import BaseModel

from services.booking.applications.booking_view import BookingView
from services.shared.domain import Actor


class StudentData(BaseModel):
    id: str
    name: str
    email: str


class TutorData(BaseModel):
    id: str
    user_id: str
    name: str
    email: str
    hourly_rate: str


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    student_id: str
    tutor_id: str
    start_time: str
    end_time: str
    status: str
    created_at: str
    updated_at: str
    student: StudentData | None = None
    tutor: TutorData | None = None


class CurrentUser(BaseModel):
    id: str
    role: str


class BookingDetailData(BookingData):
    current_user: CurrentUser


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    success: bool = True
    message: str | None = None
    data: BookingData


class DetailResponse(BaseModel):
    """単一取得レスポンスモデル"""

    success: bool = True
    data: BookingDetailData


class ListResponse(BaseModel):
    """一覧レスポンスモデル"""

    success: bool = True
    count: int
    data: list[BookingData]


def to_booking_data(view: BookingView) -> BookingData:
    """BookingView をレスポンスモデルに変換する"""
    booking = view.booking
    return BookingData(
        booking_id=str(booking.id),
        student_id=booking.student_id,
        tutor_id=str(booking.tutor_id),
        start_time=booking.start_time.isoformat(),
        end_time=booking.end_time.isoformat(),
        status=booking.status.value.lower(),
        created_at=booking.created_at.isoformat(),
        updated_at=booking.updated_at.isoformat(),
        student=(
            StudentData(
                id=view.student.id, name=view.student.name, email=view.student.email
            )
            if view.student
            else None
        ),
        tutor=(
            TutorData(
                id=view.tutor.id,
                user_id=view.tutor.user_id,
                name=view.tutor.name,
                email=view.tutor.email,
                hourly_rate=str(view.tutor.hourly_rate),
            )
            if view.tutor
            else None
        ),
    )


def to_response(view: BookingView, message: str | None = None) -> dict:
    return SuccessResponse(message=message, data=to_booking_data(view)).model_dump()


def to_detail_response(view: BookingView, actor: Actor) -> dict:
    data = BookingDetailData(
        **to_booking_data(view).model_dump(),
        current_user=CurrentUser(id=actor.id, role=actor.role.value),
    )
    return DetailResponse(data=data).model_dump()


def to_list_response(views: list[BookingView]) -> dict:
    data = [to_booking_data(v) for v in views]
    return ListResponse(count=len(data), data=data).model_dump()
