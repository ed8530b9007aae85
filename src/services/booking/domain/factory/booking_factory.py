from datetime import datetime

from services.booking.domain.entity import Booking, BookingCreated
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.shared.domain import TimeRange
from services.tutor.domain.value_object import TutorProfileId


class BookingFactory:
    """予約エンティティのファクトリ

    - ID 生成
    - 初期ステータスの設定（即時確定モードでは CONFIRMED）
    """

    def create(
        self,
        student_id: str,
        tutor_id: TutorProfileId,
        time_range: TimeRange,
        status: BookingStatus,
        now: datetime,
    ) -> Booking:
        """新規予約エンティティを生成する"""
        booking = Booking(
            id=BookingId.generate(),
            student_id=student_id,
            tutor_id=tutor_id,
            time_range=time_range,
            status=status,
            created_at=now,
            updated_at=now,
        )
        booking.record_event(
            BookingCreated(
                aggregate_id=str(booking.id), tutor_id=str(tutor_id), status=status
            )
        )
        return booking
