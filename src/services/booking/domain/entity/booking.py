from dataclasses import dataclass
from datetime import datetime, timezone

from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.shared.domain import AggregateRoot, DomainEvent, TimeRange
from services.shared.domain.exception import (
    InvalidTransitionException,
    ValidationException,
)
from services.tutor.domain.value_object import TutorProfileId


@dataclass(frozen=True)
class BookingCreated(DomainEvent):
    tutor_id: str
    status: BookingStatus


@dataclass(frozen=True)
class BookingStatusChanged(DomainEvent):
    previous: BookingStatus
    current: BookingStatus


@dataclass(frozen=True)
class BookingDeleted(DomainEvent):
    pass


class Booking(AggregateRoot[BookingId]):
    """授業予約

    - 時間帯は作成後に変更しない（変更は削除 → 再作成）
    - ステータスは complete / cancel / confirm を通してのみ変わる
    """

    def __init__(
        self,
        id: BookingId,
        student_id: str,
        tutor_id: TutorProfileId,
        time_range: TimeRange,
        status: BookingStatus = BookingStatus.CONFIRMED,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        super().__init__(id)
        if not time_range.is_valid():
            raise ValidationException("End time must be after start time")

        now = datetime.now(timezone.utc)
        self._student_id = student_id
        self._tutor_id = tutor_id
        self._time_range = time_range
        self._status = status
        self._created_at = created_at or now
        self._updated_at = updated_at or self._created_at

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def tutor_id(self) -> TutorProfileId:
        return self._tutor_id

    @property
    def time_range(self) -> TimeRange:
        return self._time_range

    @property
    def start_time(self) -> datetime:
        return self._time_range.start

    @property
    def end_time(self) -> datetime:
        return self._time_range.end

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def is_booked_by(self, student_id: str) -> bool:
        return self._student_id == student_id

    def is_taught_by(self, tutor_id: TutorProfileId | None) -> bool:
        return tutor_id is not None and self._tutor_id == tutor_id

    def confirm(self) -> None:
        """講師が承認待ちの予約を確定する"""
        if self._status != BookingStatus.PENDING:
            raise InvalidTransitionException("Only pending bookings can be confirmed")
        self._change_status(BookingStatus.CONFIRMED)

    def complete(self) -> None:
        """授業を完了にする"""
        if self._status != BookingStatus.CONFIRMED:
            raise InvalidTransitionException(
                "Only confirmed bookings can be marked as completed"
            )
        self._change_status(BookingStatus.COMPLETED)

    def cancel(self) -> None:
        """予約をキャンセルする"""
        if not self._status.blocks_slot:
            raise InvalidTransitionException("Only confirmed bookings can be cancelled")
        self._change_status(BookingStatus.CANCELLED)

    def mark_deleted(self) -> None:
        """削除可能か確認し、削除イベントを記録する

        完了・キャンセル済みの予約は履歴として残すため削除できない。
        """
        if not self._status.blocks_slot:
            raise InvalidTransitionException("Only confirmed bookings can be deleted")
        self.record_event(BookingDeleted(aggregate_id=str(self.id)))

    def _change_status(self, status: BookingStatus) -> None:
        previous = self._status
        self._status = status
        self._updated_at = datetime.now(timezone.utc)
        self.record_event(
            BookingStatusChanged(
                aggregate_id=str(self.id), previous=previous, current=status
            )
        )
