from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingRepository
from services.shared.domain import TimeRange
from services.shared.domain.exception import ConflictException
from services.tutor.domain.value_object import TutorProfileId


class OverlapDetector:
    """講師の既存予約との時間帯の重複を検出するドメインサービス"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def find_conflict(
        self, tutor_id: TutorProfileId, time_range: TimeRange
    ) -> Booking | None:
        """重複する予約のうち、保存順で最初のものを返す"""
        for booking in self._repository.find_slot_holders(tutor_id):
            if booking.status.blocks_slot and booking.time_range.overlaps(time_range):
                return booking
        return None

    def ensure_available(self, tutor_id: TutorProfileId, time_range: TimeRange) -> None:
        conflict = self.find_conflict(tutor_id, time_range)
        if conflict is not None:
            raise ConflictException(
                f"This tutor is already booked from "
                f"{conflict.time_range.format_window()}. "
                "Please choose a different time slot."
            )
