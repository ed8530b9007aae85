from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス

    CANCELLED / COMPLETED は終端状態。
    PENDING は講師承認モードでのみ使われる。
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)

    @property
    def blocks_slot(self) -> bool:
        """時間枠を確保している状態かどうか"""
        return self in (BookingStatus.PENDING, BookingStatus.CONFIRMED)
