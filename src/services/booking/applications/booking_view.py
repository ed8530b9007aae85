from dataclasses import dataclass
from decimal import Decimal

from services.booking.domain.entity import Booking


@dataclass(frozen=True)
class StudentSummary:
    id: str
    name: str
    email: str


@dataclass(frozen=True)
class TutorSummary:
    id: str
    user_id: str
    name: str
    email: str
    hourly_rate: Decimal


@dataclass(frozen=True)
class BookingView:
    """表示用の情報（生徒・講師）を付与した予約"""

    booking: Booking
    student: StudentSummary | None
    tutor: TutorSummary | None
