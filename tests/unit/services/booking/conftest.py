import threading
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from services.booking.applications.booking_service import BookingService
from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.factory import BookingFactory
from services.booking.domain.repository import BookingRepository
from services.booking.domain.service import ApprovalMode, BookingLifecycle
from services.booking.domain.value_object import BookingId
from services.shared.domain import Role, TimeRange
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from services.tutor.domain.entity import TutorProfile
from services.tutor.domain.repository import TutorProfileRepository
from services.tutor.domain.value_object import TutorProfileId
from services.user.domain.entity import User
from services.user.domain.repository import UserRepository


def at(hour: int, minute: int = 0, day: int = 6) -> datetime:
    """2025年1月の UTC 日時（既定は 6 日の月曜日）"""
    return datetime(2025, 1, day, hour, minute, tzinfo=timezone.utc)


class InMemoryBookingRepository(BookingRepository):
    """スレッドセーフなインメモリ実装

    save() は DynamoDB 実装と同じくスケジュールバージョンで書き込みを直列化する。
    update_status() / delete() は確定済みステータスを条件に書き込む。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bookings: dict[BookingId, Booking] = {}
        self._committed: dict[BookingId, BookingStatus] = {}
        self._versions: dict[TutorProfileId, int] = {}
        self.save_calls = 0

    def get_schedule_version(self, tutor_id: TutorProfileId) -> int:
        with self._lock:
            return self._versions.get(tutor_id, 0)

    def save(self, booking: Booking, expected_schedule_version: int = 0) -> None:
        with self._lock:
            self.save_calls += 1
            if booking.id in self._bookings:
                raise DuplicateResourceException(f"Booking already exists: {booking.id}")
            current = self._versions.get(booking.tutor_id, 0)
            if current != expected_schedule_version:
                raise OptimisticLockException("Tutor schedule changed")
            self._bookings[booking.id] = booking
            self._committed[booking.id] = booking.status
            self._versions[booking.tutor_id] = current + 1

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def find_slot_holders(self, tutor_id: TutorProfileId) -> list[Booking]:
        with self._lock:
            return [
                b
                for b in self._bookings.values()
                if b.tutor_id == tutor_id and b.status.blocks_slot
            ]

    def find_by_tutor(self, tutor_id: TutorProfileId) -> list[Booking]:
        with self._lock:
            return [b for b in self._bookings.values() if b.tutor_id == tutor_id]

    def find_by_student(self, student_id: str) -> list[Booking]:
        with self._lock:
            return [b for b in self._bookings.values() if b.student_id == student_id]

    def find_all(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def update_status(self, booking: Booking, expected_status: BookingStatus) -> None:
        with self._lock:
            self._check_status(booking, expected_status)
            self._bookings[booking.id] = booking
            self._committed[booking.id] = booking.status

    def delete(self, booking: Booking, expected_status: BookingStatus) -> None:
        with self._lock:
            self._check_status(booking, expected_status)
            self._bookings.pop(booking.id)
            self._committed.pop(booking.id)

    def add(self, booking: Booking) -> Booking:
        """テスト用: バージョンを進めずに予約を直接登録する"""
        with self._lock:
            self._bookings[booking.id] = booking
            self._committed[booking.id] = booking.status
        return booking

    def commit_status(self, booking_id: BookingId, status: BookingStatus) -> None:
        """テスト用: 別のリクエストがステータスを書き込んだ状態を再現する"""
        with self._lock:
            self._committed[booking_id] = status

    def _check_status(self, booking: Booking, expected_status: BookingStatus) -> None:
        if self._committed.get(booking.id) != expected_status:
            raise OptimisticLockException(
                f"Booking status conflict: expected {expected_status}, "
                f"booking_id={booking.id}"
            )


class InMemoryTutorProfileRepository(TutorProfileRepository):
    def __init__(
        self,
        profiles: list[TutorProfile],
        users: "InMemoryUserRepository | None" = None,
    ) -> None:
        self._profiles = {p.id: p for p in profiles}
        self._users = users

    def find_by_id(self, tutor_id: TutorProfileId) -> TutorProfile | None:
        return self._profiles.get(tutor_id)

    def find_by_user_id(self, user_id: str) -> TutorProfile | None:
        return next((p for p in self._profiles.values() if p.is_owned_by(user_id)), None)

    def create_with_role_promotion(self, profile: TutorProfile) -> None:
        self._profiles[profile.id] = profile
        if self._users is not None:
            self._users.promote_to_tutor(profile.user_id)


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: list[User]) -> None:
        self._users = {u.id: u for u in users}

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def promote_to_tutor(self, user_id: str) -> None:
        user = self._users[user_id]
        self._users[user_id] = User(
            id=user.id, name=user.name, email=user.email, role=Role.TUTOR
        )


@pytest.fixture
def tutor_id():
    return TutorProfileId(value="tutor-1")


@pytest.fixture
def other_tutor_id():
    return TutorProfileId(value="tutor-2")


@pytest.fixture
def create_tutor_profile():
    """TutorProfile を生成する Factory fixture"""

    def _factory(
        tutor_id: str = "tutor-1",
        user_id: str = "tutor-user-1",
        availability: str | None = None,
        hourly_rate: Decimal = Decimal("40.00"),
    ) -> TutorProfile:
        return TutorProfile(
            id=TutorProfileId(value=tutor_id),
            user_id=user_id,
            hourly_rate=hourly_rate,
            experience=5,
            availability=availability,
            bio="Math tutor",
            subjects=("math",),
        )

    return _factory


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        booking_id: str = "booking-1",
        student_id: str = "student-1",
        tutor_id: str = "tutor-1",
        start: datetime | None = None,
        end: datetime | None = None,
        status: BookingStatus = BookingStatus.CONFIRMED,
    ) -> Booking:
        start = start or at(14)
        end = end or at(15)
        return Booking(
            id=BookingId(value=booking_id),
            student_id=student_id,
            tutor_id=TutorProfileId(value=tutor_id),
            time_range=TimeRange(start=start, end=end),
            status=status,
            created_at=at(9, day=1),
        )

    return _factory


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def tutor_profile_repository(create_tutor_profile, user_repository):
    return InMemoryTutorProfileRepository(
        [
            create_tutor_profile(),
            create_tutor_profile(
                tutor_id="tutor-2",
                user_id="tutor-user-2",
                availability="Mon-Thu, 9am-5pm",
            ),
        ],
        users=user_repository,
    )


@pytest.fixture
def user_repository():
    return InMemoryUserRepository(
        [
            User(id="student-1", name="Sam Student", email="sam@example.com"),
            User(id="student-2", name="Alex Student", email="alex@example.com"),
            User(
                id="tutor-user-1",
                name="Tina Tutor",
                email="tina@example.com",
                role=Role.TUTOR,
            ),
            User(
                id="tutor-user-2",
                name="Ted Tutor",
                email="ted@example.com",
                role=Role.TUTOR,
            ),
        ]
    )


@pytest.fixture
def create_service(booking_repository, tutor_profile_repository, user_repository, now):
    """BookingService を生成する Factory fixture"""

    def _factory(mode: ApprovalMode = ApprovalMode.INSTANT) -> BookingService:
        return BookingService(
            repository=booking_repository,
            tutor_profile_repository=tutor_profile_repository,
            user_repository=user_repository,
            factory=BookingFactory(),
            lifecycle=BookingLifecycle(mode=mode),
            clock=lambda: now,
        )

    return _factory


@pytest.fixture
def service(create_service):
    return create_service()
