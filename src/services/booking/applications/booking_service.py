from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from aws_lambda_powertools import Logger

from services.booking.applications.booking_view import (
    BookingView,
    StudentSummary,
    TutorSummary,
)
from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.factory import BookingFactory
from services.booking.domain.repository import BookingRepository
from services.booking.domain.service import (
    AccessPolicy,
    AvailabilityFilter,
    BookingLifecycle,
    OverlapDetector,
    ScopeKind,
)
from services.booking.domain.value_object import BookingId
from services.shared.domain import Actor, TimeRange
from services.shared.domain.exception import (
    ConflictException,
    InvalidTransitionException,
    OptimisticLockException,
    ResourceNotFoundException,
    ValidationException,
)
from services.tutor.domain.repository import TutorProfileRepository
from services.tutor.domain.value_object import TutorProfileId
from services.user.domain.repository import UserRepository

logger = Logger(child=True)

# 書き込み競合時に重複チェックをやり直す回数
RACE_RETRIES = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingService:
    """予約のユースケース

    作成: 講師の存在 → 時間帯の妥当性 → 未来日時 → 重複 → 空き状況 の順に検証する。
    参照: AccessPolicy で閲覧範囲を絞る。
    ステータス変更・削除: BookingLifecycle で遷移と実行者を検証する。
    """

    def __init__(
        self,
        repository: BookingRepository,
        tutor_profile_repository: TutorProfileRepository,
        user_repository: UserRepository,
        factory: BookingFactory,
        lifecycle: BookingLifecycle,
        availability_filter: AvailabilityFilter | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._tutor_profiles = tutor_profile_repository
        self._users = user_repository
        self._factory = factory
        self._lifecycle = lifecycle
        self._availability_filter = availability_filter or AvailabilityFilter()
        self._overlap_detector = OverlapDetector(repository)
        self._access_policy = AccessPolicy(tutor_profile_repository)
        self._clock = clock

    @property
    def access_policy(self) -> AccessPolicy:
        return self._access_policy

    def create(
        self, student_id: str, tutor_id: TutorProfileId, time_range: TimeRange
    ) -> BookingView:
        """予約を作成する"""
        tutor = self._tutor_profiles.find_by_id(tutor_id)
        if tutor is None:
            raise ResourceNotFoundException("Tutor not found")

        if not time_range.is_valid():
            raise ValidationException("End time must be after start time")

        now = self._clock()
        if not time_range.is_future(now):
            raise ValidationException("Booking must be in the future")

        for attempt in range(RACE_RETRIES + 1):
            version = self._repository.get_schedule_version(tutor_id)
            self._overlap_detector.ensure_available(tutor_id, time_range)
            self._availability_filter.check(time_range, tutor.availability)

            booking = self._factory.create(
                student_id=student_id,
                tutor_id=tutor_id,
                time_range=time_range,
                status=self._lifecycle.initial_status,
                now=now,
            )
            try:
                self._repository.save(booking, expected_schedule_version=version)
            except OptimisticLockException:
                logger.warning(
                    "Tutor schedule changed during booking",
                    extra={"tutor_id": str(tutor_id), "attempt": attempt + 1},
                )
                continue

            self._log_events(booking)
            return self._to_view(booking)

        raise ConflictException(
            "This tutor was just booked for an overlapping time. "
            "Please choose a different time slot."
        )

    def get(self, booking_id: BookingId, actor: Actor) -> BookingView | None:
        """予約を1件取得する（存在しなければ None）"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            return None
        self._access_policy.ensure_can_view(actor, booking)
        return self._to_view(booking)

    def list(self, actor: Actor) -> list[BookingView]:
        """actor が閲覧できる予約を開始日時の降順で取得する"""
        scope = self._access_policy.list_scope(actor)
        if scope.kind == ScopeKind.ALL:
            bookings = self._repository.find_all()
        elif scope.kind == ScopeKind.TUTOR:
            bookings = self._repository.find_by_tutor(TutorProfileId(value=scope.key))
        else:
            bookings = self._repository.find_by_student(scope.key)
        return self._to_views(bookings)

    def list_booked_slots(self, tutor_id: TutorProfileId) -> list[BookingView]:
        """講師の予約済み枠を取得する（公開用）"""
        if self._tutor_profiles.find_by_id(tutor_id) is None:
            raise ResourceNotFoundException("Tutor not found")
        return self._to_views(self._repository.find_by_tutor(tutor_id))

    def change_status(
        self, booking_id: BookingId, actor: Actor, target: BookingStatus
    ) -> BookingView:
        """予約ステータスを変更する"""
        booking = self._get_or_raise(booking_id)
        expected_status = booking.status

        actor_tutor_id = self._access_policy.tutor_id_of(actor)
        self._lifecycle.transition(
            booking, actor, target, actor_tutor_id=actor_tutor_id
        )
        try:
            self._repository.update_status(booking, expected_status=expected_status)
        except OptimisticLockException as e:
            raise InvalidTransitionException(
                f"Booking is no longer {expected_status.value.lower()}"
            ) from e

        self._log_events(booking)
        return self._to_view(booking)

    def delete(self, booking_id: BookingId, actor: Actor) -> None:
        """予約を削除する"""
        booking = self._get_or_raise(booking_id)
        self._lifecycle.ensure_deletable(booking, actor)
        try:
            self._repository.delete(booking, expected_status=booking.status)
        except OptimisticLockException as e:
            raise InvalidTransitionException(
                "Only confirmed bookings can be deleted"
            ) from e
        self._log_events(booking)

    def _get_or_raise(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException("Booking not found")
        return booking

    def _log_events(self, booking: Booking) -> None:
        for event in booking.pull_events():
            logger.info(event.name, extra={"booking_id": str(booking.id)})

    def _to_views(self, bookings: list[Booking]) -> list[BookingView]:
        ordered = sorted(bookings, key=lambda b: b.start_time, reverse=True)
        students: dict[str, StudentSummary | None] = {}
        tutors: dict[TutorProfileId, TutorSummary | None] = {}
        return [self._to_view(b, students, tutors) for b in ordered]

    def _to_view(
        self,
        booking: Booking,
        students: dict[str, StudentSummary | None] | None = None,
        tutors: dict[TutorProfileId, TutorSummary | None] | None = None,
    ) -> BookingView:
        students = {} if students is None else students
        tutors = {} if tutors is None else tutors

        if booking.student_id not in students:
            students[booking.student_id] = self._student_summary(booking.student_id)
        if booking.tutor_id not in tutors:
            tutors[booking.tutor_id] = self._tutor_summary(booking.tutor_id)

        return BookingView(
            booking=booking,
            student=students[booking.student_id],
            tutor=tutors[booking.tutor_id],
        )

    def _student_summary(self, student_id: str) -> StudentSummary | None:
        user = self._users.find_by_id(student_id)
        if user is None:
            return None
        return StudentSummary(id=user.id, name=user.name, email=user.email)

    def _tutor_summary(self, tutor_id: TutorProfileId) -> TutorSummary | None:
        profile = self._tutor_profiles.find_by_id(tutor_id)
        if profile is None:
            return None
        user = self._users.find_by_id(profile.user_id)
        return TutorSummary(
            id=str(profile.id),
            user_id=profile.user_id,
            name=user.name if user else "",
            email=user.email if user else "",
            hourly_rate=profile.hourly_rate,
        )
