import os
from enum import Enum
from typing import Callable

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.shared.domain import Actor
from services.shared.domain.exception import (
    ForbiddenException,
    InvalidTransitionException,
)
from services.tutor.domain.value_object import TutorProfileId


class ApprovalMode(str, Enum):
    """予約の確定方式

    INSTANT: 作成時点で CONFIRMED（既定）
    TUTOR_APPROVAL: 作成時点で PENDING、担当講師の承認で CONFIRMED
    """

    INSTANT = "instant"
    TUTOR_APPROVAL = "tutor_approval"

    @classmethod
    def from_env(cls) -> "ApprovalMode":
        return cls(os.getenv("BOOKING_APPROVAL_MODE", cls.INSTANT.value).lower())


class BookingLifecycle:
    """予約ステータスの状態遷移と、遷移を実行できるロールを管理する

    | 遷移先     | 実行できる人                 | 遷移元               |
    | COMPLETED  | 担当講師                     | CONFIRMED            |
    | CANCELLED  | 予約した生徒 / 管理者        | CONFIRMED (PENDING)  |
    | CONFIRMED  | 担当講師（承認モードのみ）   | PENDING              |
    上記以外はすべて InvalidTransitionException。
    """

    def __init__(self, mode: ApprovalMode = ApprovalMode.INSTANT) -> None:
        self._mode = mode
        self._rules: dict[
            BookingStatus,
            Callable[[Booking, Actor, TutorProfileId | None], None],
        ] = {
            BookingStatus.COMPLETED: self._complete,
            BookingStatus.CANCELLED: self._cancel,
            BookingStatus.CONFIRMED: self._confirm,
        }

    @property
    def mode(self) -> ApprovalMode:
        return self._mode

    @property
    def initial_status(self) -> BookingStatus:
        if self._mode == ApprovalMode.TUTOR_APPROVAL:
            return BookingStatus.PENDING
        return BookingStatus.CONFIRMED

    def transition(
        self,
        booking: Booking,
        actor: Actor,
        target: BookingStatus,
        actor_tutor_id: TutorProfileId | None = None,
    ) -> None:
        """ステータス遷移を検証して適用する

        actor_tutor_id: 講師が操作する場合、その講師のプロフィールID
        """
        rule = self._rules.get(target)
        if rule is None:
            raise InvalidTransitionException(
                f"Bookings cannot be moved to {target.value.lower()}"
            )
        rule(booking, actor, actor_tutor_id)

    def ensure_deletable(self, booking: Booking, actor: Actor) -> None:
        """削除は予約した生徒か管理者のみ、かつ確定済みの予約のみ"""
        if not actor.is_admin and not (
            actor.is_student and booking.is_booked_by(actor.id)
        ):
            raise ForbiddenException(
                "You don't have permission to delete this booking"
            )
        booking.mark_deleted()

    def _complete(
        self, booking: Booking, actor: Actor, actor_tutor_id: TutorProfileId | None
    ) -> None:
        if not actor.is_tutor:
            raise InvalidTransitionException(
                "Only tutors can mark sessions as completed"
            )
        if not booking.is_taught_by(actor_tutor_id):
            raise InvalidTransitionException(
                "You can only mark your own sessions as completed"
            )
        booking.complete()

    def _cancel(
        self, booking: Booking, actor: Actor, actor_tutor_id: TutorProfileId | None
    ) -> None:
        if actor.is_tutor:
            raise InvalidTransitionException(
                "Only students or admins can cancel bookings"
            )
        if not actor.is_admin and not booking.is_booked_by(actor.id):
            raise InvalidTransitionException("You can only cancel your own bookings")
        booking.cancel()

    def _confirm(
        self, booking: Booking, actor: Actor, actor_tutor_id: TutorProfileId | None
    ) -> None:
        if self._mode == ApprovalMode.INSTANT:
            raise InvalidTransitionException(
                "Bookings are confirmed on creation and cannot be confirmed again"
            )
        if not actor.is_tutor:
            raise InvalidTransitionException("Only tutors can confirm bookings")
        if not booking.is_taught_by(actor_tutor_id):
            raise InvalidTransitionException("You can only confirm your own sessions")
        booking.confirm()
