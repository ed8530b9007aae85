from dataclasses import dataclass
from enum import Enum

from services.booking.domain.entity import Booking
from services.shared.domain import Actor
from services.shared.domain.exception import (
    ForbiddenException,
    ResourceNotFoundException,
)
from services.tutor.domain.repository import TutorProfileRepository
from services.tutor.domain.value_object import TutorProfileId


class ScopeKind(str, Enum):
    ALL = "ALL"
    TUTOR = "TUTOR"
    STUDENT = "STUDENT"


@dataclass(frozen=True)
class ListScope:
    """一覧取得で見える範囲"""

    kind: ScopeKind
    key: str | None = None


class AccessPolicy:
    """予約の閲覧可否を判定する

    - 管理者: すべて
    - 講師: 自分の講師プロフィールに紐づく予約
    - 生徒: 自分が予約したもの
    更新・削除の可否は BookingLifecycle 側で判定する。
    """

    def __init__(self, tutor_profile_repository: TutorProfileRepository) -> None:
        self._tutor_profiles = tutor_profile_repository

    def ensure_can_book(self, actor: Actor) -> None:
        if not actor.is_student:
            raise ForbiddenException("Only students can create bookings")

    def tutor_id_of(self, actor: Actor) -> TutorProfileId | None:
        """講師の場合、その講師プロフィールIDを返す"""
        if not actor.is_tutor:
            return None
        profile = self._tutor_profiles.find_by_user_id(actor.id)
        return profile.id if profile is not None else None

    def list_scope(self, actor: Actor) -> ListScope:
        if actor.is_admin:
            return ListScope(kind=ScopeKind.ALL)
        if actor.is_tutor:
            tutor_id = self.tutor_id_of(actor)
            if tutor_id is None:
                raise ResourceNotFoundException("Tutor profile not found")
            return ListScope(kind=ScopeKind.TUTOR, key=str(tutor_id))
        return ListScope(kind=ScopeKind.STUDENT, key=actor.id)

    def ensure_can_view(self, actor: Actor, booking: Booking) -> None:
        if not is_visible(actor, booking, self.tutor_id_of(actor)):
            raise ForbiddenException("You don't have permission to view this booking")


def is_visible(
    actor: Actor, booking: Booking, actor_tutor_id: TutorProfileId | None
) -> bool:
    """actor が booking を閲覧できるか"""
    if actor.is_admin:
        return True
    if actor.is_tutor:
        return booking.is_taught_by(actor_tutor_id)
    return booking.is_booked_by(actor.id)
