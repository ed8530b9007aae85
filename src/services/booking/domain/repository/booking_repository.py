from abc import abstractmethod

from services.booking.domain.entity.booking import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object.booking_id import BookingId
from services.shared.domain import Repository
from services.tutor.domain.value_object import TutorProfileId


class BookingRepository(Repository[Booking, BookingId]):
    """予約リポジトリのインターフェース

    同一講師への予約の書き込みは、講師ごとのスケジュールバージョンで直列化する。
    save() は読み取ったバージョンが変わっていれば OptimisticLockException を送出し、
    重複する予約が同時に確定することを防ぐ。
    """

    @abstractmethod
    def get_schedule_version(self, tutor_id: TutorProfileId) -> int:
        """講師のスケジュールバージョンを取得する（未作成なら 0）"""
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking, expected_schedule_version: int = 0) -> None:
        """新規予約を保存し、スケジュールバージョンを1つ進める"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_slot_holders(self, tutor_id: TutorProfileId) -> list[Booking]:
        """時間枠を確保している予約（PENDING / CONFIRMED）を保存順で取得する

        強い整合性の読み取りで取得すること。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_tutor(self, tutor_id: TutorProfileId) -> list[Booking]:
        """講師の予約をすべて取得する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_student(self, student_id: str) -> list[Booking]:
        """生徒の予約をすべて取得する"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Booking]:
        """すべての予約を取得する"""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, booking: Booking, expected_status: BookingStatus) -> None:
        """ステータスを更新する（現在値が expected_status の場合のみ）"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking: Booking, expected_status: BookingStatus) -> None:
        """予約を削除する（現在値が expected_status の場合のみ）"""
        raise NotImplementedError
