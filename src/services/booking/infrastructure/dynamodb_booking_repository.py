import os
from datetime import datetime, timezone

import boto3
from boto3.dynamodb.conditions import Key
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain import TimeRange
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from services.tutor.domain.value_object import TutorProfileId

_serializer = TypeSerializer()

ALL_BOOKINGS_PK = "BOOKINGS"


def _serialize(item: dict) -> dict:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def _utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


def _sort_key(booking: Booking) -> str:
    return f"START#{_utc_iso(booking.start_time)}#{booking.id}"


def booking_key(booking_id: BookingId | str) -> dict:
    return {"PK": f"BOOKING#{booking_id}", "SK": "BOOKING"}


def slot_key(booking: Booking) -> dict:
    return {"PK": f"TUTOR#{booking.tutor_id}", "SK": f"SLOT#{_sort_key(booking)}"}


def schedule_key(tutor_id: TutorProfileId | str) -> dict:
    return {"PK": f"TUTOR#{tutor_id}", "SK": "SCHEDULE"}


def _cancellation_codes(error: ClientError) -> list[str | None]:
    return [r.get("Code") for r in error.response.get("CancellationReasons", [])]


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    予約ごとに2つのアイテムを書き込む:
    - 予約本体 (BOOKING#<id>): ID 検索・GSI による一覧取得用
    - 講師パーティション内の枠 (TUTOR#<tutor_id> / SLOT#...): 強い整合性での重複チェック用
    新規作成時は講師のスケジュールアイテムのバージョンを同じトランザクションで更新し、
    重複チェックから書き込みまでの間に他の予約が入った場合はトランザクションを失敗させる。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = boto3.client("dynamodb")

    def get_schedule_version(self, tutor_id: TutorProfileId) -> int:
        response = self.table.get_item(Key=schedule_key(tutor_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return 0
        return int(item.get("version", 0))

    def save(self, booking: Booking, expected_schedule_version: int = 0) -> None:
        """予約・講師枠・スケジュールバージョンを1トランザクションで書き込む"""
        attributes = self._to_attributes(booking)
        sort_key = _sort_key(booking)
        item = {
            **booking_key(booking.id),
            **attributes,
            "GSI1PK": f"TUTOR#{booking.tutor_id}",
            "GSI1SK": sort_key,
            "GSI2PK": f"STUDENT#{booking.student_id}",
            "GSI2SK": sort_key,
            "GSI3PK": ALL_BOOKINGS_PK,
            "GSI3SK": sort_key,
        }
        slot = {**slot_key(booking), **attributes, "entity_type": "BOOKING_SLOT"}

        if expected_schedule_version == 0:
            version_condition = "attribute_not_exists(version)"
            condition_values: dict = {":next": 1}
        else:
            version_condition = "version = :expected"
            condition_values = {
                ":expected": expected_schedule_version,
                ":next": expected_schedule_version + 1,
            }

        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": _serialize(item),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": _serialize(slot),
                        }
                    },
                    {
                        "Update": {
                            "TableName": self.table_name,
                            "Key": _serialize(schedule_key(booking.tutor_id)),
                            "UpdateExpression": "SET version = :next",
                            "ConditionExpression": version_condition,
                            "ExpressionAttributeValues": _serialize(condition_values),
                        }
                    },
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            codes = _cancellation_codes(e)
            if codes and codes[0] == "ConditionalCheckFailed":
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                ) from e
            raise OptimisticLockException(
                "Tutor schedule changed: "
                f"expected version {expected_schedule_version}, "
                f"tutor_id={booking.tutor_id}"
            ) from e

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索"""
        response = self.table.get_item(Key=booking_key(booking_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_slot_holders(self, tutor_id: TutorProfileId) -> list[Booking]:
        items = self._query_all(
            KeyConditionExpression=Key("PK").eq(f"TUTOR#{tutor_id}")
            & Key("SK").begins_with("SLOT#"),
            ConsistentRead=True,
        )
        bookings = [self._to_entity(item) for item in items]
        return [b for b in bookings if b.status.blocks_slot]

    def find_by_tutor(self, tutor_id: TutorProfileId) -> list[Booking]:
        return self._query_index("GSI1", "GSI1PK", f"TUTOR#{tutor_id}")

    def find_by_student(self, student_id: str) -> list[Booking]:
        return self._query_index("GSI2", "GSI2PK", f"STUDENT#{student_id}")

    def find_all(self) -> list[Booking]:
        return self._query_index("GSI3", "GSI3PK", ALL_BOOKINGS_PK)

    def update_status(self, booking: Booking, expected_status: BookingStatus) -> None:
        """予約本体のステータスを更新する

        枠を占有し続けるステータスなら講師枠も更新し、
        キャンセル・完了なら講師枠を削除する。
        """
        values = _serialize(
            {
                ":status": booking.status.value,
                ":updated_at": booking.updated_at.isoformat(),
                ":expected": expected_status.value,
            }
        )
        update = {
            "UpdateExpression": "SET #status = :status, updated_at = :updated_at",
            "ConditionExpression": "#status = :expected",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": values,
        }
        slot_target = {
            "TableName": self.table_name,
            "Key": _serialize(slot_key(booking)),
        }
        if booking.status.blocks_slot:
            slot_item = {"Update": {**slot_target, **update}}
        else:
            slot_item = {"Delete": slot_target}

        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Update": {
                            "TableName": self.table_name,
                            "Key": _serialize(booking_key(booking.id)),
                            **update,
                        }
                    },
                    slot_item,
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                ) from e
            raise

    def delete(self, booking: Booking, expected_status: BookingStatus) -> None:
        """予約本体と講師枠を削除する"""
        condition = {
            "ConditionExpression": "#status = :expected",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": _serialize(
                {":expected": expected_status.value}
            ),
        }
        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Delete": {
                            "TableName": self.table_name,
                            "Key": _serialize(booking_key(booking.id)),
                            **condition,
                        }
                    },
                    {
                        "Delete": {
                            "TableName": self.table_name,
                            "Key": _serialize(slot_key(booking)),
                        }
                    },
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                ) from e
            raise

    def _query_index(self, index_name: str, key_name: str, value: str) -> list[Booking]:
        items = self._query_all(
            IndexName=index_name,
            KeyConditionExpression=Key(key_name).eq(value),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def _query_all(self, **kwargs) -> list[dict]:
        """ページングしながらすべてのアイテムを取得する"""
        items: list[dict] = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def _to_attributes(self, booking: Booking) -> dict:
        return {
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "student_id": booking.student_id,
            "tutor_id": str(booking.tutor_id),
            "start_time": booking.start_time.isoformat(),
            "end_time": booking.end_time.isoformat(),
            "status": booking.status.value,
            "created_at": booking.created_at.isoformat(),
            "updated_at": booking.updated_at.isoformat(),
        }

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Booking(
            id=BookingId(value=item["booking_id"]),
            student_id=item["student_id"],
            tutor_id=TutorProfileId(value=item["tutor_id"]),
            time_range=TimeRange.from_iso(item["start_time"], item["end_time"]),
            status=BookingStatus(item["status"]),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )
