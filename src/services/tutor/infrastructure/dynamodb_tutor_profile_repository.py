import os
from decimal import Decimal

import boto3
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from services.shared.domain import Role
from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from services.tutor.domain.entity import TutorProfile
from services.tutor.domain.repository import TutorProfileRepository
from services.tutor.domain.value_object import TutorProfileId
from services.user.infrastructure.dynamodb_user_repository import user_key

_serializer = TypeSerializer()


def _serialize(item: dict) -> dict:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def profile_key(tutor_id: TutorProfileId | str) -> dict:
    return {"PK": f"TUTOR#{tutor_id}", "SK": "PROFILE"}


def profile_marker_key(user_id: str) -> dict:
    return {"PK": f"USER#{user_id}", "SK": "TUTOR_PROFILE"}


class DynamoDBTutorProfileRepository(TutorProfileRepository):
    """DynamoDBを使用したTutorProfileRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = boto3.client("dynamodb")

    def find_by_id(self, tutor_id: TutorProfileId) -> TutorProfile | None:
        """プロフィールIDで検索"""
        response = self.table.get_item(Key=profile_key(tutor_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_user_id(self, user_id: str) -> TutorProfile | None:
        """ユーザーIDで検索（ユーザーごとのマーカー経由）"""
        response = self.table.get_item(
            Key=profile_marker_key(user_id), ConsistentRead=True
        )
        marker = response.get("Item")
        if not marker:
            return None
        return self.find_by_id(TutorProfileId(value=marker["tutor_id"]))

    def create_with_role_promotion(self, profile: TutorProfile) -> None:
        """プロフィール・ユーザーマーカー・ロール更新を1トランザクションで書き込む"""
        item = {
            **profile_key(profile.id),
            "entity_type": "TUTOR_PROFILE",
            "tutor_id": str(profile.id),
            "user_id": profile.user_id,
            "hourly_rate": str(profile.hourly_rate),
            "experience": profile.experience,
            "bio": profile.bio,
            "subjects": list(profile.subjects),
        }
        if profile.availability is not None:
            item["availability"] = profile.availability

        marker = {
            **profile_marker_key(profile.user_id),
            "entity_type": "TUTOR_PROFILE_MARKER",
            "tutor_id": str(profile.id),
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
                            "Item": _serialize(marker),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {
                        "Update": {
                            "TableName": self.table_name,
                            "Key": _serialize(user_key(profile.user_id)),
                            "UpdateExpression": "SET #role = :role",
                            "ConditionExpression": "attribute_exists(PK)",
                            "ExpressionAttributeNames": {"#role": "role"},
                            "ExpressionAttributeValues": _serialize(
                                {":role": Role.TUTOR.value}
                            ),
                        }
                    },
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            reasons = [r.get("Code") for r in e.response.get("CancellationReasons", [])]
            if len(reasons) > 2 and reasons[2] == "ConditionalCheckFailed":
                raise ResourceNotFoundException("User not found") from e
            raise DuplicateResourceException("User already has a tutor profile") from e

    def _to_entity(self, item: dict) -> TutorProfile:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return TutorProfile(
            id=TutorProfileId(value=item["tutor_id"]),
            user_id=item["user_id"],
            hourly_rate=Decimal(str(item["hourly_rate"])),
            experience=int(item.get("experience", 0)),
            availability=item.get("availability"),
            bio=item.get("bio", ""),
            subjects=tuple(item.get("subjects", [])),
        )
