import os

import boto3

from services.shared.domain import Role
from services.user.domain.entity import User
from services.user.domain.enum import UserStatus
from services.user.domain.repository import UserRepository


def user_key(user_id: str) -> dict:
    return {"PK": f"USER#{user_id}", "SK": "PROFILE"}


class DynamoDBUserRepository(UserRepository):
    """DynamoDBを使用したUserRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def find_by_id(self, user_id: str) -> User | None:
        """ユーザーIDで検索"""
        response = self.table.get_item(Key=user_key(user_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def _to_entity(self, item: dict) -> User:
        return User(
            id=item["user_id"],
            name=item.get("name", ""),
            email=item.get("email", ""),
            role=Role(item.get("role", Role.STUDENT.value)),
            status=UserStatus(item.get("status", UserStatus.ACTIVE.value)),
        )
