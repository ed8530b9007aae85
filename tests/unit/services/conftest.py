import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from services.shared.domain import Actor, Role

# ハンドラはインポート時にリポジトリを生成するため、先に環境変数を設定する
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-1")
os.environ.setdefault("TABLE_NAME", "tutoring-table-test")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "tutoring-booking")


@dataclass
class LambdaContext:
    function_name: str = "test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:ap-northeast-1:123456789012:function:test"
    aws_request_id: str = "da658bd3-2d6f-4e7b-8ec2-937234644fdc"


@pytest.fixture
def lambda_context():
    return LambdaContext()


@pytest.fixture
def make_event():
    """API Gateway プロキシイベントを生成する Factory fixture"""

    def _factory(
        actor: Actor | None = None,
        body: dict | None = None,
        path_parameters: dict | None = None,
    ) -> dict:
        claims = {"sub": actor.id, "custom:role": actor.role.value} if actor else {}
        return {
            "body": json.dumps(body) if body is not None else None,
            "pathParameters": path_parameters,
            "requestContext": {"authorizer": {"claims": claims}},
        }

    return _factory


@pytest.fixture
def now():
    """テスト共通の現在時刻"""
    return datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def student():
    return Actor(id="student-1", role=Role.STUDENT)


@pytest.fixture
def other_student():
    return Actor(id="student-2", role=Role.STUDENT)


@pytest.fixture
def tutor_user():
    """講師プロフィール tutor-1 を持つ講師"""
    return Actor(id="tutor-user-1", role=Role.TUTOR)


@pytest.fixture
def other_tutor_user():
    """講師プロフィール tutor-2 を持つ講師"""
    return Actor(id="tutor-user-2", role=Role.TUTOR)


@pytest.fixture
def admin():
    return Actor(id="admin-1", role=Role.ADMIN)


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()
